"""Physical line counting.

Every line lands in exactly one of blank, comment or code. Lines inside a
block comment that start with ``*`` are comments only. Counters that
exclude only ``//`` and ``/*`` lines from code also count them as code;
against those, ``code`` here is lower for files with long JSDoc blocks
and the maintainability index built on it is higher.
"""

from __future__ import annotations

from .models import LineCounts

COMMENT_PREFIXES = ("//", "/*", "*")


def count_lines(source_text: str) -> LineCounts:
    """Classify every line as blank, comment or code.

    A line is a comment when its trimmed text starts with ``//``, ``/*``
    or ``*`` (block comment continuation). Trailing comments after code
    leave the line counted as code.
    """
    total = code = comment = blank = 0
    for line in source_text.split("\n"):
        total += 1
        stripped = line.strip()
        if not stripped:
            blank += 1
        elif stripped.startswith(COMMENT_PREFIXES):
            comment += 1
        else:
            code += 1
    return LineCounts(total=total, code=code, comment=comment, blank=blank)
