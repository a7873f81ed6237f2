"""Language routing for the parser adapter.

Maps the language hints callers send (project settings, file extensions)
onto the tree-sitter grammar that parses them. Only ECMAScript-family
syntax is supported.
"""

from pathlib import Path
from typing import Optional

# Grammar names understood by TreeSitterParser
JAVASCRIPT = "javascript"
TYPESCRIPT = "typescript"
TSX = "tsx"

# Language hint -> grammar
LANGUAGE_ALIASES = {
    "javascript": JAVASCRIPT,
    "js": JAVASCRIPT,
    "jsx": JAVASCRIPT,
    "mjs": JAVASCRIPT,
    "cjs": JAVASCRIPT,
    "typescript": TYPESCRIPT,
    "ts": TYPESCRIPT,
    "mts": TYPESCRIPT,
    "cts": TYPESCRIPT,
    "tsx": TSX,
}

EXTENSIONS = {
    ".js": JAVASCRIPT,
    ".jsx": JAVASCRIPT,
    ".mjs": JAVASCRIPT,
    ".cjs": JAVASCRIPT,
    ".ts": TYPESCRIPT,
    ".mts": TYPESCRIPT,
    ".cts": TYPESCRIPT,
    ".tsx": TSX,
}


def resolve_grammar(language: str) -> Optional[str]:
    """Grammar name for a language hint, None if unsupported.

    Hints are case-insensitive and may carry a leading dot.
    """
    key = language.strip().lower().lstrip(".")
    return LANGUAGE_ALIASES.get(key)


def detect_language(path: Path) -> Optional[str]:
    """Grammar name for a file path based on its extension."""
    return EXTENSIONS.get(path.suffix.lower())


def supported_hints() -> list[str]:
    """All accepted language hints, sorted."""
    return sorted(LANGUAGE_ALIASES)
