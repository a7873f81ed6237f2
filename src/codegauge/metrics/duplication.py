"""Line-based duplicate block detection.

Lines are trimmed and blank lines dropped; the remaining list ``L`` is
compared against itself. For every pair of start positions ``i < j`` at
least ``min_block_lines`` apart, the match is extended while
``L[i+k] == L[j+k]``; runs of ``min_block_lines`` or more are recorded.

A pair whose previous lines also match is the tail of a longer run that
was already recorded from an earlier start, and is skipped. Distinct
recorded blocks can still overlap (three copies of a block give three
pairs); their lengths are summed as-is.

Scaling limit: O(n^2 * k) in the number of non-blank lines. Callers guard
large inputs (see ``MetricsConfig.max_duplication_lines``).
"""

from __future__ import annotations

from collections import defaultdict

from ..exceptions import MetricsError
from .constants import MIN_DUPLICATE_BLOCK_LINES
from .models import DuplicateBlock, DuplicationReport, LineRange
from .rounding import round_half_up


def non_blank_lines(source_text: str) -> list[tuple[int, str]]:
    """Trimmed non-blank lines with their 1-based source line numbers."""
    result = []
    for number, line in enumerate(source_text.split("\n"), start=1):
        stripped = line.strip()
        if stripped:
            result.append((number, stripped))
    return result


def detect_duplication(
    source_text: str, min_block_lines: int = MIN_DUPLICATE_BLOCK_LINES
) -> DuplicationReport:
    """Find repeated runs of at least ``min_block_lines`` non-blank lines.

    Raises:
        MetricsError: If ``min_block_lines`` is below 1
    """
    if min_block_lines < 1:
        raise MetricsError("duplication", f"min_block_lines must be at least 1, got {min_block_lines}")

    kept = non_blank_lines(source_text)
    lines = [text for _, text in kept]
    count = len(lines)
    if count == 0:
        return DuplicationReport()

    # Pairs starting on different lines match for k = 0 and are never
    # recorded, so only starts sharing the same text are compared
    positions: dict[str, list[int]] = defaultdict(list)
    for index, text in enumerate(lines):
        positions[text].append(index)

    blocks: list[DuplicateBlock] = []
    for i, text in enumerate(lines):
        for j in positions[text]:
            if j < i + min_block_lines:
                continue
            if i > 0 and lines[i - 1] == lines[j - 1]:
                continue

            k = 0
            while j + k < count and lines[i + k] == lines[j + k]:
                k += 1

            if k >= min_block_lines:
                blocks.append(
                    DuplicateBlock(
                        first=LineRange(i, i + k, kept[i][0], kept[i + k - 1][0]),
                        second=LineRange(j, j + k, kept[j][0], kept[j + k - 1][0]),
                        line_count=k,
                    )
                )

    total = sum(block.line_count for block in blocks)
    percentage = min(100.0, max(0.0, total / count * 100))
    return DuplicationReport(
        blocks=tuple(blocks),
        total_duplicated_lines=total,
        duplication_percentage=round_half_up(percentage, 2),
    )
