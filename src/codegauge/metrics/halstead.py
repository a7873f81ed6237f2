"""Halstead metrics from raw source text.

Works on text, not the syntax tree, so it still produces numbers for
source that failed to parse. Tokens are found with a fixed, ordered list
of regexes. Each operator pattern scans the whole text on its own, so a
character can be counted by more than one pattern (``==`` is seen by the
comparison and the assignment patterns); the downstream calibration
depends on this.
"""

from __future__ import annotations

import re

from .models import HalsteadMetrics

OPERATOR_PATTERNS = (
    re.compile(r"\+\+|--"),  # increment/decrement
    re.compile(r"[+\-*/%]"),  # arithmetic
    re.compile(r"[<>]=?|[!=]==?"),  # comparison
    re.compile(r"&&|\|\|"),  # logical
    re.compile(r"[&|^~]"),  # bitwise
    re.compile(r"[=!]=?"),  # assignment/equality
    re.compile(r"\?|:"),  # ternary
    re.compile(r"\."),  # member access
    re.compile(r"\[|\]"),  # indexing
    re.compile(r"\(|\)"),  # calls and grouping
    re.compile(r"[{};,]"),  # delimiters
)

# JS ``\b`` treats only [A-Za-z0-9_] as word characters; ASCII mode matches that
OPERAND_PATTERNS = (
    re.compile(r"\b[a-zA-Z_$][a-zA-Z0-9_$]*\b", re.ASCII),  # identifiers
    re.compile(r"\b\d+\.?\d*\b", re.ASCII),  # numbers
    re.compile(r"['\"`][^'\"`]*['\"`]"),  # strings
)

RESERVED_WORDS = frozenset(
    {
        "if",
        "else",
        "for",
        "while",
        "do",
        "switch",
        "case",
        "break",
        "continue",
        "return",
        "function",
        "const",
        "let",
        "var",
        "class",
        "import",
        "export",
    }
)


def halstead(source_text: str) -> HalsteadMetrics:
    """Count operators and operands and build HalsteadMetrics.

    Never raises; text with no tokens yields an all-zero record.
    """
    operators: set[str] = set()
    operands: set[str] = set()
    total_operators = 0
    total_operands = 0

    for pattern in OPERATOR_PATTERNS:
        for match in pattern.finditer(source_text):
            operators.add(match.group())
            total_operators += 1

    for pattern in OPERAND_PATTERNS:
        for match in pattern.finditer(source_text):
            token = match.group()
            if token in RESERVED_WORDS:
                continue
            operands.add(token)
            total_operands += 1

    return HalsteadMetrics(
        distinct_operators=len(operators),
        distinct_operands=len(operands),
        total_operators=total_operators,
        total_operands=total_operands,
    )
