"""Composite scores: maintainability index, technical debt, quality score.

All three are heuristic blends calibrated against the reporting
dashboards; the coefficients are in ``constants``. Every score is clamped
so degenerate input (empty files, zero volume) stays finite.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .constants import (
    CODE_SMELL_DEBT_HOURS,
    COMPLEXITY_RATING_WORST,
    COMPLEXITY_RATINGS,
    DEBT_COMPLEXITY_THRESHOLD,
    DEBT_DUPLICATION_THRESHOLD,
    DEBT_MAINTAINABILITY_THRESHOLD,
    DEBT_PER_COMPLEXITY_POINT,
    DEBT_PER_DUPLICATION_POINT,
    DEBT_PER_MAINTAINABILITY_POINT,
    DEFAULT_CODE_SMELL_DEBT_HOURS,
    DEFAULT_VULNERABILITY_DEBT_HOURS,
    MAINTAINABILITY_RATING_WORST,
    MAINTAINABILITY_RATINGS,
    MI_BASE,
    MI_COMPLEXITY_WEIGHT,
    MI_LOC_WEIGHT,
    MI_MAX,
    MI_MIN,
    MI_VOLUME_WEIGHT,
    QUALITY_COMMENT_WEIGHT,
    QUALITY_COMPLEXITY_PENALTY,
    QUALITY_COMPLEXITY_WEIGHT,
    QUALITY_DUPLICATION_PENALTY,
    QUALITY_DUPLICATION_WEIGHT,
    QUALITY_MAINTAINABILITY_WEIGHT,
    VULNERABILITY_DEBT_HOURS,
)
from .models import Rating
from .rounding import round_half_up, round_int


@dataclass(frozen=True)
class DebtBasis:
    """The metric inputs of the technical-debt estimate."""

    cyclomatic_complexity: int
    duplication_percentage: float
    maintainability_index: int


def maintainability_index(
    cyclomatic: int, halstead_volume: float, code_line_count: int
) -> int:
    """MI = 171 - 5.2 ln(V) - 0.23 G - 16.2 ln(LOC), clamped to [0, 100].

    Volume and line count are clamped to at least 1 before the logarithm.
    """
    volume = max(halstead_volume, 1)
    loc = max(code_line_count, 1)
    mi = (
        MI_BASE
        - MI_VOLUME_WEIGHT * math.log(volume)
        - MI_COMPLEXITY_WEIGHT * cyclomatic
        - MI_LOC_WEIGHT * math.log(loc)
    )
    return round_int(max(MI_MIN, min(MI_MAX, mi)))


def technical_debt_hours(
    basis: DebtBasis,
    vulnerabilities: Iterable[Any] = (),
    code_smells: Iterable[Any] = (),
) -> float:
    """Estimated remediation effort in hours.

    This is an additive heuristic, not a measurement:
        - 0.5 h per cyclomatic point above 20
        - 0.3 h per duplication percent above 10
        - 0.2 h per maintainability point below 50
        - per vulnerability: Critical 4, High 2, Medium 1, Low 0.5 (other 1)
        - per code smell: High 1, Medium 0.5, Low 0.25 (other 0.5)

    Every term is non-negative, so the estimate never decreases when an
    input gets worse. Findings are Finding records, mappings, or any
    object with a ``severity`` attribute.
    """
    hours = 0.0

    if basis.cyclomatic_complexity > DEBT_COMPLEXITY_THRESHOLD:
        hours += (
            basis.cyclomatic_complexity - DEBT_COMPLEXITY_THRESHOLD
        ) * DEBT_PER_COMPLEXITY_POINT

    if basis.duplication_percentage > DEBT_DUPLICATION_THRESHOLD:
        hours += (
            basis.duplication_percentage - DEBT_DUPLICATION_THRESHOLD
        ) * DEBT_PER_DUPLICATION_POINT

    if basis.maintainability_index < DEBT_MAINTAINABILITY_THRESHOLD:
        hours += (
            DEBT_MAINTAINABILITY_THRESHOLD - basis.maintainability_index
        ) * DEBT_PER_MAINTAINABILITY_POINT

    for vulnerability in vulnerabilities:
        hours += VULNERABILITY_DEBT_HOURS.get(
            severity_of(vulnerability), DEFAULT_VULNERABILITY_DEBT_HOURS
        )

    for smell in code_smells:
        hours += CODE_SMELL_DEBT_HOURS.get(severity_of(smell), DEFAULT_CODE_SMELL_DEBT_HOURS)

    return round_half_up(hours, 2)


def quality_score(
    maintainability: int,
    cyclomatic: int,
    duplication_percentage: float,
    comment_ratio: float,
) -> int:
    """Overall 0-100 quality score.

    0.4 MI + 0.2 max(0, 100 - 2 CC) + 0.2 max(0, 100 - 2 dup%) + 0.2 comment%
    """
    score = (
        maintainability * QUALITY_MAINTAINABILITY_WEIGHT
        + max(0, 100 - cyclomatic * QUALITY_COMPLEXITY_PENALTY) * QUALITY_COMPLEXITY_WEIGHT
        + max(0, 100 - duplication_percentage * QUALITY_DUPLICATION_PENALTY)
        * QUALITY_DUPLICATION_WEIGHT
        + comment_ratio * QUALITY_COMMENT_WEIGHT
    )
    return max(0, min(100, round_int(score)))


def complexity_rating(complexity: int) -> Rating:
    for upper, level, color, score in COMPLEXITY_RATINGS:
        if complexity <= upper:
            return Rating(level, color, score)
    level, color, score = COMPLEXITY_RATING_WORST
    return Rating(level, color, score)


def maintainability_rating(index: int) -> Rating:
    for lower, level, color in MAINTAINABILITY_RATINGS:
        if index >= lower:
            return Rating(level, color)
    level, color = MAINTAINABILITY_RATING_WORST
    return Rating(level, color)


def severity_of(finding: Any) -> str:
    """Severity label of a finding-like object ("" when it has none)."""
    if isinstance(finding, Mapping):
        value = finding.get("severity")
    else:
        value = getattr(finding, "severity", None)
    return str(value) if value is not None else ""
