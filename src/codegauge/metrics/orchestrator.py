"""Metrics orchestrator: runs every calculator and assembles a MetricsRecord.

Pipeline:
    1. line counts (text)
    2. cyclomatic / cognitive complexity (tree; 1 / 0 without one)
    3. Halstead metrics (text)
    4. duplication (text; skipped above the configured size limit)
    5. maintainability index
    6. technical debt (adds externally reported findings)
    7. quality score

``calculate_all_metrics`` never raises. Input is arbitrary user code, so
empty input and any internal failure produce ``fallback_record`` and the
calling request still completes with a valid, if degraded, result.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..config import DEFAULT_CONFIG, MetricsConfig
from ..syntax.nodes import SyntaxNode
from .complexity import cognitive_complexity, cyclomatic_complexity
from .constants import (
    FALLBACK_COGNITIVE,
    FALLBACK_CYCLOMATIC,
    FALLBACK_MAINTAINABILITY,
    FALLBACK_QUALITY,
)
from .duplication import detect_duplication, non_blank_lines
from .halstead import halstead
from .lines import count_lines
from .maintainability import (
    DebtBasis,
    complexity_rating,
    maintainability_index,
    maintainability_rating,
    quality_score,
    technical_debt_hours,
)
from .models import DuplicationReport, HalsteadMetrics, LineCounts, MetricsRecord

logger = logging.getLogger(__name__)


def fallback_record(source_text: str = "") -> MetricsRecord:
    """Degraded record for input the engine could not measure.

    Only the physical line total is kept.
    """
    return MetricsRecord(
        lines=LineCounts(total=len(source_text.split("\n"))),
        cyclomatic_complexity=FALLBACK_CYCLOMATIC,
        cognitive_complexity=FALLBACK_COGNITIVE,
        maintainability_index=FALLBACK_MAINTAINABILITY,
        halstead=HalsteadMetrics(),
        duplication=DuplicationReport(),
        technical_debt_hours=0.0,
        quality_score=FALLBACK_QUALITY,
        is_fallback=True,
        ratings={
            "complexity": complexity_rating(FALLBACK_CYCLOMATIC),
            "maintainability": maintainability_rating(FALLBACK_MAINTAINABILITY),
        },
    )


def calculate_all_metrics(
    source_text: str,
    tree: Optional[SyntaxNode] = None,
    vulnerabilities: Iterable[Any] = (),
    code_smells: Iterable[Any] = (),
    config: Optional[MetricsConfig] = None,
) -> MetricsRecord:
    """Compute the full MetricsRecord for one script.

    Args:
        source_text: Raw source; may be empty or syntactically invalid
        tree: Parsed tree, or None when parsing failed upstream
        vulnerabilities: Findings from the security analyzer
        code_smells: Findings from the quality analyzer
        config: Resource policy (duplication size limit, block length)

    Returns:
        MetricsRecord; ``fallback_record`` for empty input or on any
        internal failure
    """
    if not source_text or not source_text.strip():
        logger.debug("Empty source, returning fallback metrics")
        return fallback_record(source_text or "")

    try:
        return _calculate(
            source_text,
            tree,
            list(vulnerabilities),
            list(code_smells),
            config or DEFAULT_CONFIG,
        )
    except Exception:
        logger.warning("Metrics calculation failed, returning fallback metrics", exc_info=True)
        return fallback_record(source_text)


def _calculate(
    source_text: str,
    tree: Optional[SyntaxNode],
    vulnerabilities: list[Any],
    code_smells: list[Any],
    config: MetricsConfig,
) -> MetricsRecord:
    lines = count_lines(source_text)

    if tree is not None:
        cyclomatic = cyclomatic_complexity(tree)
        cognitive = cognitive_complexity(tree)
    else:
        cyclomatic = FALLBACK_CYCLOMATIC
        cognitive = FALLBACK_COGNITIVE

    halstead_metrics = halstead(source_text)
    duplication = _duplication(source_text, config)

    mi = maintainability_index(cyclomatic, halstead_metrics.volume, lines.code)

    debt = technical_debt_hours(
        DebtBasis(
            cyclomatic_complexity=cyclomatic,
            duplication_percentage=duplication.duplication_percentage,
            maintainability_index=mi,
        ),
        vulnerabilities,
        code_smells,
    )

    score = quality_score(
        mi, cyclomatic, duplication.duplication_percentage, lines.comment_ratio
    )

    logger.debug(
        f"Metrics: cc={cyclomatic} cognitive={cognitive} mi={mi} "
        f"dup={duplication.duplication_percentage}% debt={debt}h quality={score}"
    )

    return MetricsRecord(
        lines=lines,
        cyclomatic_complexity=cyclomatic,
        cognitive_complexity=cognitive,
        maintainability_index=mi,
        halstead=halstead_metrics,
        duplication=duplication,
        technical_debt_hours=debt,
        quality_score=score,
        ratings={
            "complexity": complexity_rating(cyclomatic),
            "maintainability": maintainability_rating(mi),
        },
    )


def _duplication(source_text: str, config: MetricsConfig) -> DuplicationReport:
    line_count = len(non_blank_lines(source_text))
    if line_count > config.max_duplication_lines:
        logger.warning(
            f"Skipping duplication detection: {line_count} non-blank lines "
            f"exceeds limit of {config.max_duplication_lines}"
        )
        return DuplicationReport(skipped=True)
    return detect_duplication(source_text, config.min_block_lines)
