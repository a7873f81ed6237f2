"""Deterministic code metrics: complexity, Halstead, duplication, scores."""

from .complexity import cognitive_complexity, cyclomatic_complexity
from .duplication import detect_duplication
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
from .models import (
    DuplicateBlock,
    DuplicationReport,
    Finding,
    HalsteadMetrics,
    LineCounts,
    LineRange,
    MetricsRecord,
    Rating,
)
from .orchestrator import calculate_all_metrics, fallback_record

__all__ = [
    "calculate_all_metrics",
    "fallback_record",
    "cyclomatic_complexity",
    "cognitive_complexity",
    "halstead",
    "detect_duplication",
    "count_lines",
    "maintainability_index",
    "technical_debt_hours",
    "quality_score",
    "complexity_rating",
    "maintainability_rating",
    "DebtBasis",
    "MetricsRecord",
    "HalsteadMetrics",
    "DuplicationReport",
    "DuplicateBlock",
    "LineRange",
    "LineCounts",
    "Finding",
    "Rating",
]
