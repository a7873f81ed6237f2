"""Metric records produced by the calculators.

MetricsRecord is the engine's output and the wire contract for the
report generators and dashboards: ``to_dict()`` emits the camelCase field
names they read. HalsteadMetrics and DuplicationReport are embedded by
value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .constants import HALSTEAD_BUG_DIVISOR, HALSTEAD_STROUD_NUMBER
from .rounding import round_half_up, round_int


@dataclass(frozen=True)
class HalsteadMetrics:
    """Halstead's software-science measures.

    Attributes:
        distinct_operators: n1
        distinct_operands: n2
        total_operators: N1
        total_operands: N2
    """

    distinct_operators: int = 0
    distinct_operands: int = 0
    total_operators: int = 0
    total_operands: int = 0

    @property
    def vocabulary(self) -> int:
        """n = n1 + n2"""
        return self.distinct_operators + self.distinct_operands

    @property
    def length(self) -> int:
        """N = N1 + N2"""
        return self.total_operators + self.total_operands

    @property
    def volume(self) -> float:
        """V = N * log2(n), with n clamped to 1."""
        return self.length * math.log2(max(self.vocabulary, 1))

    @property
    def difficulty(self) -> float:
        """D = (n1 / 2) * (N2 / n2), with n2 clamped to 1."""
        return (self.distinct_operators / 2) * (
            self.total_operands / max(self.distinct_operands, 1)
        )

    @property
    def effort(self) -> float:
        """E = D * V"""
        return self.difficulty * self.volume

    @property
    def estimated_time_seconds(self) -> float:
        """T = E / 18"""
        return self.effort / HALSTEAD_STROUD_NUMBER

    @property
    def estimated_bugs(self) -> float:
        """B = V / 3000"""
        return self.volume / HALSTEAD_BUG_DIVISOR

    def to_dict(self) -> dict[str, Any]:
        return {
            "n1": self.distinct_operators,
            "n2": self.distinct_operands,
            "N1": self.total_operators,
            "N2": self.total_operands,
            "vocabulary": self.vocabulary,
            "length": self.length,
            "volume": round_int(self.volume),
            "difficulty": round_half_up(self.difficulty, 2),
            "effort": round_int(self.effort),
            "timeToProgram": round_int(self.estimated_time_seconds),
            "estimatedBugs": round_half_up(self.estimated_bugs, 2),
        }


@dataclass(frozen=True)
class LineRange:
    """Half-open ``[start, end)`` span over the non-blank line list.

    ``first_line``/``last_line`` are the 1-based source lines the span
    covers, blank lines included between them.
    """

    start: int
    end: int
    first_line: int
    last_line: int

    def __len__(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "lines": [self.first_line, self.last_line],
        }


@dataclass(frozen=True)
class DuplicateBlock:
    first: LineRange
    second: LineRange
    line_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "lines1": self.first.to_dict(),
            "lines2": self.second.to_dict(),
            "length": self.line_count,
        }


@dataclass(frozen=True)
class DuplicationReport:
    """Repeated blocks of non-blank lines.

    Attributes:
        blocks: Every recorded duplicate pair
        total_duplicated_lines: Sum of block lengths; overlapping blocks are
            each counted in full
        duplication_percentage: total / non-blank lines * 100, in [0, 100]
        skipped: True if detection did not run (input over the size limit)
    """

    blocks: tuple[DuplicateBlock, ...] = ()
    total_duplicated_lines: int = 0
    duplication_percentage: float = 0.0
    skipped: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "percentage": self.duplication_percentage,
            "instances": len(self.blocks),
            "totalLines": self.total_duplicated_lines,
            "blocks": [b.to_dict() for b in self.blocks],
        }


@dataclass(frozen=True)
class LineCounts:
    """Physical line classification.

    Every line falls in exactly one bucket: blank, comment (starts with
    ``//``, ``/*`` or ``*`` after trimming) or code.
    """

    total: int = 0
    code: int = 0
    comment: int = 0
    blank: int = 0

    @property
    def comment_ratio(self) -> float:
        """Comment lines per code line, as a percentage (2 dp)."""
        return round_half_up(self.comment / max(self.code, 1) * 100, 2)


@dataclass(frozen=True)
class Rating:
    level: str
    color: str
    score: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"level": self.level, "color": self.color}
        if self.score is not None:
            result["score"] = self.score
        return result


@dataclass(frozen=True)
class Finding:
    """A vulnerability or code smell reported by an external analyzer.

    Only ``severity`` feeds the engine; the other fields are carried for
    display.
    """

    severity: str
    title: str = ""
    description: str = ""
    line_number: Optional[int] = None
    cwe: Optional[str] = None
    owasp_category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Finding":
        return cls(
            severity=str(data.get("severity", "")),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            line_number=data.get("lineNumber"),
            cwe=data.get("cwe"),
            owasp_category=data.get("owaspCategory"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "title": self.title,
            "description": self.description,
            "lineNumber": self.line_number,
            "cwe": self.cwe,
            "owaspCategory": self.owasp_category,
        }


@dataclass(frozen=True)
class MetricsRecord:
    """All metrics for one analyzed script.

    ``is_fallback`` marks the degraded record returned when the engine
    could not measure the input.
    """

    lines: LineCounts
    cyclomatic_complexity: int
    cognitive_complexity: int
    maintainability_index: int
    halstead: HalsteadMetrics
    duplication: DuplicationReport
    technical_debt_hours: float
    quality_score: int
    is_fallback: bool = False
    ratings: Mapping[str, Rating] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ratings", MappingProxyType(dict(self.ratings)))

    @property
    def comment_ratio(self) -> float:
        return self.lines.comment_ratio

    @property
    def duplication_percentage(self) -> float:
        return self.duplication.duplication_percentage

    def to_dict(self) -> dict[str, Any]:
        return {
            "linesOfCode": self.lines.total,
            "codeLines": self.lines.code,
            "commentLines": self.lines.comment,
            "blankLines": self.lines.blank,
            "commentRatio": self.comment_ratio,
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "cognitiveComplexity": self.cognitive_complexity,
            "maintainabilityIndex": self.maintainability_index,
            "halstead": self.halstead.to_dict(),
            "duplication": self.duplication.to_dict(),
            "technicalDebt": self.technical_debt_hours,
            "qualityScore": self.quality_score,
            "ratings": {name: r.to_dict() for name, r in self.ratings.items()},
        }
