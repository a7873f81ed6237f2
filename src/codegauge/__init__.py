"""
codegauge - Deterministic code metrics for JavaScript and TypeScript

Parses ECMAScript source with tree-sitter and measures it without any
external service: cyclomatic and cognitive complexity, Halstead measures,
duplication, maintainability index, technical debt and a quality score,
plus a structural summary of functions, classes, imports and variables.
"""

__version__ = "0.1.0"

from .api import AnalysisResult, analyze_many, analyze_source
from .config import MetricsConfig, load_config
from .metrics import MetricsRecord, calculate_all_metrics, fallback_record
from .structure import CodeStructure, extract_structure
from .syntax import ParseResult, SyntaxNode, parse_source

__all__ = [
    "analyze_source",  # Main entry point
    "analyze_many",
    "AnalysisResult",
    "calculate_all_metrics",  # Metrics only, for callers with their own tree
    "fallback_record",
    "MetricsRecord",
    "parse_source",
    "ParseResult",
    "SyntaxNode",
    "extract_structure",
    "CodeStructure",
    "MetricsConfig",
    "load_config",
]
