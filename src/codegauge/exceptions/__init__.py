"""Exception hierarchy for codegauge."""

from .analysis import (
    AnalysisError,
    MetricsError,
    ParsingError,
    UnsupportedLanguageError,
)
from .base import CodeGaugeError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
)

__all__ = [
    "CodeGaugeError",
    "AnalysisError",
    "ParsingError",
    "UnsupportedLanguageError",
    "MetricsError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
]
