"""Analysis-related exceptions: parsing, language support, metric failures."""

from typing import Dict, List, Optional

from .base import CodeGaugeError


class AnalysisError(CodeGaugeError):
    """Base class for analysis-related errors."""
    pass


class ParsingError(AnalysisError):
    """Raised when source text cannot be parsed into a syntax tree."""

    def __init__(
        self,
        language: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        details: Dict[str, str] = {"language": language, "reason": reason}
        if line is not None:
            details["line"] = str(line)
        if column is not None:
            details["column"] = str(column)

        super().__init__(f"Failed to parse {language} source", details=details)
        self.language = language
        self.reason = reason
        self.line = line
        self.column = column


class UnsupportedLanguageError(AnalysisError):
    """Raised when attempting to parse a language without a grammar."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Language {language} not supported for AST parsing",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages


class MetricsError(AnalysisError):
    """Raised when a metric calculator receives input it cannot handle."""

    def __init__(self, metric_name: str, reason: str):
        super().__init__(
            f"Failed to compute {metric_name}",
            details={"metric": metric_name, "reason": reason},
        )
        self.metric_name = metric_name
        self.reason = reason
