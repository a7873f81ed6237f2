"""Base formatter interface for codegauge output rendering."""

from abc import ABC, abstractmethod
from typing import Mapping

from ..api import AnalysisResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters receive analysis results keyed by source name (usually a
    file path), in display order.
    """

    @abstractmethod
    def render(self, results: Mapping[str, AnalysisResult]) -> None:
        """Write results to the terminal."""

    @abstractmethod
    def format(self, results: Mapping[str, AnalysisResult]) -> str:
        """Return formatted string representation of results."""
