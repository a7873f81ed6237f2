"""JSON formatter for codegauge."""

import json
from typing import Mapping

from ..api import AnalysisResult
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render results as a JSON array, one object per source.

    With ``metrics_only`` each object carries just the metrics record,
    which is the shape the reporting dashboards consume.
    """

    def __init__(self, metrics_only: bool = False):
        self.metrics_only = metrics_only

    def render(self, results: Mapping[str, AnalysisResult]) -> None:
        print(self.format(results))

    def format(self, results: Mapping[str, AnalysisResult]) -> str:
        data = []
        for name, result in results.items():
            if self.metrics_only:
                data.append({"file": name, "metrics": result.metrics.to_dict()})
            else:
                data.append({"file": name, **result.to_dict()})
        return json.dumps(data, indent=2)
