"""Rich terminal formatter for codegauge."""

from typing import Mapping, Optional

from rich.console import Console
from rich.table import Table

from ..api import AnalysisResult
from ..metrics.models import MetricsRecord, Rating
from .base import BaseFormatter

# Rating colors are dashboard names; rich has no plain "orange"
_RICH_COLORS = {"orange": "dark_orange"}


def _rated(value: object, rating: Optional[Rating]) -> str:
    if rating is None:
        return str(value)
    color = _RICH_COLORS.get(rating.color, rating.color)
    return f"[{color}]{value}[/{color}]"


def _quality_style(score: int) -> str:
    if score >= 80:
        return "green"
    elif score >= 60:
        return "yellow"
    elif score >= 40:
        return "dark_orange"
    else:
        return "red"


class RichFormatter(BaseFormatter):
    """Metrics summary table, with Halstead and duplication detail when verbose."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def render(self, results: Mapping[str, AnalysisResult]) -> None:
        self.console.print(self._summary_table(results))

        if self.verbose:
            for name, result in results.items():
                self._print_detail(name, result.metrics)

        degraded = [name for name, r in results.items() if r.metrics.is_fallback]
        if degraded:
            self.console.print(
                f"[yellow]Fallback metrics for {len(degraded)} file(s):[/yellow] "
                + ", ".join(degraded)
            )

        unparsed = [
            name for name, r in results.items() if not r.parse.success and not r.metrics.is_fallback
        ]
        for name in unparsed:
            error = results[name].parse.error or "parse failed"
            self.console.print(f"[dim]{name}: {error} (complexity defaults used)[/dim]")

    def format(self, results: Mapping[str, AnalysisResult]) -> str:
        with self.console.capture() as capture:
            self.render(results)
        return capture.get()

    def _summary_table(self, results: Mapping[str, AnalysisResult]) -> Table:
        table = Table(title="Code Metrics", show_header=True)
        table.add_column("File", style="cyan")
        table.add_column("LOC", justify="right")
        table.add_column("Cyclomatic", justify="right")
        table.add_column("Cognitive", justify="right")
        table.add_column("MI", justify="right")
        table.add_column("Dup %", justify="right")
        table.add_column("Debt (h)", justify="right")
        table.add_column("Quality", justify="right")

        for name, result in results.items():
            m = result.metrics
            quality = _quality_style(m.quality_score)
            table.add_row(
                name,
                str(m.lines.total),
                _rated(m.cyclomatic_complexity, m.ratings.get("complexity")),
                str(m.cognitive_complexity),
                _rated(m.maintainability_index, m.ratings.get("maintainability")),
                f"{m.duplication_percentage:.2f}",
                f"{m.technical_debt_hours:.2f}",
                f"[{quality}]{m.quality_score}[/{quality}]",
            )
        return table

    def _print_detail(self, name: str, metrics: MetricsRecord) -> None:
        self.console.print()
        self.console.print(f"[bold]{name}[/bold]")

        lines = metrics.lines
        self.console.print(
            f"  {lines.code} code, {lines.comment} comment, {lines.blank} blank "
            f"(comment ratio {metrics.comment_ratio:.2f}%)"
        )

        h = metrics.halstead.to_dict()
        table = Table(show_header=True, box=None, padding=(0, 2))
        for column in ("n1", "n2", "N1", "N2", "volume", "difficulty", "effort", "bugs"):
            table.add_column(column, justify="right")
        table.add_row(
            str(h["n1"]),
            str(h["n2"]),
            str(h["N1"]),
            str(h["N2"]),
            str(h["volume"]),
            str(h["difficulty"]),
            str(h["effort"]),
            str(h["estimatedBugs"]),
        )
        self.console.print(table)

        duplication = metrics.duplication
        if duplication.skipped:
            self.console.print("  [dim]Duplication detection skipped (input too large)[/dim]")
        for block in duplication.blocks:
            self.console.print(
                f"  Duplicate block of {block.line_count} lines: "
                f"lines {block.first.first_line}-{block.first.last_line} and "
                f"{block.second.first_line}-{block.second.last_line}"
            )
