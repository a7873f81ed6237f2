"""CLI entry point; registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="codegauge",
    help="codegauge - Deterministic code metrics for JavaScript and TypeScript",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: Optional[bool]) -> None:
    if value:
        console.print(f"[bold cyan]codegauge[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Deterministic code metrics for JavaScript and TypeScript."""


def main() -> None:
    app()


# Import subcommands to register them
from .metrics import metrics as _metrics  # noqa: F401, E402
from .structure import structure as _structure  # noqa: F401, E402
from .secrets import secrets as _secrets  # noqa: F401, E402
