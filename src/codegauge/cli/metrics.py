"""Metrics command: complexity, Halstead, duplication and scores per file."""

from pathlib import Path
from typing import List, Optional

import typer

from ..api import analyze_many
from ..exceptions import CodeGaugeError
from ..formatters import JsonFormatter, RichFormatter
from ..logging_config import setup_logging
from . import app
from ._common import console, read_source, report_error, resolve_config, resolve_language


@app.command()
def metrics(
    files: List[Path] = typer.Argument(
        ...,
        help="JavaScript or TypeScript source files",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    language: str = typer.Option(
        "auto",
        "--language",
        "-l",
        help="Language (auto, javascript, typescript, tsx, js, ts ...)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit the metrics records as JSON",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of the terminal",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show Halstead and duplication detail",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers",
        min=1,
        max=32,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write a full debug log to this file",
        dir_okay=False,
    ),
):
    """
    Compute code metrics for one or more files.

    [bold cyan]Examples:[/bold cyan]

      codegauge metrics src/app.js

      codegauge metrics src/*.ts --json -o metrics.json

      codegauge metrics legacy.js --verbose
    """
    try:
        settings = resolve_config(config=config, workers=workers, verbose=verbose, quiet=quiet)
    except CodeGaugeError as e:
        raise report_error(e, json_output)

    logger = setup_logging(
        verbosity=settings.verbosity, log_file=str(log_file) if log_file else None
    )

    try:
        sources = {}
        languages = {}
        for path in files:
            name = str(path)
            sources[name] = read_source(path)
            languages[name] = resolve_language(path, language, settings)

        logger.debug(f"Analyzing {len(sources)} file(s)")
        results = analyze_many(sources, languages=languages, config=settings)

        if json_output:
            formatter = JsonFormatter(metrics_only=True)
        else:
            formatter = RichFormatter(verbose=verbose)

        if output is not None:
            output.write_text(formatter.format(results), encoding="utf-8")
            if not quiet:
                console.print(f"[green]Report written to {output}[/green]")
        else:
            formatter.render(results)

    except typer.Exit:
        raise
    except CodeGaugeError as e:
        raise report_error(e, json_output)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)
