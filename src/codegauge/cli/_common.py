"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import MetricsConfig, load_config
from ..exceptions import CodeGaugeError, UnsupportedLanguageError
from ..syntax.languages import detect_language, resolve_grammar, supported_hints

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> MetricsConfig:
    """Build config from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def resolve_language(path: Path, language: str, config: MetricsConfig) -> str:
    """Language hint for one file.

    "auto" picks the grammar from the file extension and falls back to the
    configured default language.
    """
    if language == "auto":
        return detect_language(path) or config.default_language
    if resolve_grammar(language) is None:
        raise UnsupportedLanguageError(language, supported_hints())
    return language


def read_source(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def report_error(error: CodeGaugeError, json_output: bool = False) -> typer.Exit:
    """Print a codegauge error and return the Exit carrying its status.

    With ``json_output`` the error goes to stdout as JSON so scripts that
    parse the report also get a parseable failure.
    """
    if json_output:
        print(json.dumps(error.to_dict(), indent=2))
    else:
        console.print(f"[red]Error:[/red] {error}")
    return typer.Exit(error.exit_code)
