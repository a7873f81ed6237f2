"""Secrets command: hardcoded credentials in one file."""

import json
from pathlib import Path

import typer
from rich.table import Table

from ..exceptions import CodeGaugeError
from ..logging_config import setup_logging
from ..security import detect_hardcoded_secrets, owasp_compliance, security_score
from . import app
from ._common import console, read_source, report_error

_VISIBLE_CHARS = 4


def _mask(value: str) -> str:
    if len(value) <= _VISIBLE_CHARS:
        return "*" * len(value)
    return value[:_VISIBLE_CHARS] + "*" * (len(value) - _VISIBLE_CHARS)


@app.command()
def secrets(
    file: Path = typer.Argument(
        ...,
        help="Source file to scan",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit findings as JSON",
    ),
    fail_on_secret: bool = typer.Option(
        False,
        "--fail-on-secret",
        help="Exit with status 1 when any secret is found (for CI)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
):
    """
    Scan a file for hardcoded API keys, passwords, tokens and private keys.

    [bold cyan]Examples:[/bold cyan]

      codegauge secrets config.js

      codegauge secrets src/settings.ts --fail-on-secret
    """
    logger = setup_logging(quiet=quiet)

    try:
        findings = detect_hardcoded_secrets(read_source(file))
    except CodeGaugeError as e:
        raise report_error(e, json_output)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)

    vulnerabilities = [f.as_vulnerability() for f in findings]

    if json_output:
        output = {
            "file": str(file),
            "secrets": [
                {**f.to_dict(), "value": _mask(f.value)} for f in findings
            ],
            "securityScore": security_score(vulnerabilities),
            "owaspCompliance": owasp_compliance(vulnerabilities),
        }
        print(json.dumps(output, indent=2))
    elif findings:
        table = Table(title=f"Hardcoded secrets in {file}", show_header=True)
        table.add_column("Line", justify="right")
        table.add_column("Type", style="red")
        table.add_column("Value")
        for finding in findings:
            table.add_row(str(finding.line), finding.type, _mask(finding.value))
        console.print(table)
        console.print(f"Security score: [bold]{security_score(vulnerabilities)}[/bold]/100")
    else:
        console.print("[bold green]No hardcoded secrets found.[/bold green]")

    if fail_on_secret and findings:
        raise typer.Exit(1)
