"""Structure command: functions, classes, imports and variables of one file."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import CodeGaugeError
from ..logging_config import setup_logging
from ..structure import CodeStructure, extract_structure
from ..syntax import SourceLocation, parse_tree
from . import app
from ._common import console, read_source, report_error, resolve_config, resolve_language


@app.command()
def structure(
    file: Path = typer.Argument(
        ...,
        help="JavaScript or TypeScript source file",
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
        help="Emit the structure as JSON",
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
):
    """
    List the functions, classes, imports and variables a file defines.

    The file must parse; syntax errors are reported with their position.

    [bold cyan]Examples:[/bold cyan]

      codegauge structure src/app.js

      codegauge structure component.tsx --json
    """
    logger = setup_logging(quiet=quiet)

    try:
        settings = resolve_config(config=config, quiet=quiet)
        tree = parse_tree(read_source(file), resolve_language(file, language, settings))
        result = extract_structure(tree)

        if json_output:
            print(json.dumps({"file": str(file), **result.to_dict()}, indent=2))
        else:
            _output_rich(str(file), result)

    except typer.Exit:
        raise
    except CodeGaugeError as e:
        raise report_error(e, json_output)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


def _line(loc: Optional[SourceLocation]) -> str:
    return str(loc.start_line) if loc is not None else "-"


def _output_rich(name: str, result: CodeStructure):
    summary = result.summary()
    console.print()
    console.print(f"[bold cyan]{name}[/bold cyan]")
    console.print(
        f"  [bold]{summary.functions}[/bold] functions "
        f"({summary.async_functions} async, avg {summary.average_parameters} params), "
        f"[bold]{summary.classes}[/bold] classes, "
        f"[bold]{summary.imports}[/bold] imports, "
        f"[bold]{summary.variables}[/bold] variables"
    )
    console.print()

    if result.functions:
        table = Table(title="Functions", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Kind")
        table.add_column("Params", justify="right")
        table.add_column("Flags")
        table.add_column("Line", justify="right")
        for fn in result.functions:
            flags = [
                label
                for label, on in (
                    ("async", fn.is_async),
                    ("generator", fn.is_generator),
                    ("static", fn.is_static),
                )
                if on
            ]
            kind = fn.kind.value
            if fn.method_kind and fn.method_kind != "method":
                kind = f"{kind} ({fn.method_kind})"
            table.add_row(fn.name, kind, str(fn.parameter_count), ", ".join(flags), _line(fn.location))
        console.print(table)

    if result.classes:
        table = Table(title="Classes", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Extends")
        table.add_column("Methods")
        table.add_column("Properties")
        for cls in result.classes:
            table.add_row(
                cls.name,
                cls.superclass_name or "",
                ", ".join(m.name or "?" for m in cls.methods),
                ", ".join(p.name or "?" for p in cls.properties),
            )
        console.print(table)

    if result.imports:
        table = Table(title="Imports", show_header=True)
        table.add_column("Module", style="cyan")
        table.add_column("Kind")
        table.add_column("Names")
        for imp in result.imports:
            names = []
            for spec in imp.specifiers:
                if spec.imported_name and spec.imported_name != spec.local_alias:
                    names.append(f"{spec.imported_name} as {spec.local_alias}")
                else:
                    names.append(spec.local_alias or "?")
            table.add_row(imp.source_module, imp.import_kind.value, ", ".join(names))
        console.print(table)

    if result.variables:
        table = Table(title="Variables", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Kind")
        table.add_column("Initialized")
        table.add_column("Line", justify="right")
        for var in result.variables:
            table.add_row(
                var.name or "?",
                var.declaration_kind,
                "yes" if var.is_initialized else "no",
                _line(var.location),
            )
        console.print(table)
