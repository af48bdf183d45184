"""Remap command implementation.

Re-keys a conditional list into a new configuration namespace and shows
where every value ended up.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from bzlgen.core.loader import (
    DocumentError,
    load_remap_request,
    remap_result_to_dict,
    save_remap_result,
)
from bzlgen.models.select import SelectList, WithOriginalConfigurations
from bzlgen.utils.formatting import console, print_error, print_success, print_warning

COMMON_LABEL = "(common)"


def _format_origins(entry: WithOriginalConfigurations[str]) -> str:
    return ", ".join(COMMON_LABEL if c is None else c for c in entry.sorted_configurations())


def _create_remap_table(remapped: SelectList[WithOriginalConfigurations[str]]) -> Table:
    """Create a table listing every remapped value.

    Args:
        remapped: The remapped collection.

    Returns:
        Rich Table with Configuration, Value and Origin columns.
    """
    table = Table(
        title="Remapped Configurations",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Configuration", no_wrap=True)
    table.add_column("Value", no_wrap=True)
    table.add_column("Origin")

    for entry in sorted(remapped.common):
        table.add_row(
            f"[muted]{COMMON_LABEL}[/muted]",
            f"[value]{escape(entry.value)}[/value]",
            f"[origin]{escape(_format_origins(entry))}[/origin]",
        )
    for configuration, entries in sorted(remapped.selects.items()):
        for entry in sorted(entries):
            table.add_row(
                f"[configuration]{escape(configuration)}[/configuration]",
                f"[value]{escape(entry.value)}[/value]",
                f"[origin]{escape(_format_origins(entry))}[/origin]",
            )
    return table


def remap_configurations(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="TOML document with [select] and [mapping] tables."),
    ],
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON for scripting.",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Also write the result to this TOML file.",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Exit with code 1 if any configuration has no mapping.",
        ),
    ] = False,
) -> None:
    """Re-key a conditional list into new configurations.

    Values under a mapped configuration are copied to each configuration it
    maps to. Common values join every new configuration that received at
    least one value. Values under unmapped configurations are reported.

    Examples:
        bzlgen remap request.toml                 # Show a table
        bzlgen remap request.toml --json          # JSON output for scripting
        bzlgen remap request.toml -o result.toml  # Save as TOML
    """
    try:
        request = load_remap_request(document)
    except DocumentError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    remapped, unmapped = request.select.to_select_list().remap_configurations(request.mapping)

    if output is not None:
        try:
            save_remap_result(remapped, unmapped, output)
        except DocumentError as e:
            print_error(escape(str(e)))
            raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(remap_result_to_dict(remapped, unmapped)))
    else:
        if remapped.should_skip_serializing():
            console.print("[muted]Nothing to remap.[/muted]")
        else:
            console.print(_create_remap_table(remapped))

        for configuration, values in sorted(unmapped.items()):
            print_warning(
                escape(f"No mapping for {configuration}: {', '.join(sorted(values))}")
            )

        if output is not None and not ctx.obj.get("quiet"):
            print_success(escape(f"Saved remap result to {output}"))

    if strict and unmapped:
        raise typer.Exit(code=1)
