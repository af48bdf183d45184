"""Render command implementation.

Turns a TOML declaration document into BUILD file text.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from bzlgen.core.loader import DocumentError, load_declarations, write_build_file
from bzlgen.core.serialize import serialize
from bzlgen.core.settings import GlobStyle, SettingsError, load_settings
from bzlgen.core.starlark import StarlarkError
from bzlgen.utils.formatting import print_error, print_success


def render_document(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="TOML document listing the declarations to render."),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the result to this file instead of stdout.",
        ),
    ] = None,
    glob_style: Annotated[
        GlobStyle | None,
        typer.Option(
            "--glob-style",
            "-g",
            help="Glob call form: keyword or positional. Overrides the config file.",
            case_sensitive=False,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file to use instead of the default config.toml.",
        ),
    ] = None,
) -> None:
    """Render a declaration document as Starlark.

    Declarations are written in document order, separated by one blank
    line. Comment entries are copied verbatim.

    Examples:
        bzlgen render decls.toml                      # Print to stdout
        bzlgen render decls.toml -o BUILD.bazel       # Write a BUILD file
        bzlgen render decls.toml --glob-style positional
    """
    try:
        settings = load_settings(config)
    except SettingsError as e:
        print_error(escape(f"Failed to load settings: {e}"))
        raise typer.Exit(code=1) from e

    if glob_style is not None:
        settings = settings.model_copy(update={"glob_style": glob_style})

    try:
        declarations = load_declarations(document)
    except DocumentError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    try:
        content = serialize(declarations, settings)
    except StarlarkError as e:
        print_error(escape(f"Failed to render {document}: {e}"))
        raise typer.Exit(code=1) from e

    if output is None:
        typer.echo(content)
        return

    try:
        write_build_file(content, output)
    except DocumentError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if not ctx.obj.get("quiet"):
        print_success(escape(f"Wrote {len(declarations)} declarations to {output}"))
