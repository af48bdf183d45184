"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from bzlgen import __version__
from bzlgen.cli.commands import remap, render

# Create main Typer app
app = typer.Typer(
    name="bzlgen",
    help="Render conditional dependency data as Starlark BUILD declarations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"bzlgen version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """bzlgen - Starlark declarations from conditional values.

    Render declaration documents into BUILD file text and re-key
    configuration-dependent values into a new configuration namespace.
    """
    _configure_logging(verbose, quiet)

    # Commands read this to drop success messages
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="render")(render.render_document)
app.command(name="remap")(remap.remap_configurations)


if __name__ == "__main__":
    app()
