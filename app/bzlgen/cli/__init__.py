"""CLI package for bzlgen.

This package contains the Typer application and all subcommands.
"""

from bzlgen.cli.main import app

__all__ = ["app"]
