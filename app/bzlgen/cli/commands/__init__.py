"""CLI commands for bzlgen.

This package contains all subcommand implementations.
"""

from bzlgen.cli.commands import remap, render

__all__ = ["remap", "render"]
