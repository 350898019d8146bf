"""
Click-based CLI for goodtimes.

Cargo runs external subcommands as ``cargo-<name> <name> [args]``, so the
root group stands in for ``cargo`` and ``goodtimes`` is its only command.

Usage:
    from goodtimes.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from .. import __version__
from .context import GoodtimesContext


@click.group(name="cargo")
@click.version_option(version=__version__, prog_name="cargo-goodtimes")
def cli() -> None:
    """Cargo subcommand entry point. Run as `cargo goodtimes`."""


def register_commands() -> None:
    """Register all CLI commands with the root group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "GoodtimesContext",
    "cli",
    "register_commands",
]
