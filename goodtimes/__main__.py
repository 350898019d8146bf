"""
Entry point for the `cargo-goodtimes` executable.

Cargo runs external subcommands as ``cargo-goodtimes goodtimes [args]``,
so the CLI is a group whose single entry is the ``goodtimes`` command.
"""


def main():
    """Main entry point for the cargo-goodtimes CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
