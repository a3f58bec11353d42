"""CLI commands for scripture-engine."""

import typer

from scripture_engine.cli.scripture import register_commands

main_app = typer.Typer(
    name="scripture",
    help="Scripture Engine CLI",
    no_args_is_help=True,
)
register_commands(main_app)


def main() -> None:
    """Entry point for the CLI."""
    main_app()


__all__ = ["main", "main_app"]
