"""Main Typer application — imports and registers all CLI commands.

Entry point: ``scanpulse`` (configured via pyproject.toml console scripts).
"""

from __future__ import annotations

import typer

from scanpulse.cli.commands.scan import scan_cmd

app = typer.Typer(
    name="scanpulse",
    help="scanpulse: run a network scanner with a live progress line.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(
    name="scan",
    help="Run the scanner; all arguments are passed through to it.",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(scan_cmd)


@app.command(name="version", help="Show the scanpulse version.")
def version_cmd() -> None:
    """Print the installed scanpulse version."""
    from scanpulse import __version__

    typer.echo(f"scanpulse {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
