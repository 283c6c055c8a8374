"""``scanpulse scan [ARGS]...`` — run the scanner with a live status line.

Every argument, options included, is passed through to the scanner
untouched.  The command exits with the scanner's own exit code.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from scanpulse.config import ScanPulseConfig
from scanpulse.core.orchestrator import Orchestrator
from scanpulse.core.process import (
    ScanPulseError,
    build_scanner_command,
    launch_scanner,
)
from scanpulse.log import configure_logging
from scanpulse.monitor.renderer import StatusRenderer

err_console = Console(stderr=True, highlight=False)


def scan_cmd(ctx: typer.Context) -> None:
    """Run the scanner and show its progress on a single updating line.

    Example: ``scanpulse scan -sV -p 1-1000 192.168.1.0/24``
    """
    settings = ScanPulseConfig()
    configure_logging(settings.log_level, err_console)

    try:
        command = build_scanner_command(
            ctx.args,
            binary=settings.scanner_binary,
            stats_interval=settings.stats_interval,
        )
        process = launch_scanner(command)
    except ScanPulseError as exc:
        err_console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc

    renderer = StatusRenderer(
        console=Console(highlight=False, no_color=settings.no_color),
        styles=settings.styles,
        bar_width=settings.bar_width,
    )
    exit_code = Orchestrator(process, renderer, config=settings).run()
    raise typer.Exit(code=exit_code)
