"""scanpulse CLI — Typer-based command-line interface.

Provides the ``scanpulse`` command with ``scan`` (run the scanner with a
live status line) and ``version``.

All output uses Rich for formatted terminal display.
"""
