"""Scanner process — command construction, launch, and the process boundary.

The pipeline only needs something that looks like ``subprocess.Popen``:
two readable streams and a blocking ``wait``.  ``ScanProcess`` captures
that shape so tests (and other launchers) can supply their own.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from typing import IO, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

STATS_EVERY_FLAG = "--stats-every"


class ScanPulseError(Exception):
    """Base class for errors reported to the user before a scan runs."""


class EmptyArgumentsError(ScanPulseError):
    """Raised when no scanner arguments were given."""


class ScannerLaunchError(ScanPulseError):
    """Raised when the scanner executable cannot be started."""


@runtime_checkable
class ScanProcess(Protocol):
    """A running scanner: two output streams and an exit code."""

    stdout: IO[bytes]
    stderr: IO[bytes]

    def wait(self) -> int:
        """Block until the process exits and return its exit code."""
        ...


def build_scanner_command(
    args: Sequence[str],
    *,
    binary: str = "nmap",
    stats_interval: str = "1s",
) -> list[str]:
    """Build the full scanner command line.

    ``--stats-every=<stats_interval>`` is prepended so the scanner reports
    progress periodically, unless the caller already passed its own
    ``--stats-every``.

    Raises
    ------
    EmptyArgumentsError
        If *args* is empty.
    """
    if not args:
        raise EmptyArgumentsError("Scanner arguments must not be empty")

    command = [binary]
    if not any(arg.startswith(STATS_EVERY_FLAG) for arg in args):
        command.append(f"{STATS_EVERY_FLAG}={stats_interval}")
    command.extend(args)
    return command


def launch_scanner(command: Sequence[str]) -> subprocess.Popen:
    """Start the scanner with stdout and stderr piped in binary mode.

    Raises
    ------
    ScannerLaunchError
        If the executable is missing or cannot be started.
    """
    logger.debug("Launching scanner: %s", " ".join(command))
    try:
        return subprocess.Popen(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
        )
    except OSError as exc:
        raise ScannerLaunchError(f"Error starting {command[0]}: {exc}") from exc
