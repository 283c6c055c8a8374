"""Stream pump — reads one scanner stream and feeds classified events.

One pump runs per stream (stdout and stderr), each on its own thread.
Lines from the same stream keep their order; nothing is promised about
the relative order of the two streams.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import IO

from scanpulse.core.channel import EventChannel
from scanpulse.core.classifier import classify
from scanpulse.models.events import OutputEvent

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINE_BYTES = 1024 * 1024

STDOUT = "stdout"
STDERR = "stderr"


class LineTooLongError(ValueError):
    """Raised when a line exceeds the configured maximum length."""


def stream_name(from_error_stream: bool) -> str:
    return STDERR if from_error_stream else STDOUT


def _strip_terminator(raw: str) -> str:
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


def read_lines(reader: IO, max_line_bytes: int = DEFAULT_MAX_LINE_BYTES):
    """Yield decoded lines from *reader* until EOF.

    Accepts binary or text streams.  Bytes are decoded as UTF-8 with
    replacement characters for invalid sequences.

    Raises
    ------
    LineTooLongError
        If a line holds more than *max_line_bytes* before its newline.
    """
    while True:
        raw = reader.readline(max_line_bytes + 1)
        if not raw:
            return
        newline = b"\n" if isinstance(raw, bytes) else "\n"
        if len(raw) > max_line_bytes and not raw.endswith(newline):
            raise LineTooLongError(f"line exceeds {max_line_bytes} bytes")
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        yield _strip_terminator(raw)


def pump(
    reader: IO,
    from_error_stream: bool,
    events: EventChannel,
    completions: queue.Queue,
    *,
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES,
) -> None:
    """Classify every line of *reader* and send the events to *events*.

    A read error is shown as an error line and ends the pump; it does not
    affect the other pump or the renderer.  Exactly one completion signal
    (the stream name) is put on *completions* however the pump ends.
    """
    name = stream_name(from_error_stream)
    try:
        for line in read_lines(reader, max_line_bytes):
            event = classify(line, from_error_stream)
            if event is not None:
                events.send(event)
    except (OSError, ValueError) as exc:
        logger.debug("Read error on %s", name, exc_info=True)
        events.send(
            OutputEvent(
                text=f"Error reading {name}: {exc}",
                from_error_stream=True,
            )
        )
    finally:
        completions.put(name)


def start_pump(
    reader: IO,
    from_error_stream: bool,
    events: EventChannel,
    completions: queue.Queue,
    *,
    max_line_bytes: int = DEFAULT_MAX_LINE_BYTES,
) -> threading.Thread:
    """Run ``pump`` on a new daemon thread and return the started thread."""
    thread = threading.Thread(
        target=pump,
        args=(reader, from_error_stream, events, completions),
        kwargs={"max_line_bytes": max_line_bytes},
        name=f"scanpulse-pump-{stream_name(from_error_stream)}",
        daemon=True,
    )
    thread.start()
    logger.debug("Started pump for %s", stream_name(from_error_stream))
    return thread
