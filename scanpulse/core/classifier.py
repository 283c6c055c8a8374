"""Line classifier — maps one line of scanner output to at most one event.

Rules are applied in priority order and the first match wins:

1. Start banner (``Starting Nmap``) — dropped.
2. ``Stats:`` marker — ``StatsEvent``, or dropped if nothing follows it.
3. ``Timing:`` marker — ``TimingEvent``, or dropped if the estimate does
   not have the expected shape.
4. Anything else — ``OutputEvent``, flagged as a warning and/or carrying
   ``PortInfo`` when the text matches.

A line that carries a Stats/Timing marker never falls through to plain
output, even when its pattern fails to match.

``classify`` is a pure function: no module state changes between calls.
"""

from __future__ import annotations

import re

from scanpulse.models.events import (
    Event,
    OutputEvent,
    PortInfo,
    StatsEvent,
    TimingEvent,
)

START_BANNER_MARKER = "Starting Nmap"
STATS_MARKER = "Stats:"
TIMING_MARKER = "Timing:"

_STATS_RE = re.compile(r"Stats: (.+)")
_TIMING_RE = re.compile(
    r"About (\d+\.\d+)% done; ETC: (\d+:\d+) \((.+) remaining\)"
)
_WARNING_RE = re.compile(r"warning|caution", re.IGNORECASE)
_OPEN_PORT_RE = re.compile(r"(\d+)/(tcp|udp)\s+open\s+(.+)")


def parse_percent(text: str) -> float:
    """Parse a percentage capture, normalizing bad input to ``0.0``.

    Values outside ``[0, 100]`` are clamped.
    """
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if value != value:  # NaN
        return 0.0
    return min(max(value, 0.0), 100.0)


def parse_open_port(line: str) -> PortInfo | None:
    """Return ``PortInfo`` if *line* reports an open port, else ``None``."""
    match = _OPEN_PORT_RE.search(line)
    if match is None:
        return None
    port, protocol, service = match.groups()
    return PortInfo(port=port, protocol=protocol, service=service)


def classify(line: str, from_error_stream: bool = False) -> Event | None:
    """Classify a single line of scanner output.

    Parameters
    ----------
    line:
        One line of text without its terminator.
    from_error_stream:
        ``True`` if the line was read from the scanner's stderr.

    Returns
    -------
    Event | None
        The classified event, or ``None`` if the line is suppressed.
    """
    if START_BANNER_MARKER in line:
        return None

    if STATS_MARKER in line:
        match = _STATS_RE.search(line)
        if match is None:
            return None
        return StatsEvent(info=match.group(1))

    if TIMING_MARKER in line:
        match = _TIMING_RE.search(line)
        if match is None:
            return None
        percent, etc, remaining = match.groups()
        return TimingEvent(
            percent=parse_percent(percent),
            etc=etc,
            remaining=remaining,
        )

    return OutputEvent(
        text=line,
        from_error_stream=from_error_stream,
        is_warning=_WARNING_RE.search(line) is not None,
        open_port=parse_open_port(line),
    )
