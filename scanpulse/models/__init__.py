"""scanpulse data models — Pydantic v2; events are frozen (immutable)."""

from scanpulse.models.display import DisplayState, StyleTokens
from scanpulse.models.events import (
    Event,
    EventKind,
    OutputEvent,
    PortInfo,
    StatsEvent,
    TimingEvent,
)

__all__ = [
    # events
    "Event",
    "EventKind",
    "OutputEvent",
    "PortInfo",
    "StatsEvent",
    "TimingEvent",
    # display
    "DisplayState",
    "StyleTokens",
]
