"""Classified scanner events.

Every line the scanner prints becomes at most one event.  Events are frozen
Pydantic models: created once by a stream pump, consumed once by the
renderer, never mutated in between.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """The three event shapes the classifier recognizes."""

    STATS = "stats"
    TIMING = "timing"
    OUTPUT = "output"


class PortInfo(BaseModel):
    """An open port reported by the scanner, e.g. ``80/tcp open http``."""

    model_config = ConfigDict(frozen=True)

    port: str
    protocol: str  # "tcp" or "udp"
    service: str


class StatsEvent(BaseModel):
    """Periodic progress snapshot (task counters, elapsed time)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.STATS] = EventKind.STATS
    info: str


class TimingEvent(BaseModel):
    """Completion estimate for the running scan phase."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.TIMING] = EventKind.TIMING
    percent: float = Field(default=0.0, ge=0.0, le=100.0)
    etc: str = ""  # wall-clock estimate, e.g. "14:23"
    remaining: str = ""  # e.g. "0:05:10"


class OutputEvent(BaseModel):
    """Any other line, shown permanently in scrollback."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.OUTPUT] = EventKind.OUTPUT
    text: str
    from_error_stream: bool = False
    is_warning: bool = False
    open_port: PortInfo | None = None


Event = Annotated[
    Union[StatsEvent, TimingEvent, OutputEvent],
    Field(discriminator="kind"),
]
