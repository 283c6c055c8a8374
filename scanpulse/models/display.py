"""Renderer-side models: the running display state and its style tokens."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StyleTokens(BaseModel):
    """Named Rich styles used by the status renderer.

    Any Rich style string is accepted (``"bold red"``, ``"#ff8800"``,
    ``"none"``).  Override individual tokens through settings, e.g.
    ``SCANPULSE_STYLES__WARNING=magenta``.
    """

    model_config = ConfigDict(frozen=True)

    warning: str = "yellow"
    port: str = "green"
    service: str = "bold"
    error: str = "red"
    percent: str = "green"
    bar_fill: str = "green"
    bar_head: str = "yellow"
    etc: str = "yellow"
    remaining: str = "cyan"
    stats: str = "blue"


class DisplayState(BaseModel):
    """Most recent stats and timing values.

    Owned by a single ``StatusRenderer``; it is mutated in place and never
    handed to another thread.
    """

    last_stats: str = ""
    last_percent: float = 0.0
    last_etc: str = ""
    last_remaining: str = ""

    @property
    def has_progress(self) -> bool:
        """Whether any progress signal has been seen yet."""
        return bool(self.last_stats) or self.last_percent != 0
