"""Rich terminal renderer for scanner progress.

Folds stats/timing events into a ``DisplayState`` and keeps a single
status line at the bottom of the terminal, redrawn in place after every
event.  Other scanner output is written above it as permanent lines.

Layout of the status line
-------------------------
::

    [=========>          ] 47.50% ETC: 14:23 (0:05:10 remaining) | Stats: ...

The bar and percentage appear once a non-zero percentage is known; the
stats segment once a stats line has been seen.  Nothing is drawn before
either.

Permanent line styling, by priority
-----------------------------------
- warning   : any line mentioning warning/caution
- port      : ``<port>/<protocol> open <service>``
- error     : other stderr lines
- plain     : everything else
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text

from scanpulse.models.display import DisplayState, StyleTokens
from scanpulse.models.events import OutputEvent, StatsEvent, TimingEvent

if TYPE_CHECKING:
    from collections.abc import Iterable

    from scanpulse.models.events import Event

logger = logging.getLogger(__name__)

DEFAULT_BAR_WIDTH = 20

# Carriage return + erase to end of line.
CLEAR_LINE = Control(
    (ControlType.CARRIAGE_RETURN,),
    (ControlType.ERASE_IN_LINE, 0),
)


def build_progress_bar(
    percent: float,
    styles: StyleTokens | None = None,
    width: int = DEFAULT_BAR_WIDTH,
) -> Text:
    """Build a ``width``-cell progress bar for *percent*.

    Cells before ``floor(percent / 100 * width)`` are filled, the cell at
    that index is the in-progress head, the rest are blank.  At 100% every
    cell is filled and there is no head.
    """
    styles = styles or StyleTokens()
    filled = int((percent / 100.0) * width)

    bar = Text("[")
    for i in range(width):
        if i < filled:
            bar.append("=", style=styles.bar_fill)
        elif i == filled:
            bar.append(">", style=styles.bar_head)
        else:
            bar.append(" ")
    bar.append("]")
    return bar


class StatusRenderer:
    """Single consumer of the event channel.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    styles:
        Style tokens for every styled segment.  Defaults to ``StyleTokens()``.
    bar_width:
        Number of cells in the progress bar.
    """

    def __init__(
        self,
        console: Console | None = None,
        styles: StyleTokens | None = None,
        *,
        bar_width: int = DEFAULT_BAR_WIDTH,
    ) -> None:
        self.console = console or Console(highlight=False)
        self.styles = styles or StyleTokens()
        self.bar_width = bar_width
        self.state = DisplayState()
        self.lines_written = 0
        self.output_error: BaseException | None = None
        self._status_visible = False

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def run(self, events: Iterable[Event]) -> None:
        """Handle every event until *events* is exhausted (channel closed).

        If a status line is on screen at the end, it is terminated with a
        newline so the final progress stays in scrollback.

        A failed terminal write (closed pipe, EIO) is recorded in
        ``output_error``; the remaining events are consumed and discarded.
        Rich turns a broken pipe into ``SystemExit``, which is handled the
        same way.
        """
        for event in events:
            # The channel is drained to the end even after a failed write.
            if self.output_error is not None:
                continue
            try:
                self.handle(event)
            except (OSError, SystemExit) as exc:
                self._output_failed(exc)
        if self._status_visible and self.output_error is None:
            try:
                self.console.print()
            except (OSError, SystemExit) as exc:
                self._output_failed(exc)
            self._status_visible = False
        logger.debug("Renderer finished after %d permanent lines", self.lines_written)

    def _output_failed(self, exc: BaseException) -> None:
        """Stop writing to the terminal; later events are dropped."""
        self.output_error = exc
        self._status_visible = False
        logger.debug("Terminal write failed, dropping further output", exc_info=exc)

    def handle(self, event: Event) -> None:
        """Fold one event into the display state and update the terminal."""
        if isinstance(event, StatsEvent):
            self.state.last_stats = event.info
        elif isinstance(event, TimingEvent):
            self.state.last_percent = event.percent
            self.state.last_etc = event.etc
            self.state.last_remaining = event.remaining
        elif isinstance(event, OutputEvent):
            self.clear_status()
            self.console.print(self.format_output(event), soft_wrap=True)
            self.lines_written += 1
        else:
            logger.warning("Ignoring unknown event type %s", type(event).__name__)
            return
        self.redraw()

    # ------------------------------------------------------------------
    # Permanent output
    # ------------------------------------------------------------------

    def format_output(self, event: OutputEvent) -> Text:
        """Style a permanent output line."""
        if event.is_warning:
            return Text(event.text, style=self.styles.warning)
        if event.open_port is not None:
            port = event.open_port
            line = Text()
            line.append(f"{port.port}/{port.protocol}", style=self.styles.port)
            line.append(" open ")
            line.append(port.service, style=self.styles.service)
            return line
        if event.from_error_stream:
            return Text(event.text, style=self.styles.error)
        return Text(event.text)

    # ------------------------------------------------------------------
    # Status line
    # ------------------------------------------------------------------

    def build_status_line(self) -> Text | None:
        """Render the current ``DisplayState``, or ``None`` if nothing is known."""
        state = self.state
        if not state.has_progress:
            return None

        line = Text()
        if state.last_percent > 0:
            line.append_text(
                build_progress_bar(state.last_percent, self.styles, self.bar_width)
            )
            line.append(" ")
            line.append(f"{state.last_percent:.2f}%", style=self.styles.percent)

            if state.last_etc and state.last_remaining:
                line.append(" ETC: ")
                line.append(state.last_etc, style=self.styles.etc)
                line.append(" (")
                line.append(state.last_remaining, style=self.styles.remaining)
                line.append(" remaining)")

        if state.last_stats:
            if state.last_percent > 0:
                line.append(" | ")
            line.append(f"Stats: {state.last_stats}", style=self.styles.stats)

        return line

    def clear_status(self) -> None:
        """Erase the status line so permanent output can take its place."""
        if self.console.is_terminal:
            self.console.control(CLEAR_LINE)
        self._status_visible = False

    def redraw(self) -> None:
        """Overwrite the status line in place, leaving the cursor at its end.

        Skipped when the console is not a terminal: in-place updates only
        make sense on an interactive display.
        """
        if not self.console.is_terminal:
            return
        line = self.build_status_line()
        if line is None:
            return
        self.console.control(CLEAR_LINE)
        self.console.print(line, end="", soft_wrap=True)
        self._status_visible = True
