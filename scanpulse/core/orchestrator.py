"""Scan orchestrator — wires a scanner process to the display pipeline.

The Orchestrator starts one pump per scanner stream plus the renderer,
waits for both pumps to finish, then waits for the scanner to exit and
returns its exit code.
"""

from __future__ import annotations

import logging
import queue
import threading

from rich.console import Console

from scanpulse.config import ScanPulseConfig
from scanpulse.core.channel import EventChannel
from scanpulse.core.process import ScanProcess
from scanpulse.core.pump import start_pump
from scanpulse.models.events import OutputEvent
from scanpulse.monitor.renderer import StatusRenderer

logger = logging.getLogger(__name__)

GENERIC_FAILURE_EXIT_CODE = 1

_PUMP_COUNT = 2


def normalize_exit_code(returncode: int) -> int:
    """Map ``Popen.returncode`` to a shell exit status.

    A process killed by signal N reports ``-N``; shells report ``128 + N``.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class Orchestrator:
    """Runs one scan through the pump/renderer pipeline.

    Parameters
    ----------
    process:
        The running scanner.  Anything with ``stdout``, ``stderr`` and
        ``wait()`` will do.
    renderer:
        The status renderer.  Built from *config* if not provided.
    config:
        Settings for queue size, line limit and display.  Uses defaults if
        not provided.
    """

    def __init__(
        self,
        process: ScanProcess,
        renderer: StatusRenderer | None = None,
        *,
        config: ScanPulseConfig | None = None,
    ) -> None:
        self.process = process
        self.config = config or ScanPulseConfig()
        self.renderer = renderer or StatusRenderer(
            console=Console(highlight=False, no_color=self.config.no_color),
            styles=self.config.styles,
            bar_width=self.config.bar_width,
        )
        self.events = EventChannel(self.config.event_queue_size)
        self.completions: list[str] = []
        self._done: queue.Queue = queue.Queue(maxsize=_PUMP_COUNT)

    def run(self) -> int:
        """Run the scan to completion and return the scanner's exit code."""
        renderer_thread = threading.Thread(
            target=self.renderer.run,
            args=(self.events,),
            name="scanpulse-renderer",
            daemon=True,
        )
        renderer_thread.start()

        for reader, from_error_stream in (
            (self.process.stdout, False),
            (self.process.stderr, True),
        ):
            start_pump(
                reader,
                from_error_stream,
                self.events,
                self._done,
                max_line_bytes=self.config.max_line_bytes,
            )

        # Both pumps must finish before the process is reaped.
        for _ in range(_PUMP_COUNT):
            self.completions.append(self._done.get())
        logger.debug("Pumps finished: %s", ", ".join(self.completions))

        try:
            exit_code = normalize_exit_code(self.process.wait())
        except OSError as exc:
            logger.debug("wait() failed", exc_info=True)
            self.events.send(
                OutputEvent(
                    text=f"Error waiting for scanner: {exc}",
                    from_error_stream=True,
                )
            )
            exit_code = GENERIC_FAILURE_EXIT_CODE
        else:
            logger.info("Scanner exited with code %d", exit_code)

        # Let the renderer drain what is still buffered before returning.
        self.events.close()
        renderer_thread.join()
        return exit_code
