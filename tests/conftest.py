"""Shared test fixtures for scanpulse."""

from __future__ import annotations

import io
import os
from collections.abc import Callable
from typing import Any

import pytest
from rich.console import Console

from scanpulse.config import ScanPulseConfig
from scanpulse.core.channel import EventChannel
from scanpulse.monitor.renderer import StatusRenderer


class FakeProcess:
    """In-memory stand-in for a running scanner.

    ``wait`` records how many completion signals the orchestrator had
    collected when it was called, via the optional *on_wait* hook.
    """

    def __init__(
        self,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        wait_error: Exception | None = None,
        on_wait: Callable[[], Any] | None = None,
    ) -> None:
        self.stdout = io.BytesIO(stdout)
        self.stderr = io.BytesIO(stderr)
        self.returncode = returncode
        self.wait_error = wait_error
        self.on_wait = on_wait
        self.wait_calls = 0

    def wait(self) -> int:
        self.wait_calls += 1
        if self.on_wait is not None:
            self.on_wait()
        if self.wait_error is not None:
            raise self.wait_error
        return self.returncode


@pytest.fixture(autouse=True)
def _terminal_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich's terminal detection independent of the host environment."""
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    for name in list(os.environ):
        if name.startswith("SCANPULSE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_console() -> Callable[..., Console]:
    """Factory fixture: a Rich Console writing to an in-memory buffer.

    Read the output with ``console.file.getvalue()``.
    """

    def _factory(*, terminal: bool = True, color_system: str | None = None) -> Console:
        return Console(
            file=io.StringIO(),
            force_terminal=terminal,
            color_system=color_system,
            width=200,
            highlight=False,
        )

    return _factory


@pytest.fixture
def console(make_console: Callable[..., Console]) -> Console:
    """A terminal console without colors, so output is easy to assert on."""
    return make_console()


@pytest.fixture
def renderer(console: Console) -> StatusRenderer:
    """A StatusRenderer writing to the in-memory terminal console."""
    return StatusRenderer(console=console)


@pytest.fixture
def channel() -> EventChannel:
    """A fresh event channel with the default capacity."""
    return EventChannel()


@pytest.fixture
def settings() -> ScanPulseConfig:
    """Settings isolated from any .env file in the working directory."""
    return ScanPulseConfig(_env_file=None)


@pytest.fixture
def make_process() -> Callable[..., FakeProcess]:
    """Factory fixture: build a FakeProcess from lists of lines."""

    def _factory(
        stdout_lines: list[str] | None = None,
        stderr_lines: list[str] | None = None,
        **kwargs: Any,
    ) -> FakeProcess:
        stdout = "".join(f"{line}\n" for line in stdout_lines or []).encode()
        stderr = "".join(f"{line}\n" for line in stderr_lines or []).encode()
        return FakeProcess(stdout=stdout, stderr=stderr, **kwargs)

    return _factory
