"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and SCANPULSE_* environment variables.  Nested
style tokens use a double underscore, e.g. ``SCANPULSE_STYLES__ERROR``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from scanpulse.models.display import StyleTokens


class ScanPulseConfig(BaseSettings):
    """Settings for the scanner wrapper.

    Examples
    --------
    Override via environment::

        export SCANPULSE_SCANNER_BINARY=/usr/local/bin/nmap
        export SCANPULSE_STATS_INTERVAL=5s
        export SCANPULSE_LOG_LEVEL=DEBUG

    Or via .env file::

        SCANPULSE_NO_COLOR=true
        SCANPULSE_STYLES__WARNING=magenta
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCANPULSE_",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Scanner invocation
    scanner_binary: str = "nmap"
    stats_interval: str = "1s"

    # Pipeline
    event_queue_size: int = Field(default=10, ge=1)
    max_line_bytes: int = Field(default=1024 * 1024, ge=1)

    # Display
    bar_width: int = Field(default=20, ge=1)
    no_color: bool = False
    styles: StyleTokens = StyleTokens()

