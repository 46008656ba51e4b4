"""
LogCat Configuration.

Initial values for a ``LogCat`` instance, loaded from ``LOGCAT_*``
environment variables and an optional ``.env`` file.

Usage:
    from logcat.config import LogCatSettings

    settings = LogCatSettings()
    settings.tag  # "LogCat"
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .chunking import MAX_CHUNK_LENGTH

DEFAULT_TAG = "LogCat"


class SinkName(str, Enum):
    STDIO = "stdio"
    STRUCTLOG = "structlog"
    STDLIB = "stdlib"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LogCatSettings(BaseSettings):
    """Logging facade configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOGCAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    enabled: bool = Field(default=True, description="Master switch; when off every log call is a no-op")
    tag: str = Field(default=DEFAULT_TAG, description="Default tag for calls that supply none")
    trace_enabled: bool = Field(default=True, description="Append the call site (file:line) to messages")
    max_chunk_length: int = Field(default=MAX_CHUNK_LENGTH, gt=0, description="Maximum characters per sink call")
    sink: SinkName = Field(default=SinkName.STDIO, description="Sink backend (stdio, structlog, stdlib)")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Output format for the stdio sink")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Console timestamp format",
    )
    console_level_width: int = Field(default=7, description="Console level column width")
    console_tag_width: int = Field(default=24, description="Console tag column width")
    console_separator: str = Field(default=" | ", description="Console column separator")
    intercept_stdlib: bool = Field(
        default=False,
        description="Redirect stdlib logging records into LogCat when configured",
    )
    configure_structlog: bool = Field(
        default=False,
        description="Install the LogCat structlog processor chain when the structlog sink is selected",
    )
