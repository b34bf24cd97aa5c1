"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables
  - Fall back to .env file
  - Validate types and constraints at startup

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so DECODER__COMMAND maps to
decoder.command and OUTPUT__VERBOSITY maps to output.verbosity.

Command-line flags are passed to AppSettings(...) as keyword arguments and
take priority over the environment.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cert_trust.adapters.console import Verbosity
from cert_trust.domain.models import Severity

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class DecoderSettings(BaseModel):
    """External certificate decoder invocation."""

    command: str = Field(default="openssl", description="Decoder executable (name on PATH or path)")
    timeout_seconds: float | None = Field(
        default=None,
        ge=1,
        description="Seconds to wait for the decoder; unset waits indefinitely",
    )
    abort_on_failure: bool = Field(
        default=False,
        description="Stop the whole analysis on the first decoder failure",
    )

    @field_validator("command")
    @classmethod
    def validate_command(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Decoder command must not be blank")
        return value.strip()


class OutputSettings(BaseModel):
    """Console output and report persistence."""

    verbosity: Verbosity = Field(default=Verbosity.NORMAL)
    results_folder: Path = Field(default=Path("results"))
    json_report: bool = Field(default=False, description="Write <results_folder>/<package>/results.json")
    min_severity: Severity = Field(default=Severity.WARNING)

    @field_validator("min_severity", mode="before")
    @classmethod
    def parse_min_severity(cls, value: object) -> object:
        """Accept severity names case-insensitively (`High`, `CRITICAL`)."""
        if isinstance(value, str):
            return Severity.parse(value)
        return value


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Constructor keyword arguments (CLI flags)
      2. Environment variables
      3. .env file
      4. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    decoder: DecoderSettings = Field(default_factory=lambda: DecoderSettings())
    output: OutputSettings = Field(default_factory=lambda: OutputSettings())

    dist_folder: Path = Field(default=Path("dist"), description="Folder holding unpacked bundles")
    log_level: str = Field(default="WARNING")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level
