"""
Failure taxonomy for certificate analysis.

Every failure is a railway failure: a broad ErrorCode plus a FailureReason
naming the exact condition.

  ErrorCode             FailureReason
  ─────────────────────────────────────────────
  IO_ERROR              DIRECTORY_UNREADABLE
  EXTERNAL_TOOL_ERROR   TOOL_SPAWN, TOOL_EXIT, TOOL_TIMEOUT
  PARSE_ERROR           MISSING_FIELD, INVALID_DATE
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from railway import ResultFailures
from railway.result import Result


class FailureReason(StrEnum):
    DIRECTORY_UNREADABLE = "directory_unreadable"
    TOOL_SPAWN = "tool_spawn"
    TOOL_EXIT = "tool_exit"
    TOOL_TIMEOUT = "tool_timeout"
    MISSING_FIELD = "missing_field"
    INVALID_DATE = "invalid_date"


class CertificateFailures:
    """Factory methods for the failures produced while analyzing certificates."""

    @staticmethod
    def directory_unreadable(path: Path, exception: OSError) -> Result:
        return ResultFailures.io_error(
            f"An error occurred when reading the {path} dir searching certificates. "
            f"Certificate analysis will be skipped. More info: {exception}",
            exception,
            FailureReason.DIRECTORY_UNREADABLE,
        )

    @staticmethod
    def tool_spawn(command: str, exception: OSError) -> Result:
        return ResultFailures.external_tool_error(
            f"There was an error when executing the {command} command to check the "
            f"certificate: {exception}",
            exception,
            FailureReason.TOOL_SPAWN,
        )

    @staticmethod
    def tool_exit(command: str, returncode: int, stderr: str) -> Result:
        return ResultFailures.external_tool_error(
            f"The {command} command returned an error (exit status {returncode}). "
            f"More info: {stderr.strip()}",
            reason=FailureReason.TOOL_EXIT,
        )

    @staticmethod
    def tool_timeout(command: str, timeout_seconds: float, exception: BaseException) -> Result:
        return ResultFailures.external_tool_error(
            f"The {command} command did not finish within {timeout_seconds}s",
            exception,
            FailureReason.TOOL_TIMEOUT,
        )

    @staticmethod
    def invalid_date(value: str, detail: str, exception: BaseException | None = None) -> Result:
        return ResultFailures.parse_error(
            f"Cannot interpret certificate date {value!r}: {detail}",
            exception,
            FailureReason.INVALID_DATE,
        )
