"""
Failure description — structured error information for the failure track.

An ErrorCode classifies the failure broadly (which layer or resource failed);
an optional free-form `reason` narrows it down (which specific condition
inside that class). Callers branch on the code, diagnostics and tests on the
reason.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Grouped by where the failure originates:
    - Input: PARSE
    - Environment: IO, EXTERNAL_TOOL
    - Internal: TECHNICAL
    """

    # --- Input errors ---
    PARSE_ERROR = "PARSE_ERROR"
    """Text or data could not be interpreted (missing labels, bad dates)."""

    # --- Environment errors ---
    IO_ERROR = "IO_ERROR"
    """Filesystem access failed (unreadable directory, permission denied)."""

    EXTERNAL_TOOL_ERROR = "EXTERNAL_TOOL_ERROR"
    """An external command could not be launched, exited unsuccessfully or timed out."""

    # --- Internal errors ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Unexpected failure inside our own code."""


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor: error code, message, optional reason and exception.

    >>> desc = FailureDescription(ErrorCode.PARSE_ERROR, "Issuer line missing", reason="missing_field")
    >>> desc.code
    <ErrorCode.PARSE_ERROR: 'PARSE_ERROR'>
    >>> desc.reason
    'missing_field'
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False)
    reason: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    def describe(self) -> str:
        """One-line human-readable form: `CODE[reason]: message`."""
        qualifier = f"[{self.reason}]" if self.reason else ""
        return f"{self.code.value}{qualifier}: {self.message}"
