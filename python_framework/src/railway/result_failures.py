"""
Convenience factory methods for common Result failures.

Eliminates boilerplate for the most frequent error types:

    # Instead of:
    Result.failure(ErrorCode.PARSE_ERROR, "Not After line missing")

    # Write:
    ResultFailures.parse_error("Not After line missing")
"""

from __future__ import annotations

from railway.failure import ErrorCode
from railway.result import Result


class ResultFailures:
    """Factory methods for common failure types."""

    @staticmethod
    def parse_error(message: str, exception: BaseException | None = None, reason: str | None = None) -> Result:
        """Text could not be interpreted."""
        return Result.failure(ErrorCode.PARSE_ERROR, message, exception, reason)

    @staticmethod
    def io_error(message: str, exception: BaseException | None = None, reason: str | None = None) -> Result:
        """Filesystem access failed."""
        return Result.failure(ErrorCode.IO_ERROR, message, exception, reason)

    @staticmethod
    def external_tool_error(message: str, exception: BaseException | None = None, reason: str | None = None) -> Result:
        """External command could not run or reported failure."""
        return Result.failure(ErrorCode.EXTERNAL_TOOL_ERROR, message, exception, reason)
