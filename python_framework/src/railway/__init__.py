"""
Railway-Oriented Programming (ROP) helpers.

Explicit, composable error handling — no exceptions in business logic.

    from railway import Result, ErrorCode

    def parse_year(token: str) -> Result[int]:
        if not token.isdigit():
            return Result.failure(ErrorCode.PARSE_ERROR, f"Year is not a number: {token!r}")
        return Result.success(int(token))

    result = (
        Result.success("Jan  5 00:00:00 2000 GMT")
        .map(str.split)
        .flat_map(lambda tokens: parse_year(tokens[3]))
    )
"""

from railway.result import Result, Success, Failure
from railway.failure import ErrorCode, FailureDescription
from railway.execution import (
    ExecutionContext,
    NoOpExecutionContext,
    LoggingExecutionContext,
)
from railway.result_failures import ResultFailures
from railway.assertions import ResultAssertions

__all__ = [
    "Result",
    "Success",
    "Failure",
    "ErrorCode",
    "FailureDescription",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ResultFailures",
    "ResultAssertions",
]

__version__ = "1.1.0"
