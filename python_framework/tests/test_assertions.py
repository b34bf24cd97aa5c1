"""Tests for ResultAssertions test helper."""

import pytest

from railway import ErrorCode, Result, ResultAssertions


class TestAssertSuccess:
    def test_passes_on_success(self):
        assert ResultAssertions.assert_success(Result.success(42)) == 42

    def test_fails_on_failure_with_clear_message(self):
        result = Result.failure(ErrorCode.PARSE_ERROR, "Issuer missing", reason="missing_field")
        with pytest.raises(AssertionError, match=r"PARSE_ERROR\[missing_field\]"):
            ResultAssertions.assert_success(result)

    def test_custom_message(self):
        result = Result.failure(ErrorCode.IO_ERROR, "x")
        with pytest.raises(AssertionError, match="custom context"):
            ResultAssertions.assert_success(result, "custom context")


class TestAssertFailure:
    def test_passes_on_failure(self):
        error = ResultAssertions.assert_failure(Result.failure(ErrorCode.IO_ERROR, "missing"))
        assert error.code == ErrorCode.IO_ERROR

    def test_fails_on_success(self):
        with pytest.raises(AssertionError, match="Expected Failure but got Success"):
            ResultAssertions.assert_failure(Result.success(1))

    def test_checks_code(self):
        with pytest.raises(AssertionError, match="Expected error code PARSE_ERROR"):
            ResultAssertions.assert_failure(Result.failure(ErrorCode.IO_ERROR, "x"), ErrorCode.PARSE_ERROR)

    def test_checks_reason(self):
        result = Result.failure(ErrorCode.EXTERNAL_TOOL_ERROR, "x", reason="tool_exit")
        ResultAssertions.assert_failure(result, ErrorCode.EXTERNAL_TOOL_ERROR, reason="tool_exit")
        with pytest.raises(AssertionError, match="Expected failure reason 'tool_spawn'"):
            ResultAssertions.assert_failure(result, reason="tool_spawn")


class TestMessageAssertions:
    def test_contains_is_case_insensitive(self):
        ResultAssertions.assert_failure_message_contains(
            Result.failure(ErrorCode.PARSE_ERROR, "No value for 'Issuer:'"), "issuer"
        )

    def test_contains_fails_when_absent(self):
        with pytest.raises(AssertionError, match="to contain"):
            ResultAssertions.assert_failure_message_contains(
                Result.failure(ErrorCode.PARSE_ERROR, "bad day"), "month"
            )


class TestAssertSuccessValue:
    def test_matching_value(self):
        ResultAssertions.assert_success_value(Result.success((2000, 1, 5)), (2000, 1, 5))

    def test_mismatching_value(self):
        with pytest.raises(AssertionError, match="Expected success value"):
            ResultAssertions.assert_success_value(Result.success(1), 2)
