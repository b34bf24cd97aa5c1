"""
Field extraction — typed values out of a decoded certificate dump.

The decoder prints certificates as indented `Label: value` lines:

    Issuer: C=US, O=Android, CN=Android Debug
    Validity
        Not Before: Jan  1 00:00:00 1999 GMT
        Not After : Jan  5 00:00:00 2000 GMT
    Subject: C=US, O=Android, CN=Android Debug

A field's value is the token between the first and second `": "` on the
last line containing its label. Missing labels and unreadable dates are
PARSE_ERROR failures, never silent defaults.
"""

from __future__ import annotations

import structlog
from railway.failure import ErrorCode
from railway.result import Result

from cert_trust.domain.failures import CertificateFailures, FailureReason
from cert_trust.domain.models import CertificateFields, ParsedDate

log = structlog.get_logger()

ISSUER_LABEL = "Issuer:"
SUBJECT_LABEL = "Subject:"
NOT_AFTER_LABEL = "Not After :"
FIELD_DELIMITER = ": "

MONTHS: dict[str, int] = {
    "Jan": 1,
    "Feb": 2,
    "Mar": 3,
    "Apr": 4,
    "May": 5,
    "Jun": 6,
    "Jul": 7,
    "Aug": 8,
    "Sep": 9,
    "Oct": 10,
    "Nov": 11,
    "Dec": 12,
}


# ─────────────────────── Labeled Fields ───────────────────────


def find_labeled_line(text: str, label: str) -> str | None:
    """Return the last line of `text` containing `label`, or None."""
    found: str | None = None
    for line in text.splitlines():
        if label in line:
            found = line
    return found


def field_value(line: str) -> str | None:
    """
    Return the second `": "`-separated token of a labeled line.

    `"    Issuer: CN=A: B"` → `"CN=A"`; a line without the delimiter has no value.
    """
    tokens = line.split(FIELD_DELIMITER)
    if len(tokens) < 2:
        return None
    return tokens[1]


def extract_field(text: str, label: str) -> Result[str]:
    """Extract one labeled value, failing with MISSING_FIELD when absent."""
    line = find_labeled_line(text, label)
    return Result.from_optional(
        field_value(line) if line is not None else None,
        ErrorCode.PARSE_ERROR,
        f"Decoded certificate has no value for {label!r}",
        FailureReason.MISSING_FIELD,
    )


def extract_fields(text: str) -> Result[CertificateFields]:
    """Extract issuer, subject and not-after; the first missing field fails the whole."""
    return Result.combine3(
        extract_field(text, ISSUER_LABEL),
        extract_field(text, SUBJECT_LABEL),
        extract_field(text, NOT_AFTER_LABEL),
        lambda issuer, subject, not_after: CertificateFields(
            issuer=issuer,
            subject=subject,
            not_after=not_after,
        ),
    )


# ─────────────────────── Not-After Date ───────────────────────


def parse_month(abbreviation: str) -> int:
    """Map a three-letter month abbreviation to 1..12; unknown → 0."""
    return MONTHS.get(abbreviation, 0)


def _parse_number(value: str, token: str, component: str) -> Result[int]:
    if not (token.isascii() and token.isdigit()):
        return CertificateFailures.invalid_date(value, f"{component} is not a number: {token!r}")
    return Result.success(int(token))


def _parse_day(value: str, token: str) -> Result[int]:
    day = _parse_number(value, token, "day")
    if day.is_success() and not 1 <= day.value() <= 31:
        return CertificateFailures.invalid_date(value, f"day out of range: {day.value()}")
    return day


def parse_not_after(value: str) -> Result[ParsedDate]:
    """
    Parse a `MMM DD HH:MM:SS YYYY [TZ]` date into a ParsedDate.

    Tokenizes on whitespace, so single-digit days padded with an extra
    space (`Jan  5`) parse the same as double-digit ones (`Jan 15`).
    An unknown month abbreviation is not a failure here: it yields month 0
    and the caller decides what an undeterminable date means.
    """
    tokens = value.split()
    if len(tokens) < 4:
        return CertificateFailures.invalid_date(value, "expected 'MMM DD HH:MM:SS YYYY'")

    month_token, day_token, _time, year_token = tokens[:4]
    month = parse_month(month_token)
    if month == 0:
        log.debug("extraction.unknown_month", value=value, month=month_token)

    return _parse_number(value, year_token, "year").flat_map(
        lambda year: _parse_day(value, day_token).map(
            lambda day: ParsedDate(year=year, month=month, day=day)
        )
    )
