"""
Policy evaluation — security checks over extracted certificate fields.

Domain layer — pure functions, no I/O. `today` is always passed in so the
expiration check is deterministic under test.

Checks are independent of each other:
  - debug certificate  → CRITICAL "Android Debug Certificate"
  - expiration         → HIGH "Expired certificate"
  - self-signed        → recognized, no finding
"""

from __future__ import annotations

from datetime import date

import structlog
from railway.failure import FailureDescription
from railway.result import Result

from cert_trust.domain.extraction import extract_fields, parse_not_after
from cert_trust.domain.failures import CertificateFailures
from cert_trust.domain.models import (
    CertificateAssessment,
    CertificateFields,
    ParsedDate,
    Severity,
    Vulnerability,
)

log = structlog.get_logger()

DEBUG_CERTIFICATE_MARKER = "Android Debug"

DEBUG_CERTIFICATE_TITLE = "Android Debug Certificate"
DEBUG_CERTIFICATE_DESCRIPTION = (
    "The application is signed with the Android Debug Certificate. "
    "This certificate should never be used for publishing an app."
)

EXPIRED_CERTIFICATE_TITLE = "Expired certificate"
EXPIRED_CERTIFICATE_DESCRIPTION = (
    "The certificate of the application has expired. You should not use applications "
    "with expired certificates since the app is not secure anymore."
)


def check_debug_certificate(fields: CertificateFields) -> list[Vulnerability]:
    if DEBUG_CERTIFICATE_MARKER not in fields.issuer:
        return []
    log.info("policy.debug_certificate", issuer=fields.issuer)
    return [
        Vulnerability(
            severity=Severity.CRITICAL,
            title=DEBUG_CERTIFICATE_TITLE,
            description=DEBUG_CERTIFICATE_DESCRIPTION,
        )
    ]


def check_self_signed(fields: CertificateFields) -> list[Vulnerability]:
    """Self-signed certificates are recognized but carry no policy yet."""
    if fields.is_self_signed:
        log.debug("certificate.self_signed", issuer=fields.issuer)
    return []


def is_expired(today: date, expiry: ParsedDate) -> bool:
    """
    True when `today` falls strictly after the expiry day.

    Component-wise: a later year, or the same year with a later month, or the
    same year and month with a later day. For months 1..12 this orders dates
    exactly like comparing (year, month, day) tuples.
    """
    year, month, day = today.year, today.month, today.day
    return (
        year > expiry.year
        or (year == expiry.year and month > expiry.month)
        or (year == expiry.year and month == expiry.month and day > expiry.day)
    )


def check_expiration(expiry: ParsedDate, today: date) -> Result[list[Vulnerability]]:
    """
    Expired certificates produce one HIGH finding.

    A date with an unrecognized month (month 0) fails with INVALID_DATE
    instead of being compared, since month 0 would sort before every month.
    """
    if not expiry.is_determinable:
        return CertificateFailures.invalid_date(
            str(expiry.as_tuple()), "unrecognized month abbreviation"
        )
    if not is_expired(today, expiry):
        return Result.success([])
    log.info("policy.expired_certificate", expiry=expiry.as_tuple(), today=today.isoformat())
    return Result.success(
        [
            Vulnerability(
                severity=Severity.HIGH,
                title=EXPIRED_CERTIFICATE_TITLE,
                description=EXPIRED_CERTIFICATE_DESCRIPTION,
            )
        ]
    )


def _evaluate(fields: CertificateFields, today: date) -> CertificateAssessment:
    findings = check_debug_certificate(fields) + check_self_signed(fields)
    failures: list[FailureDescription] = []

    parse_not_after(fields.not_after).flat_map(
        lambda expiry: check_expiration(expiry, today)
    ).either(findings.extend, failures.append)

    return CertificateAssessment(
        fields=fields,
        findings=tuple(findings),
        failures=tuple(failures),
    )


def assess_certificate(text: str, today: date) -> Result[CertificateAssessment]:
    """
    Run every policy over one decoded certificate.

    Missing fields fail the whole assessment. A not-after value that cannot
    be judged is recorded in `failures` while the remaining findings stand.
    """
    return extract_fields(text).map(lambda fields: _evaluate(fields, today))
