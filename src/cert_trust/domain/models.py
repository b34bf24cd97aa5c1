"""
Domain models — immutable data structures for candidates, certificate fields and findings.

These are pure value objects with no behavior beyond self-description.
They flow through the analysis pipeline:

  META-INF entry → CandidateFile
    → decoded text → CertificateFields (+ ParsedDate)
      → Vulnerability findings → CertificateAssessment
        → AnalysisSummary (one per analyzed bundle)

All models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from pathlib import Path

from railway.failure import FailureDescription


@total_ordering
class Severity(Enum):
    """
    Severity of a finding, ordered from least to most severe.

    Comparison follows the declaration order, so `Severity.HIGH < Severity.CRITICAL`.
    """

    WARNING = "warning"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def parse(cls, name: str) -> Severity:
        """Parse a severity from its name, case-insensitively (`"High"` → HIGH)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown severity {name!r}; expected one of: {valid}") from None


@dataclass(frozen=True, slots=True)
class CandidateFile:
    """An entry of the signing-metadata directory, flagged when it looks like a certificate."""

    path: Path
    is_certificate: bool

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class CertificateFields:
    """
    The three labeled values extracted from a decoded certificate dump.

    Each value is the token following the label's first `": "` delimiter,
    e.g. `C=US, O=Android, CN=Android Debug` for the issuer.
    """

    issuer: str
    subject: str
    not_after: str

    @property
    def is_self_signed(self) -> bool:
        return self.issuer == self.subject


@dataclass(frozen=True, slots=True)
class ParsedDate:
    """
    A (year, month, day) triple derived from a certificate's not-after value.

    `month` is 0 when the month abbreviation was not recognized; such a date
    cannot be ordered against the calendar and `is_determinable` is False.
    """

    year: int
    month: int
    day: int

    @property
    def is_determinable(self) -> bool:
        return self.month != 0

    def as_tuple(self) -> tuple[int, int, int]:
        return self.year, self.month, self.day


@dataclass(frozen=True, slots=True)
class Vulnerability:
    """
    A severity-tagged security finding recorded against the analyzed bundle.

    `file`, `start_line`, `end_line` and `code` locate the finding in source
    when a check can point at one; certificate checks leave them unset.
    """

    severity: Severity
    title: str
    description: str
    file: str | None = None
    start_line: int | None = None
    end_line: int | None = None
    code: str | None = None


@dataclass(frozen=True, slots=True)
class CertificateAssessment:
    """
    Outcome of evaluating one decoded certificate.

    `failures` collects checks that could not reach a verdict (for example an
    undeterminable expiration date) without discarding the findings of the
    checks that did.
    """

    fields: CertificateFields
    findings: tuple[Vulnerability, ...] = ()
    failures: tuple[FailureDescription, ...] = ()


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    """Aggregate outcome of analyzing one bundle's signing certificates."""

    package: str
    candidates: int = 0
    decoded: int = 0
    findings: tuple[Vulnerability, ...] = ()
    skipped: tuple[tuple[str, FailureDescription], ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        return not self.findings and not self.skipped
