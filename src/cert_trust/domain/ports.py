"""
Ports — Protocol-based interfaces for infrastructure adapters.

These define WHAT the analysis needs (contracts) without specifying
HOW it's done (implementation). Following hexagonal architecture:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters satisfy
the contract simply by implementing the methods — no inheritance.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from railway.result import Result

from cert_trust.domain.models import CandidateFile, Vulnerability


@runtime_checkable
class CandidateLocator(Protocol):
    """
    Port: enumerate the signing-metadata directory of an unpacked bundle.

    Returns every entry, each flagged with whether it is a certificate
    container. A directory that cannot be opened is a failure; an error
    part-way through enumeration truncates the listing instead.
    """

    def locate(self, directory: Path) -> Result[list[CandidateFile]]: ...


@runtime_checkable
class CertificateDecoder(Protocol):
    """
    Port: turn a DER-encoded PKCS#7 signature file into human-readable text.

    The text must carry `Issuer:`, `Subject:` and `Not After :` lines.
    """

    def decode(self, path: Path) -> Result[str]: ...


@runtime_checkable
class ResultsStore(Protocol):
    """
    Port: write-only sink for analysis results.

    The certificate text is overwritten on every call (last one wins);
    vulnerabilities are append-only. `add_vulnerability` returns False when
    the store declined the finding (e.g. below its minimum severity).
    """

    def set_certificate(self, text: str) -> None: ...

    def add_vulnerability(self, vulnerability: Vulnerability) -> bool: ...


@runtime_checkable
class AnalysisReporter(Protocol):
    """Port: human-facing progress output, gated by verbosity."""

    def start(self) -> None: ...

    def certificate(self, name: str, text: str) -> None: ...

    def vulnerability(self, vulnerability: Vulnerability) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def finish(self) -> None: ...
