"""
Filesystem adapter — find signature files in an unpacked bundle's META-INF.

Implements the CandidateLocator port with os.scandir. Unreadable directories
degrade the analysis instead of aborting it: certificate analysis is one
check among many run against a bundle.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog
from railway.result import Result

from cert_trust.domain.failures import CertificateFailures
from cert_trust.domain.models import CandidateFile

log = structlog.get_logger()

CERTIFICATE_EXTENSIONS = frozenset({"RSA", "DSA"})


def signing_metadata_dir(dist_folder: Path, package: str) -> Path:
    """Location of the signing metadata inside an unpacked bundle."""
    return dist_folder / package / "original" / "META-INF"


def is_certificate_file(path: Path) -> bool:
    """True for `*.RSA` / `*.DSA` entries; the extension match is case-sensitive."""
    return path.suffix[1:] in CERTIFICATE_EXTENSIONS


class FilesystemCandidateLocator:
    """
    List a directory's entries as CandidateFiles, sorted by name.

    Implements the CandidateLocator port.
    """

    def locate(self, directory: Path) -> Result[list[CandidateFile]]:
        try:
            iterator = os.scandir(directory)
        except OSError as e:
            log.warning("locator.directory_unreadable", directory=str(directory), error=str(e))
            return CertificateFailures.directory_unreadable(directory, e)

        candidates: list[CandidateFile] = []
        with iterator:
            while True:
                try:
                    entry = next(iterator)
                except StopIteration:
                    break
                except OSError as e:
                    log.warning(
                        "locator.enumeration_truncated",
                        directory=str(directory),
                        collected=len(candidates),
                        error=str(e),
                    )
                    break
                path = Path(entry.path)
                candidates.append(CandidateFile(path=path, is_certificate=is_certificate_file(path)))

        candidates.sort(key=lambda c: c.name)
        log.debug(
            "locator.complete",
            directory=str(directory),
            entries=len(candidates),
            certificates=sum(c.is_certificate for c in candidates),
        )
        return Result.success(candidates)
