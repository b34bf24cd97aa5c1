"""
In-memory results store with JSON report output.

Implements the ResultsStore port. The analysis pipeline only ever writes:
the decoded certificate text (overwritten, last certificate wins) and an
append-only list of vulnerabilities. Findings below the configured minimum
severity are dropped on arrival.
"""

from __future__ import annotations

import json
from collections import defaultdict
from pathlib import Path
from typing import Any

import structlog

from cert_trust.domain.models import Severity, Vulnerability

log = structlog.get_logger()

REPORT_FILENAME = "results.json"


class AnalysisResults:
    def __init__(self, package: str, min_severity: Severity = Severity.WARNING) -> None:
        self._package = package
        self._min_severity = min_severity
        self._certificate: str | None = None
        self._vulnerabilities: list[Vulnerability] = []

    # ─────────────────────── ResultsStore port ───────────────────────

    def set_certificate(self, text: str) -> None:
        self._certificate = text

    def add_vulnerability(self, vulnerability: Vulnerability) -> bool:
        if vulnerability.severity < self._min_severity:
            log.debug(
                "results.below_min_severity",
                title=vulnerability.title,
                severity=vulnerability.severity.value,
            )
            return False
        self._vulnerabilities.append(vulnerability)
        return True

    # ─────────────────────── Read-only views ───────────────────────

    @property
    def package(self) -> str:
        return self._package

    @property
    def certificate(self) -> str | None:
        return self._certificate

    @property
    def vulnerabilities(self) -> tuple[Vulnerability, ...]:
        return tuple(self._vulnerabilities)

    def by_severity(self) -> dict[Severity, list[Vulnerability]]:
        grouped: dict[Severity, list[Vulnerability]] = defaultdict(list)
        for vulnerability in self._vulnerabilities:
            grouped[vulnerability.severity].append(vulnerability)
        return dict(grouped)

    # ─────────────────────── Serialization ───────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Report layout: package, certificate text, per-severity counts and
        the findings, most severe first.
        """
        grouped = self.by_severity()
        ordered = sorted(self._vulnerabilities, key=lambda v: v.severity, reverse=True)
        return {
            "package": self._package,
            "certificate": self._certificate,
            "totals": {severity.value: len(grouped.get(severity, [])) for severity in Severity},
            "vulnerabilities": [_vulnerability_to_dict(v) for v in ordered],
        }

    def write_json(self, results_folder: Path) -> Path:
        """Write `<results_folder>/<package>/results.json` and return its path."""
        target_dir = results_folder / self._package
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / REPORT_FILENAME
        target.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        log.info("results.written", path=str(target), vulnerabilities=len(self._vulnerabilities))
        return target


def _vulnerability_to_dict(vulnerability: Vulnerability) -> dict[str, Any]:
    data: dict[str, Any] = {
        "criticity": vulnerability.severity.value,
        "name": vulnerability.title,
        "description": vulnerability.description,
    }
    optional = {
        "file": vulnerability.file,
        "start_line": vulnerability.start_line,
        "end_line": vulnerability.end_line,
        "code": vulnerability.code,
    }
    data.update({key: value for key, value in optional.items() if value is not None})
    return data
