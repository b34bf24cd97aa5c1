"""
Console adapter — human-facing progress and summary output.

Implements the AnalysisReporter port. Verbosity is passed in explicitly:

  quiet    → only errors (stderr)
  normal   → warnings, errors and a one-line confirmation
  verbose  → everything, including the decoded certificate text

Structured diagnostics go through structlog; this module is the report a
person reads at the terminal.
"""

from __future__ import annotations

import sys
from enum import StrEnum
from typing import TextIO

from cert_trust.domain.models import Vulnerability


class Verbosity(StrEnum):
    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ConsoleReporter:
    def __init__(
        self,
        verbosity: Verbosity = Verbosity.NORMAL,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self._verbosity = verbosity
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr

    @property
    def is_verbose(self) -> bool:
        return self._verbosity is Verbosity.VERBOSE

    @property
    def is_quiet(self) -> bool:
        return self._verbosity is Verbosity.QUIET

    def start(self) -> None:
        if self.is_verbose:
            print("Reading and analyzing the certificates…", file=self._out)

    def certificate(self, name: str, text: str) -> None:
        if self.is_verbose:
            print(f"The application is signed with the following certificate: {name}", file=self._out)
            print(text, file=self._out)

    def vulnerability(self, vulnerability: Vulnerability) -> None:
        if self.is_verbose:
            label = vulnerability.severity.value.capitalize()
            print(f"{label} vulnerability found: {vulnerability.description}", file=self._out)

    def warning(self, message: str) -> None:
        if not self.is_quiet:
            print(f"Warning: {message}", file=self._err)

    def error(self, message: str) -> None:
        print(f"Error: {message}", file=self._err)

    def finish(self) -> None:
        if self.is_verbose:
            print(file=self._out)
            print("The certificates were analyzed correctly!", file=self._out)
            print(file=self._out)
        elif not self.is_quiet:
            print("Certificates analyzed.", file=self._out)
