"""
Subprocess adapter — decode PKCS#7 signature files with the openssl CLI.

Implements the CertificateDecoder port by running:

    openssl pkcs7 -inform DER -in <file> -noout -print_certs -text

and returning its stdout. Launch failures, non-zero exits and (optional)
timeouts come back as EXTERNAL_TOOL_ERROR failures; whether one failing
file aborts the run is the caller's decision.

With no timeout configured the call blocks until openssl exits, so a hung
decoder hangs the analysis.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog
from railway.result import Result

from cert_trust.domain.failures import CertificateFailures

log = structlog.get_logger()


def build_decoder_command(command: str, path: Path) -> list[str]:
    return [
        command,
        "pkcs7",
        "-inform",
        "DER",
        "-in",
        str(path),
        "-noout",
        "-print_certs",
        "-text",
    ]


class OpensslCertificateDecoder:
    """
    Decode DER PKCS#7 signed-data into the openssl text dump.

    Implements the CertificateDecoder port.
    """

    def __init__(self, command: str = "openssl", timeout_seconds: float | None = None) -> None:
        self._command = command
        self._timeout_seconds = timeout_seconds

    def decode(self, path: Path) -> Result[str]:
        argv = build_decoder_command(self._command, path)
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                check=False,
                timeout=self._timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            log.error("decoder.tool_timeout", file=str(path), timeout=self._timeout_seconds)
            return CertificateFailures.tool_timeout(self._command, e.timeout, e)
        except OSError as e:
            log.error("decoder.tool_spawn", file=str(path), command=self._command, error=str(e))
            return CertificateFailures.tool_spawn(self._command, e)

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            log.error("decoder.tool_exit", file=str(path), returncode=completed.returncode)
            return CertificateFailures.tool_exit(self._command, completed.returncode, stderr)

        text = completed.stdout.decode("utf-8", errors="replace")
        log.debug("decoder.decoded", file=str(path), chars=len(text))
        return Result.success(text)
