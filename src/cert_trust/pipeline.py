"""
Pipeline — analyze the signing certificates of one unpacked bundle.

All I/O is injected via ports (Protocol interfaces):

  locator.locate(META-INF)
    → for each *.RSA / *.DSA candidate (sequentially):
        decoder.decode(file)
          → results.set_certificate(text)
            → assess_certificate(text, today)
              → results.add_vulnerability(finding) for each finding

Decoder failures are reported and the candidate skipped, unless
`abort_on_decoder_failure` is set, in which case the first one ends the run
as a failure. Parse failures are reported as warnings and never abort.
An unreadable META-INF directory leaves nothing to analyze: it is reported
as a warning and the run ends without the completion line.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import structlog
from railway.failure import FailureDescription
from railway.result import Result

from cert_trust.domain.models import AnalysisSummary, CandidateFile, CertificateAssessment, Vulnerability
from cert_trust.domain.policies import assess_certificate
from cert_trust.domain.ports import AnalysisReporter, CandidateLocator, CertificateDecoder, ResultsStore

log = structlog.get_logger()


def _record_assessment(
    assessment: CertificateAssessment,
    candidate: CandidateFile,
    results: ResultsStore,
    reporter: AnalysisReporter,
) -> list[Vulnerability]:
    """Store and report each finding; return only the ones the store kept."""
    kept: list[Vulnerability] = []
    for finding in assessment.findings:
        if not results.add_vulnerability(finding):
            continue
        kept.append(finding)
        reporter.vulnerability(finding)
    for failure in assessment.failures:
        log.warning("pipeline.check_incomplete", file=candidate.name, failure=failure.describe())
        reporter.warning(f"{candidate.name}: {failure.message}")
    return kept


def run_certificate_analysis(
    package: str,
    meta_inf_dir: Path,
    *,
    locator: CandidateLocator,
    decoder: CertificateDecoder,
    results: ResultsStore,
    reporter: AnalysisReporter,
    today: date,
    abort_on_decoder_failure: bool = False,
) -> Result[AnalysisSummary]:
    """
    Execute the certificate analysis for `package`.

    Returns Result[AnalysisSummary] on completion, including partial runs
    where candidates were skipped. Returns the decoder's failure only when
    `abort_on_decoder_failure` is set and a decode fails.
    """
    structlog.contextvars.bind_contextvars(package=package)
    try:
        reporter.start()

        located = locator.locate(meta_inf_dir)
        if located.is_failure():
            reporter.warning(located.error().message)
            return Result.success(AnalysisSummary(package=package))

        candidates = [c for c in located.value() if c.is_certificate]
        findings: list[Vulnerability] = []
        skipped: list[tuple[str, FailureDescription]] = []
        decoded = 0

        for candidate in candidates:
            decoding = decoder.decode(candidate.path)
            if decoding.is_failure():
                failure = decoding.error()
                reporter.error(failure.message)
                if abort_on_decoder_failure:
                    log.error("pipeline.aborted", file=candidate.name, failure=failure.describe())
                    return decoding
                log.warning("pipeline.candidate_skipped", file=candidate.name, failure=failure.describe())
                skipped.append((candidate.name, failure))
                continue

            text = decoding.value()
            decoded += 1
            reporter.certificate(candidate.name, text)
            results.set_certificate(text)

            assessed = assess_certificate(text, today)
            if assessed.is_failure():
                failure = assessed.error()
                log.warning("pipeline.candidate_skipped", file=candidate.name, failure=failure.describe())
                reporter.warning(f"{candidate.name}: {failure.message}")
                skipped.append((candidate.name, failure))
                continue

            findings.extend(_record_assessment(assessed.value(), candidate, results, reporter))

        reporter.finish()
        log.info(
            "pipeline.complete",
            candidates=len(candidates),
            decoded=decoded,
            findings=len(findings),
            skipped=len(skipped),
        )
        return Result.success(
            AnalysisSummary(
                package=package,
                candidates=len(candidates),
                decoded=decoded,
                findings=tuple(findings),
                skipped=tuple(skipped),
            )
        )
    finally:
        structlog.contextvars.unbind_contextvars("package")
