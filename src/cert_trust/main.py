"""
Application entry point — CLI, dependency wiring and process exit codes.

Composition root: creates concrete adapters, injects them into the
pipeline, and turns the pipeline's Result into an exit status.

This is the ONLY place where concrete classes are instantiated.
Everything else depends on Protocol interfaces.

Responsibilities:
  1. Parse command-line flags (typer)
  2. Load and validate configuration (flags override environment)
  3. Configure structlog for structured logging
  4. Create concrete adapters and run the pipeline
  5. Optionally persist the JSON report
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, Optional, TypeAlias

import structlog
import typer
from pydantic import ValidationError
from railway import ErrorCode, LoggingExecutionContext, Result

from cert_trust import __version__
from cert_trust.adapters.console import ConsoleReporter, Verbosity
from cert_trust.adapters.locator import FilesystemCandidateLocator, signing_metadata_dir
from cert_trust.adapters.openssl_decoder import OpensslCertificateDecoder
from cert_trust.adapters.results import AnalysisResults
from cert_trust.config import AppSettings
from cert_trust.pipeline import run_certificate_analysis

EXIT_OK = 0
EXIT_CONFIGURATION_ERROR = 1
EXIT_DECODER_FAILURE = 2
EXIT_ANALYSIS_FAILURE = 3

app = typer.Typer(
    name="cert-trust",
    help="Check the signing certificate of an unpacked application bundle.",
    no_args_is_help=True,
    add_completion=False,
)


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured, human-readable logging on stderr.

    stdout is reserved for the analysis report.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


_Adapters: TypeAlias = tuple[
    FilesystemCandidateLocator,
    OpensslCertificateDecoder,
    AnalysisResults,
    ConsoleReporter,
]


def _create_adapters(settings: AppSettings, package: str) -> _Adapters:
    """Instantiate the locator, decoder, results store and reporter."""
    locator = FilesystemCandidateLocator()
    decoder = OpensslCertificateDecoder(
        command=settings.decoder.command,
        timeout_seconds=settings.decoder.timeout_seconds,
    )
    results = AnalysisResults(package, min_severity=settings.output.min_severity)
    reporter = ConsoleReporter(settings.output.verbosity)
    return locator, decoder, results, reporter


def _cli_overrides(
    dist_folder: Path | None,
    verbose: bool,
    quiet: bool,
    decoder: str | None,
    decoder_timeout: float | None,
    abort_on_decoder_failure: bool,
    json_report: bool,
    results_folder: Path | None,
    min_severity: str | None,
    log_level: str | None,
) -> dict[str, Any]:
    """Only flags the user actually passed override the environment."""
    overrides: dict[str, Any] = {}
    decoder_overrides: dict[str, Any] = {}
    output_overrides: dict[str, Any] = {}

    if dist_folder is not None:
        overrides["dist_folder"] = dist_folder
    if log_level is not None:
        overrides["log_level"] = log_level
    if decoder is not None:
        decoder_overrides["command"] = decoder
    if decoder_timeout is not None:
        decoder_overrides["timeout_seconds"] = decoder_timeout
    if abort_on_decoder_failure:
        decoder_overrides["abort_on_failure"] = True
    if verbose:
        output_overrides["verbosity"] = Verbosity.VERBOSE
    elif quiet:
        output_overrides["verbosity"] = Verbosity.QUIET
    if json_report:
        output_overrides["json_report"] = True
    if results_folder is not None:
        output_overrides["results_folder"] = results_folder
    if min_severity is not None:
        output_overrides["min_severity"] = min_severity

    if decoder_overrides:
        overrides["decoder"] = decoder_overrides
    if output_overrides:
        overrides["output"] = output_overrides
    return overrides


@app.command()
def check(
    package: Annotated[str, typer.Argument(help="Name of the unpacked bundle under the dist folder")],
    dist_folder: Annotated[Optional[Path], typer.Option(help="Folder holding unpacked bundles")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Print the decoded certificate")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Print nothing but errors")] = False,
    decoder: Annotated[Optional[str], typer.Option(help="Certificate decoder executable")] = None,
    decoder_timeout: Annotated[Optional[float], typer.Option(help="Decoder timeout in seconds")] = None,
    abort_on_decoder_failure: Annotated[
        bool, typer.Option(help="Stop at the first decoder failure")
    ] = False,
    json_report: Annotated[bool, typer.Option(help="Write results.json to the results folder")] = False,
    results_folder: Annotated[Optional[Path], typer.Option(help="Folder for JSON reports")] = None,
    min_severity: Annotated[Optional[str], typer.Option(help="Drop findings below this severity")] = None,
    log_level: Annotated[Optional[str], typer.Option(help="structlog level (DEBUG, INFO, ...)")] = None,
) -> None:
    """Analyze the signing certificates of PACKAGE."""
    if verbose and quiet:
        print("FATAL: Configuration error — --verbose and --quiet are mutually exclusive", file=sys.stderr)  # noqa: T201
        raise typer.Exit(EXIT_CONFIGURATION_ERROR)

    try:
        settings = AppSettings(
            **_cli_overrides(
                dist_folder,
                verbose,
                quiet,
                decoder,
                decoder_timeout,
                abort_on_decoder_failure,
                json_report,
                results_folder,
                min_severity,
                log_level,
            )
        )
    except ValidationError as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        raise typer.Exit(EXIT_CONFIGURATION_ERROR) from None

    configure_structlog(settings.log_level)
    log = structlog.get_logger()
    log.info(
        "app.starting",
        version=__version__,
        package=package,
        dist_folder=str(settings.dist_folder),
        decoder=settings.decoder.command,
    )

    locator, cert_decoder, results, reporter = _create_adapters(settings, package)
    meta_inf_dir = signing_metadata_dir(settings.dist_folder, package)
    ctx = LoggingExecutionContext(operation="CertificateAnalysis")

    outcome = ctx.execute(
        lambda: run_certificate_analysis(
            package,
            meta_inf_dir,
            locator=locator,
            decoder=cert_decoder,
            results=results,
            reporter=reporter,
            today=datetime.now().date(),
            abort_on_decoder_failure=settings.decoder.abort_on_failure,
        )
    )

    if outcome.is_failure():
        failure = outcome.error()
        log.error("app.analysis_failed", failure=failure.describe())
        if failure.code is ErrorCode.EXTERNAL_TOOL_ERROR:
            raise typer.Exit(EXIT_DECODER_FAILURE)
        raise typer.Exit(EXIT_ANALYSIS_FAILURE)

    summary = outcome.value()
    log.info(
        "app.analysis_completed",
        findings=len(summary.findings),
        skipped=len(summary.skipped),
    )

    if settings.output.json_report:
        written = Result.from_computation(
            lambda: results.write_json(settings.output.results_folder),
            ErrorCode.IO_ERROR,
            f"Cannot write the JSON report under {settings.output.results_folder}",
        )
        if written.is_failure():
            reporter.error(written.error().message)
            log.error("app.report_failed", failure=written.error().describe())
            raise typer.Exit(EXIT_ANALYSIS_FAILURE)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
