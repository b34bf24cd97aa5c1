"""
Unit tests for the main module — composition root and CLI.

Tests drive the typer app with CliRunner against temporary bundles.
No test here needs a working openssl: bundles either hold no signature
files or point the decoder at a command that does not exist.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from cert_trust.adapters.console import Verbosity
from cert_trust.config import AppSettings
from cert_trust.main import (
    EXIT_CONFIGURATION_ERROR,
    EXIT_DECODER_FAILURE,
    EXIT_OK,
    _cli_overrides,
    _create_adapters,
    app,
    configure_structlog,
)

PACKAGE = "com.example.app"
MISSING_DECODER = "cert-trust-no-such-decoder"


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DIST_FOLDER", "LOG_LEVEL", "DECODER__COMMAND", "OUTPUT__VERBOSITY"):
        monkeypatch.delenv(name, raising=False)


class TestConfigureStructlog:
    def test_configure_structlog_sets_log_level(self) -> None:
        configure_structlog("WARNING")
        assert structlog.get_logger() is not None

    def test_configure_structlog_invalid_level_falls_back(self) -> None:
        configure_structlog("NONEXISTENT")
        assert structlog.get_logger() is not None


class TestCliOverrides:
    def test_no_flags_no_overrides(self) -> None:
        assert _cli_overrides(None, False, False, None, None, False, False, None, None, None) == {}

    def test_flags_map_to_nested_settings(self) -> None:
        overrides = _cli_overrides(
            Path("out/dist"), True, False, "libressl", 10.0, True, True, Path("reports"), "high", "debug"
        )
        assert overrides == {
            "dist_folder": Path("out/dist"),
            "log_level": "debug",
            "decoder": {"command": "libressl", "timeout_seconds": 10.0, "abort_on_failure": True},
            "output": {
                "verbosity": Verbosity.VERBOSE,
                "json_report": True,
                "results_folder": Path("reports"),
                "min_severity": "high",
            },
        }


class TestCreateAdapters:
    def test_adapters_follow_settings(self) -> None:
        settings = AppSettings(
            _env_file=None,
            decoder={"command": "libressl", "timeout_seconds": 5},
            output={"min_severity": "critical"},
        )
        _, decoder, results, _ = _create_adapters(settings, PACKAGE)
        assert decoder._command == "libressl"
        assert decoder._timeout_seconds == 5
        assert results.package == PACKAGE


class TestCli:
    def test_bundle_without_certificates(self, runner: CliRunner, make_bundle) -> None:
        """
        GIVEN a bundle whose META-INF has no RSA/DSA files
        WHEN the CLI runs with default verbosity
        THEN it exits 0 and prints the one-line confirmation.
        """
        dist = make_bundle(["MANIFEST.MF", "CERT.SF"], package=PACKAGE)

        result = runner.invoke(app, [PACKAGE, "--dist-folder", str(dist)])

        assert result.exit_code == EXIT_OK
        assert "Certificates analyzed." in result.stdout

    def test_quiet_prints_nothing(self, runner: CliRunner, make_bundle) -> None:
        dist = make_bundle(package=PACKAGE)

        result = runner.invoke(app, [PACKAGE, "--dist-folder", str(dist), "--quiet"])

        assert result.exit_code == EXIT_OK
        assert result.stdout == ""

    def test_verbose_and_quiet_conflict(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, [PACKAGE, "--dist-folder", str(tmp_path), "-v", "-q"])
        assert result.exit_code == EXIT_CONFIGURATION_ERROR

    def test_invalid_setting_is_configuration_error(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, [PACKAGE, "--dist-folder", str(tmp_path), "--min-severity", "severe"]
        )
        assert result.exit_code == EXIT_CONFIGURATION_ERROR

    def test_missing_bundle_is_not_fatal(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, [PACKAGE, "--dist-folder", str(tmp_path / "dist")])
        assert result.exit_code == EXIT_OK
        assert "Certificates analyzed." not in result.stdout

    def test_decoder_failure_skips_by_default(self, runner: CliRunner, make_bundle) -> None:
        dist = make_bundle(["CERT.RSA"], package=PACKAGE)

        result = runner.invoke(
            app, [PACKAGE, "--dist-folder", str(dist), "--decoder", MISSING_DECODER]
        )

        assert result.exit_code == EXIT_OK

    def test_decoder_failure_aborts_when_requested(self, runner: CliRunner, make_bundle) -> None:
        """
        GIVEN a bundle with CERT.RSA and a decoder that cannot be launched
        WHEN the CLI runs with --abort-on-decoder-failure
        THEN it exits with the decoder failure status.
        """
        dist = make_bundle(["CERT.RSA"], package=PACKAGE)

        result = runner.invoke(
            app,
            [
                PACKAGE,
                "--dist-folder",
                str(dist),
                "--decoder",
                MISSING_DECODER,
                "--abort-on-decoder-failure",
            ],
        )

        assert result.exit_code == EXIT_DECODER_FAILURE

    def test_json_report(self, runner: CliRunner, make_bundle, tmp_path: Path) -> None:
        dist = make_bundle(["MANIFEST.MF"], package=PACKAGE)
        reports = tmp_path / "reports"

        result = runner.invoke(
            app,
            [PACKAGE, "--dist-folder", str(dist), "--json-report", "--results-folder", str(reports)],
        )

        assert result.exit_code == EXIT_OK
        report = json.loads((reports / PACKAGE / "results.json").read_text(encoding="utf-8"))
        assert report["package"] == PACKAGE
        assert report["certificate"] is None
        assert report["vulnerabilities"] == []
