"""
Shared test fixtures and helpers for the cert-trust test suite.

Provides:
  - a renderer for openssl-style certificate text dumps
  - a factory for unpacked bundle directories (dist/<pkg>/original/META-INF)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest
import structlog

DEBUG_ISSUER = "C=US, O=Android, CN=Android Debug"
RELEASE_ISSUER = "C=DE, ST=Berlin, O=Example GmbH, CN=Example Release"

_DUMP_TEMPLATE = """\
Certificate:
    Data:
        Version: 1 (0x0)
        Serial Number: 1303849591 (0x4db6fe77)
    Signature Algorithm: sha1WithRSAEncryption
{issuer_line}
        Validity
            Not Before: Apr 26 20:26:31 2011 GMT
{not_after_line}
{subject_line}
        Subject Public Key Info:
            Public Key Algorithm: rsaEncryption
                Public-Key: (1024 bit)
                Exponent: 65537 (0x10001)
    Signature Algorithm: sha1WithRSAEncryption
         2f:ae:80:fd:ed:60:c5:ba:4a:a5:6e:30:02:cf:b8:a0:08:d0:
"""

RenderDump = Callable[..., str]


def render_dump(
    issuer: str = RELEASE_ISSUER,
    subject: str | None = None,
    not_after: str = "Apr 19 20:26:31 2041 GMT",
    omit: Iterable[str] = (),
) -> str:
    """
    Render an openssl `pkcs7 -print_certs -text` style dump.

    `omit` may contain "issuer", "subject" and/or "not_after" to drop those lines.
    """
    omitted = set(omit)
    subject = issuer if subject is None else subject
    return _DUMP_TEMPLATE.format(
        issuer_line="" if "issuer" in omitted else f"        Issuer: {issuer}",
        not_after_line="" if "not_after" in omitted else f"            Not After : {not_after}",
        subject_line="" if "subject" in omitted else f"        Subject: {subject}",
    )


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """CLI tests configure structlog against a captured stream; undo it afterwards."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture()
def dump() -> RenderDump:
    """Return the openssl dump renderer."""
    return render_dump


@pytest.fixture()
def make_bundle(tmp_path: Path) -> Callable[..., Path]:
    """
    Return a factory creating `<tmp>/dist/<package>/original/META-INF` with the
    given file names (contents are placeholder bytes). Returns the dist folder.
    """

    def _make(files: Iterable[str] = (), package: str = "com.example.app") -> Path:
        dist = tmp_path / "dist"
        meta_inf = dist / package / "original" / "META-INF"
        meta_inf.mkdir(parents=True, exist_ok=True)
        for name in files:
            (meta_inf / name).write_bytes(b"\x30\x82\x01\x00")
        return dist

    return _make
