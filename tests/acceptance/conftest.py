"""
Acceptance test fixtures — real DER PKCS#7 signature blocks.

Certificates are generated with cryptography and wrapped as PKCS#7
certificate bundles, the same shape as the RSA/DSA blocks in META-INF.
Tests using them need the openssl binary on PATH and are skipped otherwise.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from datetime import UTC, datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import pkcs7
from cryptography.x509.oid import NameOID


@pytest.fixture(autouse=True)
def _require_openssl() -> None:
    if shutil.which("openssl") is None:
        pytest.skip("openssl binary not available on PATH")


def _name(common_name: str) -> x509.Name:
    return x509.Name(
        [
            x509.NameAttribute(NameOID.COUNTRY_NAME, "US"),
            x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Android"),
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        ]
    )


def build_signature_block(common_name: str, not_before: datetime, not_after: datetime) -> bytes:
    """Return a DER PKCS#7 bundle holding one self-signed certificate."""
    key = ec.generate_private_key(ec.SECP256R1())
    name = _name(common_name)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(not_before)
        .not_valid_after(not_after)
        .sign(key, hashes.SHA256())
    )
    return pkcs7.serialize_certificates([certificate], serialization.Encoding.DER)


@pytest.fixture()
def signature_block() -> Callable[..., bytes]:
    def _build(
        common_name: str = "Android Debug",
        not_before: datetime = datetime(1999, 1, 1, tzinfo=UTC),
        not_after: datetime = datetime(2000, 1, 5, tzinfo=UTC),
    ) -> bytes:
        return build_signature_block(common_name, not_before, not_after)

    return _build
