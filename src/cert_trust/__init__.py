"""
cert_trust — signing-certificate trust checker for unpacked application bundles.

Finds the PKCS#7 signature files in a bundle's META-INF directory, decodes
them with openssl, and flags debug-signed or expired certificates.

Built on the Railway-Oriented Programming (ROP) helpers in `railway` for
explicit, composable error handling.
"""

__version__ = "0.1.0"
