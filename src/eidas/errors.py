"""Exceptions raised while building eIDAS certificate requests.

Every error is terminal: nothing is retried inside the library and no
partial request is ever returned alongside one. Each exception keeps the
offending value as an attribute so callers can report it without parsing
the message.
"""

from __future__ import annotations

from typing import Any


class EidasError(Exception):
    """Base exception for certificate request errors."""

    pass


class UnsupportedKeyType(EidasError):
    """Raised when the signing key is not an RSA key."""

    def __init__(self, key_type: str) -> None:
        """Initialize with the concrete key type found.

        Args:
            key_type: Class name of the offending public key.
        """
        self.key_type = key_type
        super().__init__(f"only RSA keys are currently supported but got: {key_type}")


class UnsupportedCertificateType(EidasError):
    """Raised when a certificate type is neither QWAC nor QSEAL."""

    def __init__(self, certificate_type: Any) -> None:
        self.certificate_type = certificate_type
        super().__init__(f"unknown QC type: {certificate_type!r}")


class UnknownCountryCode(EidasError):
    """Raised when no competent authority is registered for a country code."""

    def __init__(self, country_code: str) -> None:
        self.country_code = country_code
        super().__init__(f"no competent authority known for country code: {country_code!r}")


class QCStatementEncodingFailed(EidasError):
    """Raised when the qcStatements payload cannot be encoded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to encode qcStatements: {reason}")


class SigningFailed(EidasError):
    """Raised when the certificate request cannot be signed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"failed to sign certificate request: {reason}")


class KeyGenerationFailed(EidasError):
    """Raised when a fresh RSA key pair cannot be generated."""

    def __init__(self, key_size: int, reason: str) -> None:
        self.key_size = key_size
        self.reason = reason
        super().__init__(f"failed to generate {key_size}-bit RSA key pair: {reason}")


class ConflictingExtensionError(EidasError):
    """Raised when a request option adds an extension that is already present.

    Options may extend a request but never replace the mandatory
    key usage, extended key usage, subject key identifier, qcStatements
    or subject alternative name extensions.
    """

    def __init__(self, oid: str) -> None:
        self.oid = oid
        super().__init__(f"extension {oid} is already set on the certificate request")
