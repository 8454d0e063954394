"""X.509 extension builders for eIDAS certificate requests.

The key usage and extended key usage required for each certificate type
live in a single policy table so the two lookups always agree on what a
valid type is.

    QWAC   keyUsage = digitalSignature
           extKeyUsage = serverAuth, clientAuth
    QSEAL  keyUsage = digitalSignature, nonRepudiation
           extKeyUsage = (none, extension omitted)

All builders are pure and return ``cryptography.x509.Extension`` values
(object identifier, criticality, extension value).
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.x509.oid import ExtendedKeyUsageOID, ExtensionOID

from eidas.qcstatements import CertificateType

logger = logging.getLogger(__name__)

QC_STATEMENTS_OID = x509.ObjectIdentifier("1.3.6.1.5.5.7.1.3")


class KeyUsageFlag(str, Enum):
    """Key usage bits in X.509 bit order (digitalSignature is bit 0).

    Values are the matching ``cryptography.x509.KeyUsage`` argument names.
    """

    DIGITAL_SIGNATURE = "digital_signature"
    NON_REPUDIATION = "content_commitment"
    KEY_ENCIPHERMENT = "key_encipherment"
    DATA_ENCIPHERMENT = "data_encipherment"
    KEY_AGREEMENT = "key_agreement"
    KEY_CERT_SIGN = "key_cert_sign"
    CRL_SIGN = "crl_sign"
    ENCIPHER_ONLY = "encipher_only"
    DECIPHER_ONLY = "decipher_only"


@dataclass(frozen=True, slots=True)
class CertificatePolicy:
    """Key usages required for one certificate type.

    Attributes:
        key_usage: Key usage flags, in bit order.
        extended_key_usage: Extended key usage OIDs, in output order.
    """

    key_usage: tuple[KeyUsageFlag, ...]
    extended_key_usage: tuple[x509.ObjectIdentifier, ...]


CERTIFICATE_POLICIES: Mapping[CertificateType, CertificatePolicy] = MappingProxyType(
    {
        CertificateType.QWAC: CertificatePolicy(
            key_usage=(KeyUsageFlag.DIGITAL_SIGNATURE,),
            extended_key_usage=(
                ExtendedKeyUsageOID.SERVER_AUTH,
                ExtendedKeyUsageOID.CLIENT_AUTH,
            ),
        ),
        CertificateType.QSEAL: CertificatePolicy(
            key_usage=(
                KeyUsageFlag.DIGITAL_SIGNATURE,
                KeyUsageFlag.NON_REPUDIATION,
            ),
            extended_key_usage=(),
        ),
    }
)


def policy_for_type(cert_type: Any) -> CertificatePolicy:
    """Return the usage policy for a certificate type.

    Raises:
        UnsupportedCertificateType: If cert_type is not QWAC or QSEAL.
    """
    return CERTIFICATE_POLICIES[CertificateType.coerce(cert_type)]


def key_usage_for_type(cert_type: Any) -> list[KeyUsageFlag]:
    """Key usage flags required for a certificate type."""
    return list(policy_for_type(cert_type).key_usage)


def extended_key_usage_for_type(cert_type: Any) -> list[x509.ObjectIdentifier]:
    """Extended key usage OIDs required for a certificate type.

    Returns an empty list for QSEAL; callers must then leave the extension
    out of the request entirely.
    """
    return list(policy_for_type(cert_type).extended_key_usage)


def key_usage_extension(flags: Iterable[KeyUsageFlag]) -> x509.Extension:
    """Build the critical keyUsage extension.

    The bit string is DER encoded with trailing zero bits removed, so
    digitalSignature alone encodes as ``03 02 07 80`` and digitalSignature
    with nonRepudiation as ``03 02 06 C0``.
    """
    enabled = {KeyUsageFlag(flag) for flag in flags}
    usage = x509.KeyUsage(**{flag.value: flag in enabled for flag in KeyUsageFlag})
    return x509.Extension(ExtensionOID.KEY_USAGE, True, usage)


def extended_key_usage_extension(oids: Iterable[x509.ObjectIdentifier]) -> x509.Extension:
    """Build the non-critical extKeyUsage extension."""
    return x509.Extension(
        ExtensionOID.EXTENDED_KEY_USAGE,
        False,
        x509.ExtendedKeyUsage(list(oids)),
    )


def subject_key_identifier(public_key: rsa.RSAPublicKey) -> x509.Extension:
    """Build the subjectKeyIdentifier extension.

    The identifier is the SHA-1 digest of the PKCS#1 RSAPublicKey DER
    encoding (RFC 5280 section 4.2.1.2, method 1).
    """
    try:
        der = public_key.public_bytes(Encoding.DER, PublicFormat.PKCS1)
    except (ValueError, TypeError) as e:
        logger.critical("Failed to marshal subject key identifier: %s", e)
        msg = f"failed to marshal subject key identifier: {e}"
        raise RuntimeError(msg) from e

    digest = hashlib.sha1(der).digest()  # noqa: S324 - identifier, not a signature hash
    return x509.Extension(
        ExtensionOID.SUBJECT_KEY_IDENTIFIER,
        False,
        x509.SubjectKeyIdentifier(digest),
    )


def qc_statements_extension(data: bytes) -> x509.Extension:
    """Wrap an encoded qcStatements payload as a non-critical extension."""
    return x509.Extension(
        QC_STATEMENTS_OID,
        False,
        x509.UnrecognizedExtension(QC_STATEMENTS_OID, data),
    )
