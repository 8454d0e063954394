"""Certificate types and PSD2 roles carried in qcStatements.

Object identifiers follow ETSI EN 319 412-5 (QcType) and
ETSI TS 119 495 (PSD2 roles).
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from eidas.errors import UnsupportedCertificateType


class CertificateType(str, Enum):
    """Qualified certificate type requested by the organization.

    QWAC certificates authenticate TLS endpoints; QSEAL certificates
    seal (sign) data on behalf of the organization.
    """

    QWAC = "qwac"
    QSEAL = "qseal"

    @property
    def oid(self) -> str:
        """ETSI QcType object identifier for this certificate type."""
        return QC_TYPE_OIDS[self]

    @classmethod
    def coerce(cls, value: Any) -> CertificateType:
        """Resolve a certificate type from an enum member or its value.

        Raises:
            UnsupportedCertificateType: If the value names no known type.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError) as e:
            raise UnsupportedCertificateType(value) from e

    @classmethod
    def from_oid(cls, oid: str) -> CertificateType:
        """Resolve a certificate type from its QcType object identifier."""
        for cert_type, type_oid in QC_TYPE_OIDS.items():
            if type_oid == oid:
                return cert_type
        raise UnsupportedCertificateType(oid)


# id-etsi-qct-eseal and id-etsi-qct-web
QC_TYPE_OIDS: dict[CertificateType, str] = {
    CertificateType.QSEAL: "0.4.0.1862.1.6.2",
    CertificateType.QWAC: "0.4.0.1862.1.6.3",
}


class Role(str, Enum):
    """Role of a payment service provider granted by its competent authority."""

    ACCOUNT_SERVICING = "PSP_AS"
    PAYMENT_INITIATION = "PSP_PI"
    ACCOUNT_INFORMATION = "PSP_AI"
    PAYMENT_INSTRUMENTS = "PSP_IC"

    @property
    def oid(self) -> str:
        """ETSI TS 119 495 object identifier for this role."""
        return ROLE_OIDS[self]


ROLE_OIDS: dict[Role, str] = {
    Role.ACCOUNT_SERVICING: "0.4.0.19495.1.1",
    Role.PAYMENT_INITIATION: "0.4.0.19495.1.2",
    Role.ACCOUNT_INFORMATION: "0.4.0.19495.1.3",
    Role.PAYMENT_INSTRUMENTS: "0.4.0.19495.1.4",
}
