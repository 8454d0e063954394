"""Qualified certificate statements for PSD2 certificates.

This package provides the collaborators the request assembler relies on:
- CompetentAuthorityLookup: country code to national competent authority
- QCStatementCodec: DER encoding/decoding of the qcStatements payload
- CertificateType and Role: QcType and PSD2 role identifiers
"""

from eidas.qcstatements.authorities import (
    COMPETENT_AUTHORITIES,
    CompetentAuthority,
    CompetentAuthorityLookup,
    CompetentAuthorityNotFoundError,
    RegistryAuthorityLookup,
    competent_authority_for_country_code,
)
from eidas.qcstatements.statements import (
    PSD2QCStatementCodec,
    QCStatementCodec,
    QCStatementError,
    extract,
    extract_qc_type,
    serialize,
)
from eidas.qcstatements.types import CertificateType, Role

__all__ = [
    "COMPETENT_AUTHORITIES",
    "CertificateType",
    "CompetentAuthority",
    "CompetentAuthorityLookup",
    "CompetentAuthorityNotFoundError",
    "PSD2QCStatementCodec",
    "QCStatementCodec",
    "QCStatementError",
    "RegistryAuthorityLookup",
    "Role",
    "competent_authority_for_country_code",
    "extract",
    "extract_qc_type",
    "serialize",
]
