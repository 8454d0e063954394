"""DER codec for the qcStatements extension payload.

Covers: ETSI EN 319 412-5 (QcCompliance, QcType) and ETSI TS 119 495
(PSD2 qcStatement).

Structure produced by ``serialize``::

    QCStatements ::= SEQUENCE OF QCStatement
    QCStatement  ::= SEQUENCE { statementId OBJECT IDENTIFIER,
                                statementInfo ANY OPTIONAL }

    id-etsi-qcs-QcCompliance   no statementInfo
    id-etsi-qcs-QcType         SEQUENCE OF OBJECT IDENTIFIER
    id-etsi-psd2-qcStatement   PSD2QcType

    PSD2QcType ::= SEQUENCE { rolesOfPSP RolesOfPSP, nCAName UTF8String,
                              nCAId UTF8String }
    RolesOfPSP ::= SEQUENCE OF SEQUENCE { roleOfPspOid OBJECT IDENTIFIER,
                                          roleOfPspName UTF8String }
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import base, char, namedtype, univ
from pyasn1_modules.rfc3739 import QCStatement, QCStatements

from eidas.qcstatements.authorities import CompetentAuthority
from eidas.qcstatements.types import ROLE_OIDS, CertificateType, Role

logger = logging.getLogger(__name__)

QC_COMPLIANCE_OID = "0.4.0.1862.1.1"
QC_TYPE_OID = "0.4.0.1862.1.6"
PSD2_QC_STATEMENT_OID = "0.4.0.19495.2"

# ub-PSD2 name and identifier bounds from ETSI TS 119 495 annex A
MAX_AUTHORITY_FIELD_LENGTH = 256


class QCStatementError(Exception):
    """Raised when a qcStatements payload cannot be encoded or decoded."""

    pass


class QCStatementCodec(Protocol):
    """Encodes and decodes PSD2 qcStatements payloads.

    Implementations must raise QCStatementError for any roles, authority or
    payload they cannot handle. Certificate request assembly reports only
    that exception as QCStatementEncodingFailed; anything else propagates.
    """

    def encode(
        self,
        roles: Sequence[Role],
        authority: CompetentAuthority,
        cert_type: CertificateType,
    ) -> bytes: ...

    def decode(self, data: bytes) -> tuple[list[Role], str, str]: ...


# ---------------------------------------------------------------------------
# ASN.1 types
# ---------------------------------------------------------------------------
class QcType(univ.SequenceOf):
    componentType = univ.ObjectIdentifier()


class RoleOfPSP(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("roleOfPspOid", univ.ObjectIdentifier()),
        namedtype.NamedType("roleOfPspName", char.UTF8String()),
    )


class RolesOfPSP(univ.SequenceOf):
    componentType = RoleOfPSP()


class PSD2QcType(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType("rolesOfPSP", RolesOfPSP()),
        namedtype.NamedType("nCAName", char.UTF8String()),
        namedtype.NamedType("nCAId", char.UTF8String()),
    )


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------
def _statement(statement_id: str, info: base.Asn1Item | None = None) -> QCStatement:
    statement = QCStatement()
    statement["statementId"] = univ.ObjectIdentifier(statement_id)
    if info is not None:
        statement["statementInfo"] = univ.Any(encoder.encode(info))
    return statement


def _check_authority_field(field: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        msg = f"competent authority {field} must be a non-empty string"
        raise QCStatementError(msg)
    if len(value) > MAX_AUTHORITY_FIELD_LENGTH:
        msg = (
            f"competent authority {field} exceeds {MAX_AUTHORITY_FIELD_LENGTH} "
            f"characters: {len(value)}"
        )
        raise QCStatementError(msg)


def serialize(
    roles: Sequence[Role],
    authority: CompetentAuthority,
    cert_type: CertificateType,
) -> bytes:
    """Encode the qcStatements extension value.

    Args:
        roles: PSD2 roles granted to the organization, in output order.
        authority: Competent authority that granted the roles.
        cert_type: QWAC or QSEAL.

    Returns:
        DER-encoded QCStatements sequence.

    Raises:
        UnsupportedCertificateType: If cert_type is not QWAC or QSEAL.
        QCStatementError: If roles or authority data cannot be encoded.
    """
    cert_type = CertificateType.coerce(cert_type)
    if not roles:
        msg = "at least one PSD2 role is required"
        raise QCStatementError(msg)
    _check_authority_field("name", authority.name)
    _check_authority_field("id", authority.id)

    try:
        roles = [Role(role) for role in roles]
    except ValueError as e:
        msg = f"unknown PSD2 role in {list(roles)!r}"
        raise QCStatementError(msg) from e

    try:
        data = _encode_statements(roles, authority, cert_type)
    except PyAsn1Error as e:
        msg = f"cannot encode qcStatements: {e}"
        raise QCStatementError(msg) from e

    logger.debug(
        "Encoded qcStatements: type=%s, roles=%s, authority=%s",
        cert_type.value,
        ",".join(role.value for role in roles),
        authority.id,
    )
    return data


def _encode_statements(
    roles: Sequence[Role],
    authority: CompetentAuthority,
    cert_type: CertificateType,
) -> bytes:
    psd2 = PSD2QcType()
    for index, role in enumerate(roles):
        entry = RoleOfPSP()
        entry["roleOfPspOid"] = univ.ObjectIdentifier(role.oid)
        entry["roleOfPspName"] = char.UTF8String(role.value)
        psd2["rolesOfPSP"][index] = entry
    psd2["nCAName"] = char.UTF8String(authority.name)
    psd2["nCAId"] = char.UTF8String(authority.id)

    qc_type = QcType()
    qc_type[0] = univ.ObjectIdentifier(cert_type.oid)

    statements = QCStatements()
    statements[0] = _statement(QC_COMPLIANCE_OID)
    statements[1] = _statement(QC_TYPE_OID, qc_type)
    statements[2] = _statement(PSD2_QC_STATEMENT_OID, psd2)
    return encoder.encode(statements)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------
def _decode(data: bytes, schema: base.Asn1Item) -> base.Asn1Item:
    try:
        value, rest = decoder.decode(data, asn1Spec=schema)
    except PyAsn1Error as e:
        msg = f"malformed qcStatements: {e}"
        raise QCStatementError(msg) from e
    if rest:
        msg = f"malformed qcStatements: {len(rest)} trailing bytes"
        raise QCStatementError(msg)
    return value


def _statement_info(data: bytes, statement_id: str) -> bytes:
    for statement in _decode(data, QCStatements()):
        if str(statement["statementId"]) != statement_id:
            continue
        info = statement["statementInfo"]
        if not info.isValue:
            msg = f"statement {statement_id} carries no statementInfo"
            raise QCStatementError(msg)
        return info.asOctets()
    msg = f"statement {statement_id} not found in qcStatements"
    raise QCStatementError(msg)


def extract(data: bytes) -> tuple[list[Role], str, str]:
    """Decode the PSD2 statement from a qcStatements extension value.

    Returns:
        Tuple of (roles, competent authority name, competent authority id).

    Raises:
        QCStatementError: If the payload is malformed, has no PSD2 statement,
            or names a role this library does not know.
    """
    psd2 = _decode(_statement_info(data, PSD2_QC_STATEMENT_OID), PSD2QcType())

    oid_to_role = {oid: role for role, oid in ROLE_OIDS.items()}
    roles: list[Role] = []
    for entry in psd2["rolesOfPSP"]:
        oid = str(entry["roleOfPspOid"])
        if oid not in oid_to_role:
            msg = f"unknown PSD2 role OID: {oid}"
            raise QCStatementError(msg)
        roles.append(oid_to_role[oid])

    return roles, str(psd2["nCAName"]), str(psd2["nCAId"])


def extract_qc_type(data: bytes) -> CertificateType:
    """Decode the declared certificate type from a qcStatements value."""
    qc_type = _decode(_statement_info(data, QC_TYPE_OID), QcType())
    if len(qc_type) != 1:
        msg = f"expected exactly one QcType, got {len(qc_type)}"
        raise QCStatementError(msg)
    return CertificateType.from_oid(str(qc_type[0]))


class PSD2QCStatementCodec:
    """Default qcStatements codec backed by ``serialize`` and ``extract``."""

    def encode(
        self,
        roles: Sequence[Role],
        authority: CompetentAuthority,
        cert_type: CertificateType,
    ) -> bytes:
        return serialize(roles, authority, cert_type)

    def decode(self, data: bytes) -> tuple[list[Role], str, str]:
        return extract(data)
