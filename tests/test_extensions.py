"""Tests for the X.509 extension builders.

Tests cover:
- Per-type key usage and extended key usage lookups
- Rejection of unknown certificate types by both lookups
- DER encoding of the key usage bit string
- Subject key identifier derivation
- qcStatements extension wrapping
"""

import hashlib

import pytest
from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from cryptography.x509.oid import ExtendedKeyUsageOID, ExtensionOID

from eidas.errors import UnsupportedCertificateType
from eidas.qcstatements import CertificateType
from eidas.services.extensions import (
    CERTIFICATE_POLICIES,
    QC_STATEMENTS_OID,
    KeyUsageFlag,
    extended_key_usage_extension,
    extended_key_usage_for_type,
    key_usage_extension,
    key_usage_for_type,
    policy_for_type,
    qc_statements_extension,
    subject_key_identifier,
)


class TestKeyUsageForType:
    """Tests for the key usage lookup."""

    def test_qwac_is_digital_signature_only(self):
        """Test QWAC requires exactly digitalSignature."""
        assert key_usage_for_type(CertificateType.QWAC) == [KeyUsageFlag.DIGITAL_SIGNATURE]

    def test_qseal_adds_non_repudiation(self):
        """Test QSEAL requires digitalSignature then nonRepudiation."""
        assert key_usage_for_type(CertificateType.QSEAL) == [
            KeyUsageFlag.DIGITAL_SIGNATURE,
            KeyUsageFlag.NON_REPUDIATION,
        ]

    def test_accepts_enum_value(self):
        """Test the lookup accepts the enum's string value."""
        assert key_usage_for_type("qseal") == key_usage_for_type(CertificateType.QSEAL)

    @pytest.mark.parametrize("bad_type", ["qcert", "", None, "0.4.0.1862.1.6.3", 42])
    def test_unknown_type_rejected(self, bad_type):
        """Test unknown certificate types raise UnsupportedCertificateType."""
        with pytest.raises(UnsupportedCertificateType) as exc_info:
            key_usage_for_type(bad_type)
        assert exc_info.value.certificate_type == bad_type

    def test_returns_fresh_list(self):
        """Test callers cannot mutate the shared policy table."""
        usages = key_usage_for_type(CertificateType.QWAC)
        usages.append(KeyUsageFlag.KEY_CERT_SIGN)
        assert key_usage_for_type(CertificateType.QWAC) == [KeyUsageFlag.DIGITAL_SIGNATURE]


class TestExtendedKeyUsageForType:
    """Tests for the extended key usage lookup."""

    def test_qwac_server_then_client_auth(self):
        """Test QWAC requires TLS server auth then TLS client auth."""
        assert extended_key_usage_for_type(CertificateType.QWAC) == [
            ExtendedKeyUsageOID.SERVER_AUTH,
            ExtendedKeyUsageOID.CLIENT_AUTH,
        ]

    def test_qseal_is_empty(self):
        """Test QSEAL has no extended key usage."""
        assert extended_key_usage_for_type(CertificateType.QSEAL) == []

    @pytest.mark.parametrize("bad_type", ["qcert", None])
    def test_unknown_type_rejected(self, bad_type):
        """Test both lookups reject the same invalid types."""
        with pytest.raises(UnsupportedCertificateType):
            extended_key_usage_for_type(bad_type)


class TestPolicyTable:
    """Tests for the certificate policy table."""

    def test_covers_every_certificate_type(self):
        """Test every certificate type has a policy."""
        assert set(CERTIFICATE_POLICIES) == set(CertificateType)

    def test_table_is_read_only(self):
        """Test the policy table cannot be modified."""
        with pytest.raises(TypeError):
            CERTIFICATE_POLICIES[CertificateType.QWAC] = policy_for_type(CertificateType.QSEAL)


class TestKeyUsageExtension:
    """Tests for the keyUsage extension builder."""

    def test_is_critical(self):
        """Test keyUsage is always marked critical."""
        extension = key_usage_extension([KeyUsageFlag.DIGITAL_SIGNATURE])
        assert extension.oid == ExtensionOID.KEY_USAGE
        assert extension.critical is True

    def test_digital_signature_encoding(self):
        """Test digitalSignature alone encodes with 7 unused bits."""
        extension = key_usage_extension([KeyUsageFlag.DIGITAL_SIGNATURE])
        assert extension.value.public_bytes() == bytes.fromhex("03020780")

    def test_digital_signature_and_non_repudiation_encoding(self):
        """Test the QSEAL usages encode with 6 unused bits."""
        extension = key_usage_extension(
            [KeyUsageFlag.DIGITAL_SIGNATURE, KeyUsageFlag.NON_REPUDIATION]
        )
        assert extension.value.public_bytes() == bytes.fromhex("030206c0")

    def test_flags_set(self):
        """Test only the requested flags are set."""
        usage = key_usage_extension(key_usage_for_type(CertificateType.QSEAL)).value
        assert usage.digital_signature is True
        assert usage.content_commitment is True
        assert usage.key_encipherment is False
        assert usage.key_cert_sign is False


class TestExtendedKeyUsageExtension:
    """Tests for the extKeyUsage extension builder."""

    def test_non_critical_and_ordered(self):
        """Test extKeyUsage is non-critical and keeps OID order."""
        oids = extended_key_usage_for_type(CertificateType.QWAC)
        extension = extended_key_usage_extension(oids)
        assert extension.oid == ExtensionOID.EXTENDED_KEY_USAGE
        assert extension.critical is False
        assert list(extension.value) == oids


class TestSubjectKeyIdentifier:
    """Tests for the subjectKeyIdentifier builder."""

    def test_sha1_of_pkcs1_public_key(self, rsa_key):
        """Test the identifier is SHA-1 over the PKCS#1 public key DER."""
        public_key = rsa_key.public_key()
        expected = hashlib.sha1(public_key.public_bytes(Encoding.DER, PublicFormat.PKCS1)).digest()

        extension = subject_key_identifier(public_key)

        assert extension.oid == ExtensionOID.SUBJECT_KEY_IDENTIFIER
        assert extension.critical is False
        assert extension.value.digest == expected
        assert len(extension.value.digest) == 20

    def test_matches_rfc5280_method_one(self, rsa_key):
        """Test the identifier agrees with the library's RFC 5280 derivation."""
        public_key = rsa_key.public_key()
        reference = x509.SubjectKeyIdentifier.from_public_key(public_key)
        assert subject_key_identifier(public_key).value.digest == reference.digest

    def test_deterministic(self, rsa_key):
        """Test the same key always yields the same identifier."""
        public_key = rsa_key.public_key()
        assert subject_key_identifier(public_key) == subject_key_identifier(public_key)


class TestQCStatementsExtension:
    """Tests for the qcStatements extension wrapper."""

    def test_wraps_payload_unchanged(self):
        """Test the payload is carried verbatim in a non-critical extension."""
        extension = qc_statements_extension(b"\x30\x00")
        assert extension.oid == QC_STATEMENTS_OID
        assert extension.oid.dotted_string == "1.3.6.1.5.5.7.1.3"
        assert extension.critical is False
        assert extension.value.value == b"\x30\x00"
