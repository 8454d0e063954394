"""Certificate signing request assembly for eIDAS QWAC and QSEAL certificates.

Covers: ETSI TS 119 495 (PSD2 certificate profile), RFC 2986 (PKCS#10)

This module turns organization details into a signed PKCS#10 request:
- Resolves the national competent authority for the country code
- Encodes the PSD2 qcStatements (roles, authority name, authority id)
- Selects key usage / extended key usage for the certificate type
- Builds the ordered subject and applies caller options
- Signs with SHA-256 and RSA and returns the DER encoding

Extensions are always emitted in this order:
    keyUsage (critical)
    extKeyUsage (QWAC only, never present-but-empty)
    subjectKeyIdentifier
    qcStatements
    subjectAltName (only when an option adds names)
    extra extensions added by options

Example:
    csr_der, key = generate_request(
        "GB", "Foo Org", "Foo Org ID", "Foo Name",
        [Role.ACCOUNT_INFORMATION], CertificateType.QWAC,
        with_dns_name("foo.example.com"),
    )
"""

from __future__ import annotations

import ipaddress
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from cryptography import x509
from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import ExtensionOID

from eidas.core.settings import get_settings
from eidas.errors import (
    ConflictingExtensionError,
    KeyGenerationFailed,
    QCStatementEncodingFailed,
    SigningFailed,
    UnknownCountryCode,
    UnsupportedKeyType,
)
from eidas.qcstatements import (
    CertificateType,
    PSD2QCStatementCodec,
    QCStatementError,
    RegistryAuthorityLookup,
    Role,
)
from eidas.services.extensions import (
    extended_key_usage_extension,
    extended_key_usage_for_type,
    key_usage_extension,
    key_usage_for_type,
    qc_statements_extension,
    subject_key_identifier,
)
from eidas.services.subject import build_subject

if TYPE_CHECKING:
    from eidas.core.config import Settings
    from eidas.qcstatements import CompetentAuthorityLookup, QCStatementCodec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CertificateRequestTemplate:
    """In-progress certificate request handed to request options.

    The subject and mandatory extensions are fixed once the template is
    built; options can only append alternative names or extra extensions.

    Attributes:
        subject: Ordered subject name.
        extensions: Mandatory extensions in output order.
        dns_names: DNS subject alternative names.
        email_addresses: RFC 822 subject alternative names.
        ip_addresses: IP address subject alternative names.
        uris: URI subject alternative names.
        extra_extensions: Additional extensions appended after the mandatory set.
    """

    subject: x509.Name
    extensions: tuple[x509.Extension, ...]
    dns_names: list[str] = field(default_factory=list)
    email_addresses: list[str] = field(default_factory=list)
    ip_addresses: list[ipaddress.IPv4Address | ipaddress.IPv6Address] = field(
        default_factory=list
    )
    uris: list[str] = field(default_factory=list)
    extra_extensions: list[x509.Extension] = field(default_factory=list)

    def subject_alternative_names(self) -> list[x509.GeneralName]:
        """Alternative names in DNS, e-mail, IP, URI order."""
        names: list[x509.GeneralName] = []
        names.extend(x509.DNSName(name) for name in self.dns_names)
        names.extend(x509.RFC822Name(address) for address in self.email_addresses)
        names.extend(x509.IPAddress(address) for address in self.ip_addresses)
        names.extend(x509.UniformResourceIdentifier(uri) for uri in self.uris)
        return names

    def request_extensions(self) -> list[x509.Extension]:
        """All extensions to place in the request, in output order.

        Raises:
            ConflictingExtensionError: If an extra extension repeats an OID
                that is already set.
        """
        extensions = list(self.extensions)
        names = self.subject_alternative_names()
        if names:
            extensions.append(
                x509.Extension(
                    ExtensionOID.SUBJECT_ALTERNATIVE_NAME,
                    False,
                    x509.SubjectAlternativeName(names),
                )
            )

        seen = {extension.oid for extension in extensions}
        for extension in self.extra_extensions:
            if extension.oid in seen:
                raise ConflictingExtensionError(extension.oid.dotted_string)
            seen.add(extension.oid)
            extensions.append(extension)
        return extensions


CertificateOption = Callable[[CertificateRequestTemplate], None]


# ---------------------------------------------------------------------------
# Request options
# ---------------------------------------------------------------------------
def with_dns_name(domain: str) -> CertificateOption:
    """Add ``domain`` as a DNS subject alternative name."""

    def option(template: CertificateRequestTemplate) -> None:
        template.dns_names.append(domain)

    return option


def with_email_address(address: str) -> CertificateOption:
    """Add ``address`` as an RFC 822 subject alternative name."""

    def option(template: CertificateRequestTemplate) -> None:
        template.email_addresses.append(address)

    return option


def with_ip_address(address: str) -> CertificateOption:
    """Add an IPv4 or IPv6 address as a subject alternative name."""
    parsed = ipaddress.ip_address(address)

    def option(template: CertificateRequestTemplate) -> None:
        template.ip_addresses.append(parsed)

    return option


def with_uri(uri: str) -> CertificateOption:
    """Add ``uri`` as a URI subject alternative name."""

    def option(template: CertificateRequestTemplate) -> None:
        template.uris.append(uri)

    return option


def with_extension(value: x509.ExtensionType, critical: bool = False) -> CertificateOption:
    """Append an additional extension to the request.

    The extension must not repeat one already present; building the
    request fails with ConflictingExtensionError otherwise.
    """
    extension = x509.Extension(value.oid, critical, value)

    def option(template: CertificateRequestTemplate) -> None:
        template.extra_extensions.append(extension)

    return option


# ---------------------------------------------------------------------------
# Request assembly
# ---------------------------------------------------------------------------
def _rsa_public_key(signing_key: Any) -> rsa.RSAPublicKey:
    public_key = signing_key
    if callable(getattr(signing_key, "public_key", None)):
        public_key = signing_key.public_key()
    if not isinstance(public_key, rsa.RSAPublicKey):
        key_type = type(public_key).__name__
        logger.warning("Rejected certificate request signing key of type %s", key_type)
        raise UnsupportedKeyType(key_type)
    return public_key


def build_request(
    country_code: str,
    organization_name: str,
    organization_id: str,
    common_name: str,
    roles: Sequence[Role],
    cert_type: CertificateType,
    signing_key: rsa.RSAPrivateKey,
    *options: CertificateOption,
    authority_lookup: CompetentAuthorityLookup | None = None,
    qc_codec: QCStatementCodec | None = None,
) -> bytes:
    """Build a signed certificate request with an existing RSA key.

    Args:
        country_code: ISO 3166 alpha-2 country of the organization.
        organization_name: Registered organization name.
        organization_id: Organization identifier (e.g. "PSDGB-FCA-123456").
        common_name: Subject common name.
        roles: PSD2 roles granted to the organization.
        cert_type: CertificateType.QWAC or CertificateType.QSEAL.
        signing_key: RSA private key; stays owned by the caller.
        *options: Request options, applied in order after the mandatory fields.
        authority_lookup: Competent authority resolver (built-in registry by default).
        qc_codec: qcStatements encoder (PSD2 codec by default).

    Returns:
        DER-encoded PKCS#10 CertificateRequest.

    Raises:
        UnsupportedKeyType: If the signing key is not RSA.
        UnknownCountryCode: If no competent authority exists for the country.
        QCStatementEncodingFailed: If the roles or authority cannot be encoded.
        UnsupportedCertificateType: If cert_type is not QWAC or QSEAL.
        ConflictingExtensionError: If an option repeats an existing extension.
        SigningFailed: If the request cannot be signed.
    """
    public_key = _rsa_public_key(signing_key)
    if authority_lookup is None:
        authority_lookup = RegistryAuthorityLookup()
    if qc_codec is None:
        qc_codec = PSD2QCStatementCodec()

    try:
        authority = authority_lookup.lookup(country_code)
    except LookupError as e:
        logger.warning("Unknown country code for certificate request: %r", country_code)
        raise UnknownCountryCode(country_code) from e

    try:
        qc_statements = qc_codec.encode(list(roles), authority, cert_type)
    except QCStatementError as e:
        raise QCStatementEncodingFailed(str(e)) from e

    key_usage = key_usage_for_type(cert_type)
    extended_key_usage = extended_key_usage_for_type(cert_type)

    extensions = [key_usage_extension(key_usage)]
    if len(extended_key_usage) != 0:
        extensions.append(extended_key_usage_extension(extended_key_usage))
    extensions.append(subject_key_identifier(public_key))
    extensions.append(qc_statements_extension(qc_statements))

    template = CertificateRequestTemplate(
        subject=build_subject(country_code, organization_name, organization_id, common_name),
        extensions=tuple(extensions),
    )
    for option in options:
        option(template)

    builder = x509.CertificateSigningRequestBuilder().subject_name(template.subject)
    request_extensions = template.request_extensions()
    for extension in request_extensions:
        builder = builder.add_extension(extension.value, critical=extension.critical)

    logger.debug(
        "Signing certificate request: subject=%s, extensions=%s",
        template.subject.rfc4514_string(),
        [extension.oid.dotted_string for extension in request_extensions],
    )
    try:
        csr = builder.sign(signing_key, hashes.SHA256())
    except Exception as e:
        logger.warning("Certificate request signing failed: %s", e)
        raise SigningFailed(str(e)) from e

    data = csr.public_bytes(Encoding.DER)
    logger.info(
        "Built %s certificate request for %r (authority=%s, %d bytes)",
        CertificateType.coerce(cert_type).value,
        common_name,
        authority.id,
        len(data),
    )
    return data


def generate_request(
    country_code: str,
    organization_name: str,
    organization_id: str,
    common_name: str,
    roles: Sequence[Role],
    cert_type: CertificateType,
    *options: CertificateOption,
    settings: Settings | None = None,
    authority_lookup: CompetentAuthorityLookup | None = None,
    qc_codec: QCStatementCodec | None = None,
) -> tuple[bytes, rsa.RSAPrivateKey]:
    """Generate an RSA key pair and build a certificate request with it.

    The key size and public exponent come from settings (2048 bits and
    65537 by default). The generated key is returned to the caller, who
    becomes its sole owner.

    Returns:
        Tuple of (DER-encoded CertificateRequest, generated private key).

    Raises:
        KeyGenerationFailed: If the key pair cannot be generated.
        EidasError: Any error raised by build_request, unchanged.
    """
    if settings is None:
        settings = get_settings()

    try:
        key = rsa.generate_private_key(
            public_exponent=settings.public_exponent,
            key_size=settings.key_size,
        )
    except (ValueError, UnsupportedAlgorithm, InternalError) as e:
        logger.warning("RSA key generation failed: %s", e)
        raise KeyGenerationFailed(settings.key_size, str(e)) from e

    logger.info("Generated %d-bit RSA key for certificate request", settings.key_size)

    csr = build_request(
        country_code,
        organization_name,
        organization_id,
        common_name,
        roles,
        cert_type,
        key,
        *options,
        authority_lookup=authority_lookup,
        qc_codec=qc_codec,
    )
    return csr, key
