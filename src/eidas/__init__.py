"""eIDAS - certificate signing requests for Open Banking QWAC and QSEAL certificates.

Builds PKCS#10 certificate requests that follow the eIDAS / PSD2 profile
(ETSI TS 119 495): ordered organization subject, profile key usages and a
qcStatements extension naming the national competent authority and the
PSD2 roles granted to the organization.
"""

from eidas.errors import (
    ConflictingExtensionError,
    EidasError,
    KeyGenerationFailed,
    QCStatementEncodingFailed,
    SigningFailed,
    UnknownCountryCode,
    UnsupportedCertificateType,
    UnsupportedKeyType,
)
from eidas.qcstatements import CertificateType, Role
from eidas.services.csr import (
    CertificateRequestTemplate,
    build_request,
    generate_request,
    with_dns_name,
    with_email_address,
    with_extension,
    with_ip_address,
    with_uri,
)

__version__ = "0.1.0"
__all__ = [
    "CertificateRequestTemplate",
    "CertificateType",
    "ConflictingExtensionError",
    "EidasError",
    "KeyGenerationFailed",
    "QCStatementEncodingFailed",
    "Role",
    "SigningFailed",
    "UnknownCountryCode",
    "UnsupportedCertificateType",
    "UnsupportedKeyType",
    "__version__",
    "build_request",
    "generate_request",
    "with_dns_name",
    "with_email_address",
    "with_extension",
    "with_ip_address",
    "with_uri",
]
