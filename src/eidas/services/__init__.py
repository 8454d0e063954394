"""Certificate request services.

- extensions: key usage, extended key usage, subject key identifier and
  qcStatements extension builders with the per-type usage policy table
- subject: ordered eIDAS subject distinguished name
- csr: request assembly, request options and key provisioning
"""

from eidas.services.csr import (
    CertificateOption,
    CertificateRequestTemplate,
    build_request,
    generate_request,
    with_dns_name,
    with_email_address,
    with_extension,
    with_ip_address,
    with_uri,
)
from eidas.services.extensions import (
    CERTIFICATE_POLICIES,
    QC_STATEMENTS_OID,
    CertificatePolicy,
    KeyUsageFlag,
    extended_key_usage_extension,
    extended_key_usage_for_type,
    key_usage_extension,
    key_usage_for_type,
    policy_for_type,
    qc_statements_extension,
    subject_key_identifier,
)
from eidas.services.subject import SUBJECT_ATTRIBUTE_ORDER, build_subject, encode_subject

__all__ = [
    "CERTIFICATE_POLICIES",
    "QC_STATEMENTS_OID",
    "SUBJECT_ATTRIBUTE_ORDER",
    "CertificateOption",
    "CertificatePolicy",
    "CertificateRequestTemplate",
    "KeyUsageFlag",
    "build_request",
    "build_subject",
    "encode_subject",
    "extended_key_usage_extension",
    "extended_key_usage_for_type",
    "generate_request",
    "key_usage_extension",
    "key_usage_for_type",
    "policy_for_type",
    "qc_statements_extension",
    "subject_key_identifier",
    "with_dns_name",
    "with_email_address",
    "with_extension",
    "with_ip_address",
    "with_uri",
]
