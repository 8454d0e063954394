"""Subject distinguished name for eIDAS certificate requests.

Validators of the eIDAS profile expect the subject attributes in a fixed
order: countryName, organizationName, organizationIdentifier, commonName.
Each attribute is emitted as its own RDN so the order survives encoding.
"""

from __future__ import annotations

from cryptography import x509

OID_COUNTRY_NAME = x509.ObjectIdentifier("2.5.4.6")
OID_ORGANIZATION_NAME = x509.ObjectIdentifier("2.5.4.10")
OID_ORGANIZATION_IDENTIFIER = x509.ObjectIdentifier("2.5.4.97")
OID_COMMON_NAME = x509.ObjectIdentifier("2.5.4.3")

SUBJECT_ATTRIBUTE_ORDER: tuple[x509.ObjectIdentifier, ...] = (
    OID_COUNTRY_NAME,
    OID_ORGANIZATION_NAME,
    OID_ORGANIZATION_IDENTIFIER,
    OID_COMMON_NAME,
)


def build_subject(
    country_code: str,
    organization_name: str,
    organization_id: str,
    common_name: str,
) -> x509.Name:
    """Build the ordered four-attribute subject name.

    Values are not interpreted. Length rules cryptography applies to some
    attributes (a two-character country, a common name of 1 to 64 bytes)
    are reported as warnings rather than enforced, so any string the DER
    encoder can write is accepted.
    """
    values = (country_code, organization_name, organization_id, common_name)
    return x509.Name(
        [
            x509.NameAttribute(oid, value, _validate=False)
            for oid, value in zip(SUBJECT_ATTRIBUTE_ORDER, values, strict=True)
        ]
    )


def encode_subject(subject: x509.Name) -> bytes:
    """DER-encode a subject name as an RDNSequence."""
    return subject.public_bytes()
