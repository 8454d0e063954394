"""Pytest configuration and shared fixtures.

RSA key generation dominates test time, so keys are generated once per
session and shared by every test that only needs *a* valid key.
"""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from eidas.core.settings import clear_settings_cache
from eidas.qcstatements import CertificateType, Role


# ---------------------------------------------------------------------------
# Key fixtures
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    """A 2048-bit RSA signing key shared across the session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_key() -> ec.EllipticCurvePrivateKey:
    """A P-256 key, which the request assembler must reject."""
    return ec.generate_private_key(ec.SECP256R1())


# ---------------------------------------------------------------------------
# Request parameter fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def organization() -> dict[str, str]:
    """Organization details used by the reference scenarios."""
    return {
        "country_code": "GB",
        "organization_name": "Foo Org",
        "organization_id": "Foo Org ID",
        "common_name": "Foo Name",
    }


@pytest.fixture
def qwac_params(organization):
    """Keyword arguments for a QWAC request granted the AISP role."""
    return {
        **organization,
        "roles": [Role.ACCOUNT_INFORMATION],
        "cert_type": CertificateType.QWAC,
    }


@pytest.fixture
def qseal_params(organization):
    """Keyword arguments for a QSEAL request granted the PISP role."""
    return {
        **organization,
        "roles": [Role.PAYMENT_INITIATION],
        "cert_type": CertificateType.QSEAL,
    }


@pytest.fixture(autouse=True)
def clean_settings_cache():
    """Clear the settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
