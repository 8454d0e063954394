"""National competent authority registry.

Maps ISO 3166 alpha-2 country codes to the authority that supervises
payment service providers in that country. Identifiers use the
ETSI TS 119 495 form ``<country>-<abbreviation>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class CompetentAuthorityNotFoundError(LookupError):
    """Raised when no competent authority is registered for a country code."""

    def __init__(self, country_code: str) -> None:
        self.country_code = country_code
        super().__init__(f"unknown country code: {country_code!r}")


@dataclass(frozen=True, slots=True)
class CompetentAuthority:
    """A national competent authority.

    Attributes:
        name: Full authority name (nCAName).
        id: Authority identifier (nCAId), e.g. "GB-FCA".
    """

    name: str
    id: str


class CompetentAuthorityLookup(Protocol):
    """Resolves the competent authority responsible for a country.

    Implementations must raise LookupError (CompetentAuthorityNotFoundError
    or any other subclass) when no authority is known. Certificate request
    assembly reports only that exception as UnknownCountryCode; anything
    else propagates.
    """

    def lookup(self, country_code: str) -> CompetentAuthority: ...


COMPETENT_AUTHORITIES: dict[str, CompetentAuthority] = {
    "AT": CompetentAuthority("Austria Financial Market Authority", "AT-FMA"),
    "BE": CompetentAuthority("National Bank of Belgium", "BE-NBB"),
    "BG": CompetentAuthority("Bulgarian National Bank", "BG-BNB"),
    "CY": CompetentAuthority("Central Bank of Cyprus", "CY-CBC"),
    "CZ": CompetentAuthority("Czech National Bank", "CZ-CNB"),
    "DE": CompetentAuthority("Federal Financial Supervisory Authority", "DE-BAFIN"),
    "DK": CompetentAuthority("Danish Financial Supervisory Authority", "DK-DFSA"),
    "EE": CompetentAuthority("Estonia Financial Supervisory Authority", "EE-FI"),
    "ES": CompetentAuthority("Bank of Spain", "ES-BE"),
    "FI": CompetentAuthority("Finnish Financial Supervisory Authority", "FI-FINFSA"),
    "FR": CompetentAuthority(
        "Autorite de Controle Prudentiel et de Resolution", "FR-ACPR"
    ),
    "GB": CompetentAuthority("Financial Conduct Authority", "GB-FCA"),
    "GR": CompetentAuthority("Bank of Greece", "GR-BOG"),
    "HR": CompetentAuthority("Croatian National Bank", "HR-CNB"),
    "HU": CompetentAuthority("Central Bank of Hungary", "HU-CBH"),
    "IE": CompetentAuthority("Central Bank of Ireland", "IE-CBI"),
    "IS": CompetentAuthority("Financial Supervisory Authority of Iceland", "IS-FME"),
    "IT": CompetentAuthority("Bank of Italy", "IT-BI"),
    "LI": CompetentAuthority("Financial Market Authority Liechtenstein", "LI-FMA"),
    "LT": CompetentAuthority("Bank of Lithuania", "LT-BOL"),
    "LU": CompetentAuthority(
        "Commission for the Supervision of Financial Sector", "LU-CSSF"
    ),
    "LV": CompetentAuthority("Financial and Capital Markets Commission", "LV-FCMC"),
    "MT": CompetentAuthority("Malta Financial Services Authority", "MT-MFSA"),
    "NL": CompetentAuthority("De Nederlandsche Bank", "NL-DNB"),
    "NO": CompetentAuthority("Financial Supervisory Authority of Norway", "NO-FSA"),
    "PL": CompetentAuthority("Polish Financial Supervision Authority", "PL-PFSA"),
    "PT": CompetentAuthority("Banco de Portugal", "PT-BP"),
    "RO": CompetentAuthority("National Bank of Romania", "RO-NBR"),
    "SE": CompetentAuthority("Swedish Financial Supervisory Authority", "SE-FINA"),
    "SI": CompetentAuthority("Bank of Slovenia", "SI-BS"),
    "SK": CompetentAuthority("National Bank of Slovakia", "SK-NBS"),
}


def competent_authority_for_country_code(country_code: str) -> CompetentAuthority:
    """Look up the competent authority for a country code.

    The match is exact: country codes are upper-case ISO 3166 alpha-2.

    Raises:
        CompetentAuthorityNotFoundError: If the country is not registered.
    """
    return RegistryAuthorityLookup().lookup(country_code)


class RegistryAuthorityLookup:
    """Competent authority lookup backed by the built-in registry."""

    def __init__(self, authorities: dict[str, CompetentAuthority] | None = None) -> None:
        self._authorities = COMPETENT_AUTHORITIES if authorities is None else authorities

    def lookup(self, country_code: str) -> CompetentAuthority:
        """Resolve the authority for ``country_code``."""
        authority = self._authorities.get(country_code)
        if authority is None:
            logger.debug("No competent authority registered for %r", country_code)
            raise CompetentAuthorityNotFoundError(country_code)
        return authority
