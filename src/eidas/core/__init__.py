"""Shared configuration for certificate request generation."""

from eidas.core.config import PUBLIC_KEY_ALGORITHM, SIGNATURE_ALGORITHM, Settings
from eidas.core.settings import clear_settings_cache, get_settings

__all__ = [
    "PUBLIC_KEY_ALGORITHM",
    "SIGNATURE_ALGORITHM",
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
