"""Cached settings accessor.

Usage:
    from eidas.core.settings import get_settings

    key_size = get_settings().key_size

The settings are loaded once and cached. To reload settings (e.g., in tests),
use clear_settings_cache().
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import ValidationError

from eidas.core.config import Settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings.

    Returns:
        Validated Settings instance.

    Raises:
        SystemExit: If settings cannot be loaded (fail-fast behavior).
    """
    try:
        settings = Settings()
    except ValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            error_messages.append(f"  - {loc}: {error['msg']}")

        logger.critical(
            "Configuration validation failed:\n%s",
            "\n".join(error_messages),
        )
        raise SystemExit(1) from e

    logger.debug("Configuration loaded: %s", settings.get_policy_snapshot())
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache so the next access reloads the environment."""
    get_settings.cache_clear()
    logger.debug("Settings cache cleared")
