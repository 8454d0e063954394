"""Configuration management for certificate request generation.

This module provides configuration using Pydantic Settings. Values are
loaded from environment variables with the EIDAS_ prefix, or from a
local .env file.

Example:
    export EIDAS_KEY_SIZE=3072
    export EIDAS_PUBLIC_EXPONENT=65537
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Request signatures are always PKCS#1 v1.5 with SHA-256.
SIGNATURE_ALGORITHM = "sha256WithRSAEncryption"
PUBLIC_KEY_ALGORITHM = "rsaEncryption"


class Settings(BaseSettings):
    """Certificate request configuration.

    Only key generation is configurable. The signature algorithm, request
    version and extension profile are fixed by the eIDAS profile.
    """

    model_config = SettingsConfigDict(
        env_prefix="EIDAS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    key_size: Annotated[int, Field(ge=2048, le=8192)] = Field(
        default=2048,
        description="RSA modulus size in bits for generated signing keys",
    )
    public_exponent: int = Field(
        default=65537,
        description="RSA public exponent for generated signing keys",
    )

    @field_validator("public_exponent")
    @classmethod
    def validate_public_exponent(cls, v: int) -> int:
        """Restrict the exponent to the values RSA key generation accepts."""
        if v not in (3, 65537):
            msg = f"Public exponent must be 3 or 65537. Got: {v}"
            raise ValueError(msg)
        if v == 3:
            logger.warning("RSA public exponent 3 is configured; 65537 is recommended")
        return v

    def get_policy_snapshot(self) -> dict[str, Any]:
        """Generate a snapshot of the effective request policy for logging.

        Returns:
            Dictionary containing the configured and fixed algorithm values.
        """
        return {
            "key_size": self.key_size,
            "public_exponent": self.public_exponent,
            "public_key_algorithm": PUBLIC_KEY_ALGORITHM,
            "signature_algorithm": SIGNATURE_ALGORITHM,
        }
