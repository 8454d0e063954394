"""Tests for configuration management.

Tests cover:
- Defaults and loading from environment variables
- Validation of invalid key parameters
- Cached settings accessor and fail-fast behaviour
- Policy snapshot contents
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from eidas.core.config import PUBLIC_KEY_ALGORITHM, SIGNATURE_ALGORITHM, Settings
from eidas.core.settings import clear_settings_cache, get_settings


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_default_key_parameters(self):
        """Test defaults produce 2048-bit keys with exponent 65537."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
        assert settings.key_size == 2048
        assert settings.public_exponent == 65537

    def test_load_from_environment(self):
        """Test values are read from EIDAS_ prefixed variables."""
        env = {"EIDAS_KEY_SIZE": "4096", "EIDAS_PUBLIC_EXPONENT": "65537"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings()
        assert settings.key_size == 4096


class TestSettingsValidation:
    """Tests for configuration validation."""

    @pytest.mark.parametrize("key_size", [1024, 2047, 16384])
    def test_key_size_bounds(self, key_size):
        """Test key sizes outside 2048..8192 are rejected."""
        with pytest.raises(ValidationError):
            Settings(key_size=key_size)

    @pytest.mark.parametrize("exponent", [1, 5, 17, 65539])
    def test_public_exponent_rejected(self, exponent):
        """Test only exponents 3 and 65537 are accepted."""
        with pytest.raises(ValidationError, match="Public exponent"):
            Settings(public_exponent=exponent)

    def test_public_exponent_three_warns(self, caplog):
        """Test exponent 3 is accepted with a warning."""
        settings = Settings(public_exponent=3)
        assert settings.public_exponent == 3
        assert "65537 is recommended" in caplog.text


class TestSettingsAccessor:
    """Tests for the cached settings accessor."""

    def test_cached(self):
        """Test repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self):
        """Test clearing the cache picks up environment changes."""
        with patch.dict(os.environ, {"EIDAS_KEY_SIZE": "3072"}):
            clear_settings_cache()
            assert get_settings().key_size == 3072
        clear_settings_cache()
        assert get_settings().key_size == 2048

    def test_invalid_environment_exits(self):
        """Test invalid configuration fails fast with SystemExit."""
        with patch.dict(os.environ, {"EIDAS_KEY_SIZE": "512"}):
            clear_settings_cache()
            with pytest.raises(SystemExit):
                get_settings()


class TestPolicySnapshot:
    """Tests for the policy snapshot."""

    def test_snapshot_contents(self):
        """Test the snapshot includes configured and fixed algorithms."""
        snapshot = Settings(key_size=3072).get_policy_snapshot()
        assert snapshot == {
            "key_size": 3072,
            "public_exponent": 65537,
            "public_key_algorithm": PUBLIC_KEY_ALGORITHM,
            "signature_algorithm": SIGNATURE_ALGORITHM,
        }
        assert SIGNATURE_ALGORITHM == "sha256WithRSAEncryption"
