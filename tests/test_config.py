"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from flexduration.config import Config


class TestConfig:
    """Config loading from the environment."""

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        for name in ("FLEXDURATION_LOG_LEVEL", "FLEXDURATION_UTC", "FLEXDURATION_DEFAULT_DURATION"):
            monkeypatch.delenv(name, raising=False)
        config = Config()
        assert config.log_level == "WARNING"
        assert config.utc is True
        assert config.default_duration == "1d"

    def test_env_prefix(self, monkeypatch):
        """Test settings read from prefixed environment variables."""
        monkeypatch.setenv("FLEXDURATION_UTC", "false")
        monkeypatch.setenv("FLEXDURATION_DEFAULT_DURATION", "1w")
        config = Config()
        assert config.utc is False
        assert config.default_duration == "1w"

    def test_extra_forbidden(self):
        """Test unknown settings are rejected."""
        with pytest.raises(ValidationError):
            Config(unknown_setting=1)
