# =============================================================================
# test_config.py - Configuration Tests
# =============================================================================
# Tests for LinkerConfig defaults and environment overrides.
# =============================================================================

import logging

from toylink.config import DEFAULT_MACHINE_MEMORY_SIZE, MACHINE_SIZE_ENV, LinkerConfig


class TestLinkerConfig:
    """Test configuration sources."""

    def test_default_machine_size(self):
        """The default machine has 200 words."""
        assert LinkerConfig().machine_memory_size == 200
        assert DEFAULT_MACHINE_MEMORY_SIZE == 200

    def test_from_env_default(self, monkeypatch):
        """Without the variable the default is kept."""
        monkeypatch.delenv(MACHINE_SIZE_ENV, raising=False)
        assert LinkerConfig.from_env().machine_memory_size == 200

    def test_from_env_override(self, monkeypatch):
        """TOYLINK_MACHINE_SIZE overrides the default."""
        monkeypatch.setenv(MACHINE_SIZE_ENV, "512")
        assert LinkerConfig.from_env().machine_memory_size == 512

    def test_from_env_invalid(self, monkeypatch, caplog):
        """Non-integer values are ignored with a warning."""
        monkeypatch.setenv(MACHINE_SIZE_ENV, "big")
        with caplog.at_level(logging.WARNING, logger="toylink.config"):
            config = LinkerConfig.from_env()
        assert config.machine_memory_size == 200
        assert "not an integer" in caplog.text

    def test_from_env_non_positive(self, monkeypatch, caplog):
        """Zero and negative values are ignored with a warning."""
        monkeypatch.setenv(MACHINE_SIZE_ENV, "0")
        with caplog.at_level(logging.WARNING, logger="toylink.config"):
            config = LinkerConfig.from_env()
        assert config.machine_memory_size == 200
        assert "must be positive" in caplog.text
