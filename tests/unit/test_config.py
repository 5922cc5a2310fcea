"""Test configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from pray import __version__
from pray.config import ALADHAN_BASE_URL, PrayConfig


class TestPrayConfig:
    """Test core configuration."""

    def test_should_load_default_values(self):
        """Test default configuration."""
        config = PrayConfig()
        assert config.app_name == "pray"
        assert config.api_base_url == ALADHAN_BASE_URL
        assert config.max_retries == 3
        assert config.default_method == 5
        assert config.prayer_cache_ttl_seconds == 86400
        assert config.qibla_cache_ttl_seconds == 30 * 86400

    def test_should_default_cache_dir_under_home(self):
        """Test default cache directory."""
        config = PrayConfig()
        assert config.cache_dir == Path.home() / ".cache" / "pray"

    def test_should_build_user_agent(self):
        """Test User-Agent header value."""
        config = PrayConfig()
        assert config.user_agent == f"pray-cli/{__version__}"

    def test_should_strip_trailing_slash_from_urls(self):
        """Test base URL normalization."""
        config = PrayConfig(api_base_url="https://example.test/v1/")
        assert config.api_base_url == "https://example.test/v1"

    def test_should_normalize_log_level(self):
        """Test log level is upper-cased."""
        config = PrayConfig(log_level="debug")
        assert config.log_level == "DEBUG"

    def test_should_reject_unknown_log_level(self):
        """Test invalid log level."""
        with pytest.raises(ValidationError):
            PrayConfig(log_level="loud")

    def test_should_reject_out_of_range_method(self):
        """Test method bounds."""
        with pytest.raises(ValidationError):
            PrayConfig(default_method=24)

    def test_should_read_environment(self, monkeypatch):
        """Test PRAY_ environment variables."""
        monkeypatch.setenv("PRAY_MAX_RETRIES", "5")
        monkeypatch.setenv("PRAY_CACHE_ENABLED", "false")
        config = PrayConfig()
        assert config.max_retries == 5
        assert config.cache_enabled is False
