"""
Application configuration management.

Following Sandi Metz principles:
- Single Responsibility: Configuration loading and validation
- Small class: < 100 lines
- Clear naming: Descriptive property names
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pray import __version__

ALADHAN_BASE_URL = "https://api.aladhan.com/v1"
ICS_BASE_URL = "https://pray.ahmedelywa.com"


def default_cache_dir() -> Path:
    """Get the per-user cache directory."""
    return Path.home() / ".cache" / "pray"


class PrayConfig(BaseSettings):
    """
    Core configuration with validation.

    Loads from PRAY_* environment variables with fallback to .env file.
    Constructed once by the caller and passed into components.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(default="pray", description="Application name")
    version: str = Field(default=__version__, description="Client version")
    log_level: str = Field(default="WARNING", description="Logging level")

    # API settings
    api_base_url: str = Field(default=ALADHAN_BASE_URL, description="API base URL")
    ics_base_url: str = Field(default=ICS_BASE_URL, description="ICS base URL")
    api_timeout: float = Field(default=30.0, gt=0, description="Timeout seconds")
    max_retries: int = Field(default=3, ge=0, le=10, description="Retry count")
    default_method: int = Field(default=5, ge=0, le=23, description="Method ID")

    # Cache settings
    cache_enabled: bool = Field(default=True, description="Enable response cache")
    cache_dir: Path = Field(default_factory=default_cache_dir, description="Cache dir")
    prayer_cache_ttl_seconds: int = Field(
        default=24 * 3600, gt=0, description="Prayer times TTL"
    )
    qibla_cache_ttl_seconds: int = Field(
        default=30 * 24 * 3600, gt=0, description="Qibla direction TTL"
    )

    # Location settings
    geolocation_timeout: float = Field(
        default=10.0, gt=0, description="IP geolocation deadline"
    )

    # Update check settings
    update_check_enabled: bool = Field(default=True, description="Check updates")
    update_check_timeout: float = Field(
        default=5.0, gt=0, description="Update check deadline"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("api_base_url", "ics_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs."""
        return v.rstrip("/")

    @property
    def user_agent(self) -> str:
        """Build User-Agent header value."""
        return f"{self.app_name}-cli/{self.version}"
