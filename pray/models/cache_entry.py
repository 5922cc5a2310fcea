"""
Cache entry models.

Sandi Metz Principles:
- Single Responsibility: Cache envelope data structure
- Clear naming: Descriptive fields
- Immutable data: All fields are read-only after creation
"""

from datetime import datetime, timedelta, timezone

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator


def utc_now() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


class CacheEntry(BaseModel):
    """On-disk envelope for one cached response body."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Request fingerprint")
    payload: str = Field(..., description="Raw response body (UTF-8)")
    created_at: AwareDatetime = Field(..., description="Entry creation time")
    expires_at: AwareDatetime = Field(..., description="Entry expiry time")

    @model_validator(mode="after")
    def check_expiry_after_creation(self) -> "CacheEntry":
        """Ensure expires_at > created_at."""
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be later than created_at")
        return self

    @classmethod
    def create(
        cls, key: str, payload: str, ttl: timedelta, now: datetime | None = None
    ) -> "CacheEntry":
        """
        Build an entry that expires ttl after now.

        Args:
            key: Request fingerprint
            payload: Response body
            ttl: Time-to-live (must be positive)
            now: Creation time (defaults to current UTC time)

        Returns:
            New cache entry
        """
        created_at = now or utc_now()
        return cls(
            key=key, payload=payload, created_at=created_at, expires_at=created_at + ttl
        )

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the entry is past its expiry."""
        return (now or utc_now()) > self.expires_at

    @property
    def payload_bytes(self) -> bytes:
        """Get payload as bytes."""
        return self.payload.encode("utf-8")


class CacheStats(BaseModel):
    """Cache directory statistics."""

    entries: int = Field(default=0, ge=0, description="Number of entry files")
    total_bytes: int = Field(default=0, ge=0, description="Total size in bytes")
