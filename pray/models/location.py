"""
Location models.

Sandi Metz Principles:
- Single Responsibility: Geographic location data
- Clear naming: Descriptive fields
- Small methods: Validity and display helpers only
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

LocationSource = Literal["ip", "manual", "gps"]


class Location(BaseModel):
    """
    Geographic location.

    Either carries coordinates, or only an address that the remote
    API resolves server-side.
    """

    latitude: float = Field(default=0.0, description="Latitude in decimal degrees")
    longitude: float = Field(default=0.0, description="Longitude in decimal degrees")
    address: str = Field(default="", description="Free-text address")
    city: str = Field(default="", description="City name")
    country: str = Field(default="", description="Country name")
    country_code: str = Field(default="", description="ISO country code")
    timezone: str = Field(default="", description="IANA timezone identifier")
    source: LocationSource = Field(default="manual", description="Origin")
    detected_at: Optional[datetime] = Field(None, description="Detection time")

    def is_valid(self) -> bool:
        """
        Check whether the coordinates are usable.

        Exactly (0, 0) counts as unset. This misclassifies a genuine
        request for the Gulf of Guinea null island and is kept on purpose.
        """
        return (
            -90 <= self.latitude <= 90
            and -180 <= self.longitude <= 180
            and (self.latitude != 0 or self.longitude != 0)
        )

    @property
    def has_timezone(self) -> bool:
        """Check if a timezone is set."""
        return bool(self.timezone)

    @property
    def display_address(self) -> str:
        """Get human-readable address."""
        if self.address:
            return self.address
        return format_address(self.city, self.country)

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float) -> "Location":
        """Create a manually entered location from coordinates."""
        return cls(latitude=latitude, longitude=longitude, source="manual")

    @classmethod
    def from_address(cls, address: str) -> "Location":
        """Create an address-only location (resolved by the remote API)."""
        return cls(address=address, source="manual")


def format_address(city: str, country: str) -> str:
    """
    Join city and country into a display address.

    Args:
        city: City name (may be empty)
        country: Country name (may be empty)

    Returns:
        "City, Country", whichever part is present, or ""
    """
    return ", ".join(part for part in (city, country) if part)
