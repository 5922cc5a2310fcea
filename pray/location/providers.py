"""
IP geolocation providers.

Sandi Metz Principles:
- Single Responsibility: Each adapter maps one service's schema
- Interface Segregation: Minimal provider interface
- Dependency Inversion: Resolver depends on the abstraction
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict

from pray.exceptions import GeolocationProviderError
from pray.http.client import RetryingHTTPClient
from pray.http.deadline import Deadline
from pray.models.location import Location, format_address

IP_API_URL = "http://ip-api.com/json/"
IPINFO_URL = "https://ipinfo.io/json"
IPAPI_CO_URL = "https://ipapi.co/json/"


class BaseGeolocationProvider(ABC):
    """
    Abstract base class for IP geolocation providers.

    Subclasses declare their endpoint and translate its JSON document
    into a Location. Fetching is shared.
    """

    url: str = ""

    def __init__(self, http_client: RetryingHTTPClient):
        """
        Initialize provider.

        Args:
            http_client: HTTP client used for the lookup
        """
        self._http = http_client

    async def resolve(self, deadline: Deadline) -> Location:
        """
        Look up the caller's location.

        Args:
            deadline: Cancellation signal for this provider

        Returns:
            Location as reported (not yet checked for validity)

        Raises:
            PrayError: If the lookup or parsing fails
        """
        body = await self._http.get(self.url, deadline=deadline)
        document = self._decode(body)
        try:
            return self.parse(document)
        except (TypeError, ValueError) as e:
            raise GeolocationProviderError(
                f"unexpected {self.get_name()} response: {e}"
            ) from e

    @abstractmethod
    def parse(self, document: Dict[str, Any]) -> Location:
        """
        Translate the service's JSON document into a Location.

        Raises:
            GeolocationProviderError: If the service reported an error
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """
        Get provider name.

        Returns:
            Provider name (e.g., "ip-api.com")
        """
        pass

    def _decode(self, body: bytes) -> Dict[str, Any]:
        """Decode a JSON object body."""
        try:
            document = json.loads(body)
        except ValueError as e:
            raise GeolocationProviderError(
                f"failed to parse {self.get_name()} response: {e}"
            ) from e
        if not isinstance(document, dict):
            raise GeolocationProviderError(
                f"failed to parse {self.get_name()} response: expected object"
            )
        return document


class IPAPIProvider(BaseGeolocationProvider):
    """ip-api.com adapter."""

    url = IP_API_URL

    def get_name(self) -> str:
        return "ip-api.com"

    def parse(self, document: Dict[str, Any]) -> Location:
        if document.get("status") != "success":
            raise GeolocationProviderError(
                f"ip-api.com error: {document.get('message', 'unknown')}"
            )

        city = _as_str(document.get("city"))
        country = _as_str(document.get("country"))
        return Location(
            latitude=_as_float(document.get("lat")),
            longitude=_as_float(document.get("lon")),
            city=city,
            country=country,
            country_code=_as_str(document.get("countryCode")),
            timezone=_as_str(document.get("timezone")),
            address=format_address(city, country),
        )


class IPInfoProvider(BaseGeolocationProvider):
    """ipinfo.io adapter. Coordinates arrive as a single "lat,lon" string."""

    url = IPINFO_URL

    def get_name(self) -> str:
        return "ipinfo.io"

    def parse(self, document: Dict[str, Any]) -> Location:
        latitude, longitude = parse_lat_lon(_as_str(document.get("loc")))
        city = _as_str(document.get("city"))
        # ipinfo.io reports the ISO code in "country"
        country = _as_str(document.get("country"))
        return Location(
            latitude=latitude,
            longitude=longitude,
            city=city,
            country=country,
            country_code=country,
            timezone=_as_str(document.get("timezone")),
            address=format_address(city, _as_str(document.get("region"))),
        )


class IPAPICoProvider(BaseGeolocationProvider):
    """ipapi.co adapter."""

    url = IPAPI_CO_URL

    def get_name(self) -> str:
        return "ipapi.co"

    def parse(self, document: Dict[str, Any]) -> Location:
        if document.get("error"):
            raise GeolocationProviderError(
                f"ipapi.co error: {document.get('reason', 'unknown')}"
            )

        city = _as_str(document.get("city"))
        country = _as_str(document.get("country_name"))
        return Location(
            latitude=_as_float(document.get("latitude")),
            longitude=_as_float(document.get("longitude")),
            city=city,
            country=country,
            country_code=_as_str(document.get("country_code")),
            timezone=_as_str(document.get("timezone")),
            address=format_address(city, country),
        )


def parse_lat_lon(loc: str) -> tuple[float, float]:
    """
    Parse a "lat,lon" string.

    Args:
        loc: Comma-separated coordinates

    Returns:
        (latitude, longitude)

    Raises:
        GeolocationProviderError: If the string is malformed
    """
    parts = loc.split(",")
    if len(parts) != 2:
        raise GeolocationProviderError(f"invalid location format: {loc!r}")
    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError as e:
        raise GeolocationProviderError(f"invalid coordinates: {loc!r}") from e


def _as_str(value: Any) -> str:
    """Get a JSON string field; missing or non-string values are empty."""
    return value.strip() if isinstance(value, str) else ""


def _as_float(value: Any) -> float:
    """Coerce a JSON number to float; missing or malformed values are 0."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def default_providers(http_client: RetryingHTTPClient) -> list[BaseGeolocationProvider]:
    """Build the provider chain in fallback order."""
    return [
        IPAPIProvider(http_client),
        IPInfoProvider(http_client),
        IPAPICoProvider(http_client),
    ]
