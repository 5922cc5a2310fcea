"""
Geolocation resolver with ordered provider fallback.

Sandi Metz Principles:
- Single Responsibility: Handle provider failover
- Small methods: Each method < 10 lines
- Dependency Injection: Providers and clock injected
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional

from pray.config import PrayConfig
from pray.exceptions import LocationDetectionError, PrayError
from pray.http.client import HTTPClientConfig, RetryingHTTPClient
from pray.http.deadline import Deadline
from pray.location.providers import BaseGeolocationProvider, default_providers
from pray.models.cache_entry import utc_now
from pray.models.location import Location
from pray.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DETECTION_TIMEOUT = 10.0


class GeolocationResolver:
    """
    Detect the caller's location from their IP address.

    Providers are tried in order; the first structurally valid location
    wins. The resolver-wide deadline is shared out so that each provider
    gets an equal slice of whatever time is left.
    """

    def __init__(
        self,
        providers: List[BaseGeolocationProvider],
        timeout: float = DEFAULT_DETECTION_TIMEOUT,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize resolver.

        Args:
            providers: Providers in fallback order
            timeout: Resolver-wide timeout when no deadline is given
            clock: Source for detected_at (injectable for tests)
        """
        self._providers = providers
        self._timeout = timeout
        self._clock = clock

    @property
    def providers(self) -> List[BaseGeolocationProvider]:
        """Get providers in fallback order."""
        return list(self._providers)

    async def resolve(self, deadline: Optional[Deadline] = None) -> Location:
        """
        Detect location, falling back across providers.

        Args:
            deadline: Resolver-wide deadline (timeout from now if None)

        Returns:
            Location stamped with source="ip" and detected_at

        Raises:
            LocationDetectionError: If every provider failed
        """
        deadline = deadline or Deadline.after(self._timeout)
        failures: Dict[str, str] = {}

        for index, provider in enumerate(self._providers):
            name = provider.get_name()
            sub_deadline = self._slice(deadline, len(self._providers) - index)

            try:
                location = await provider.resolve(sub_deadline)
            except PrayError as e:
                failures[name] = str(e)
                logger.warning("Provider failed, trying next", provider=name, error=str(e))
                continue

            if not location.is_valid():
                failures[name] = "invalid coordinates"
                logger.warning("Provider returned invalid location", provider=name)
                continue

            logger.info("Location detected", provider=name, city=location.city)
            return self._stamp(location)

        logger.error("All providers failed", attempts=len(failures))
        raise LocationDetectionError(failures)

    def _slice(self, deadline: Deadline, providers_left: int) -> Deadline:
        """Share the remaining time equally among the providers left."""
        remaining = deadline.remaining()
        if remaining is None:
            return deadline.child(self._timeout)
        return deadline.child(remaining / providers_left)

    def _stamp(self, location: Location) -> Location:
        """Mark a location as IP-detected now."""
        return location.model_copy(update={"source": "ip", "detected_at": self._clock()})


def create_resolver(
    config: PrayConfig, http_client: RetryingHTTPClient | None = None
) -> GeolocationResolver:
    """
    Build a resolver with the default provider chain.

    Each provider makes a single attempt; fallback replaces retries.

    Args:
        config: Core configuration
        http_client: HTTP client to share (built from config if None)

    Returns:
        Configured resolver
    """
    http_client = http_client or RetryingHTTPClient(
        HTTPClientConfig(
            timeout=config.geolocation_timeout,
            max_retries=0,
            user_agent=config.user_agent,
        )
    )
    return GeolocationResolver(
        default_providers(http_client), timeout=config.geolocation_timeout
    )
