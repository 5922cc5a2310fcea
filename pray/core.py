"""
Core component wiring.

Sandi Metz Principles:
- Single Responsibility: Build and tear down the component graph
- Dependency Injection: Configuration and transport injected
- Small methods: One builder per component
"""

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from pray.api.cached_client import CachedPrayerTimesClient
from pray.api.client import PrayerTimesClient
from pray.cache.response_cache import create_response_cache
from pray.config import PrayConfig
from pray.http.client import HTTPClientConfig, RetryingHTTPClient
from pray.location.resolver import GeolocationResolver, create_resolver
from pray.models.prayer import PrayerTimesParams
from pray.services.comparison import ComparisonService
from pray.services.update_checker import UpdateChecker, create_update_checker
from pray.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class PrayCore:
    """Components a command needs, sharing one HTTP connection pool."""

    config: PrayConfig
    transport: httpx.AsyncClient
    client: CachedPrayerTimesClient
    resolver: GeolocationResolver
    comparison: ComparisonService
    update_checker: Optional[UpdateChecker]

    def prayer_params(self, **values: Any) -> PrayerTimesParams:
        """
        Build request parameters with the configured default method.

        Args:
            **values: PrayerTimesParams fields

        Returns:
            Request parameters
        """
        values.setdefault("method", self.config.default_method)
        return PrayerTimesParams(**values)

    async def aclose(self) -> None:
        """Close the shared connection pool."""
        await self.transport.aclose()

    async def __aenter__(self) -> "PrayCore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def create_core(
    config: PrayConfig | None = None,
    transport: httpx.AsyncClient | None = None,
    bypass_cache: bool = False,
) -> PrayCore:
    """
    Configure logging and build every core component.

    Args:
        config: Core configuration (loaded from environment if None)
        transport: Shared httpx client (created here if None)
        bypass_cache: Skip cache reads and writes for this command

    Returns:
        Wired components

    Raises:
        ConfigurationError: If the cache directory is unusable
    """
    config = config or PrayConfig()
    setup_logging(config.log_level)

    transport = transport or httpx.AsyncClient(follow_redirects=True)
    api_http = RetryingHTTPClient(
        HTTPClientConfig.from_config(config), http_client=transport
    )
    client = CachedPrayerTimesClient(
        PrayerTimesClient(config, api_http),
        create_response_cache(config),
        config,
        bypass=bypass_cache,
    )

    core = PrayCore(
        config=config,
        transport=transport,
        client=client,
        resolver=create_resolver(config, _single_attempt(config, transport)),
        comparison=ComparisonService(client),
        update_checker=create_update_checker(
            config,
            _single_attempt(config, transport, config.update_check_timeout),
        ),
    )
    logger.debug("Core created", cache_dir=str(config.cache_dir))
    return core


def _single_attempt(
    config: PrayConfig, transport: httpx.AsyncClient, timeout: float | None = None
) -> RetryingHTTPClient:
    """HTTP client for best-effort lookups that never retry."""
    return RetryingHTTPClient(
        HTTPClientConfig(
            timeout=timeout or config.geolocation_timeout,
            max_retries=0,
            user_agent=config.user_agent,
        ),
        http_client=transport,
    )
