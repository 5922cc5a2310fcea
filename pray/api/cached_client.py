"""
Prayer times client with response caching.

Sandi Metz Principles:
- Single Responsibility: Cache-aside around the remote client
- Dependency Injection: Client, cache and clock injected
- Small methods: Lookup, fetch and store separated
"""

from datetime import datetime, time, timedelta, timezone
from typing import Any, Awaitable, Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pray.api.client import PrayerTimesClient
from pray.cache.response_cache import ResponseCache
from pray.config import PrayConfig
from pray.exceptions import CacheError
from pray.http.deadline import Deadline
from pray.models.cache_entry import utc_now
from pray.models.location import Location
from pray.models.prayer import (
    CalendarParams,
    PrayerTimesData,
    PrayerTimesParams,
    PrayerTimesResult,
    QiblaResult,
)
from pray.utils.hasher import (
    COORDINATE_PRECISION,
    QIBLA_COORDINATE_PRECISION,
    format_coordinate,
    generate_cache_key,
    normalize_address,
)
from pray.utils.logger import get_logger, log_cache_hit, log_cache_miss, log_error

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

KIND_TIMES = "times"
KIND_ADDRESS = "addr"
KIND_QIBLA = "qibla"


class CachedPrayerTimesClient:
    """
    Serve prayer times and Qibla lookups from cache, falling back to the API.

    Remote failures propagate unchanged. Cache problems never fail a
    request: unreadable entries count as misses and write failures are
    logged and dropped.
    """

    def __init__(
        self,
        client: PrayerTimesClient,
        cache: ResponseCache | None = None,
        config: PrayConfig | None = None,
        bypass: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize cached client.

        Args:
            client: Remote API client
            cache: Response cache (caching disabled if None)
            config: Core configuration (TTL settings)
            bypass: Skip cache reads and writes
            clock: Current-time source (injectable for tests)
        """
        config = config or PrayConfig()
        self._client = client
        self._cache = cache
        self._bypass = bypass
        self._clock = clock
        self._prayer_ttl = timedelta(seconds=config.prayer_cache_ttl_seconds)
        self._qibla_ttl = timedelta(seconds=config.qibla_cache_ttl_seconds)

    @property
    def client(self) -> PrayerTimesClient:
        """Get the remote client."""
        return self._client

    @property
    def bypass(self) -> bool:
        """Check whether the cache is bypassed."""
        return self._bypass

    @bypass.setter
    def bypass(self, value: bool) -> None:
        self._bypass = value

    @staticmethod
    def fingerprint(
        kind: str,
        location: Location | str,
        date_string: str = "",
        method: Optional[int] = None,
        *extra: Any,
    ) -> str:
        """
        Derive a cache key from logical request parameters.

        Args:
            kind: Operation kind (times, addr, qibla)
            location: Coordinates as a Location, or a free-text address
            date_string: Requested day (DD-MM-YYYY), empty for Qibla
            method: Calculation method, None for Qibla
            *extra: Further parameters that change the answer

        Returns:
            Stable hex key
        """
        parts: List[Any] = [kind]
        if isinstance(location, str):
            parts.append(normalize_address(location))
        elif location.address and kind == KIND_ADDRESS:
            parts.append(normalize_address(location.address))
        else:
            precision = (
                QIBLA_COORDINATE_PRECISION
                if kind == KIND_QIBLA
                else COORDINATE_PRECISION
            )
            parts.append(format_coordinate(location.latitude, precision))
            parts.append(format_coordinate(location.longitude, precision))
        if date_string:
            parts.append(date_string)
        if method is not None:
            parts.append(method)
        parts.extend(extra)
        return generate_cache_key(*parts)

    async def get_prayer_times(
        self, params: PrayerTimesParams, deadline: Optional[Deadline] = None
    ) -> PrayerTimesResult:
        """
        Get prayer times for coordinates.

        Args:
            params: Request parameters
            deadline: Cancellation signal

        Returns:
            Prayer times result (cached or fresh)
        """
        key = self.fingerprint(
            KIND_TIMES,
            Location.from_coordinates(params.latitude, params.longitude),
            params.date_string(),
            params.method,
            *self._variant_parts(params),
        )
        return await self._cached(
            KIND_TIMES,
            key,
            PrayerTimesResult,
            lambda: self._client.get_prayer_times(params, deadline),
            self._prayer_ttl_for(params),
        )

    async def get_prayer_times_by_address(
        self, params: PrayerTimesParams, deadline: Optional[Deadline] = None
    ) -> PrayerTimesResult:
        """
        Get prayer times for a free-text address.

        Args:
            params: Request parameters (address required)
            deadline: Cancellation signal

        Returns:
            Prayer times result (cached or fresh)
        """
        key = self.fingerprint(
            KIND_ADDRESS,
            params.address,
            params.date_string(),
            params.method,
            *self._variant_parts(params),
        )
        return await self._cached(
            KIND_ADDRESS,
            key,
            PrayerTimesResult,
            lambda: self._client.get_prayer_times_by_address(params, deadline),
            self._prayer_ttl_for(params),
        )

    async def get_qibla(
        self,
        latitude: float,
        longitude: float,
        deadline: Optional[Deadline] = None,
    ) -> QiblaResult:
        """
        Get Qibla direction for coordinates.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            deadline: Cancellation signal

        Returns:
            Qibla result (cached or fresh)
        """
        key = self.fingerprint(
            KIND_QIBLA, Location.from_coordinates(latitude, longitude)
        )
        return await self._cached(
            KIND_QIBLA,
            key,
            QiblaResult,
            lambda: self._client.get_qibla(latitude, longitude, deadline),
            self._qibla_ttl,
        )

    async def get_calendar_month(
        self, params: CalendarParams, deadline: Optional[Deadline] = None
    ) -> List[PrayerTimesData]:
        """Fetch a monthly calendar (never cached)."""
        return await self._client.get_calendar_month(params, deadline)

    async def download_ics(
        self, url: str, deadline: Optional[Deadline] = None
    ) -> bytes:
        """Download an ICS file (never cached)."""
        return await self._client.download_ics(url, deadline)

    def build_ics_url(self, params: CalendarParams) -> str:
        """Build an ICS subscription URL."""
        return self._client.build_ics_url(params)

    def clear_cache(self) -> int:
        """
        Remove every cached response.

        Returns:
            Number of entries removed (0 without a cache)
        """
        if self._cache is None:
            return 0
        return self._cache.clear()

    async def _cached(
        self,
        kind: str,
        key: str,
        model: Type[ResultT],
        fetch: Callable[[], Awaitable[ResultT]],
        ttl: Optional[timedelta],
    ) -> ResultT:
        """Cache-aside: lookup, fetch on miss, store."""
        if not self._use_cache():
            return await fetch()

        cached = self._lookup(kind, key, model)
        if cached is not None:
            return cached

        result = await fetch()
        self._store(kind, key, result, ttl)
        return result

    def _use_cache(self) -> bool:
        """Check whether the cache participates in this request."""
        return self._cache is not None and self._cache.enabled and not self._bypass

    def _lookup(self, kind: str, key: str, model: Type[ResultT]) -> Optional[ResultT]:
        """Read and deserialize a cached result; any failure is a miss."""
        data = self._cache.get(key)
        if data is None:
            log_cache_miss(key, kind)
            return None

        try:
            result = model.model_validate_json(data)
        except PydanticValidationError:
            log_cache_miss(key, kind, reason="undecodable")
            return None

        log_cache_hit(key, kind)
        return result

    def _store(
        self, kind: str, key: str, result: BaseModel, ttl: Optional[timedelta]
    ) -> None:
        """Write a result to cache; failures are logged only."""
        if ttl is None:
            logger.debug("Skipping cache write for past day", key=key, kind=kind)
            return

        try:
            self._cache.set(key, result.model_dump_json().encode("utf-8"), ttl)
        except CacheError as e:
            log_error(e, "cache_write", key=key, kind=kind)

    def _prayer_ttl_for(self, params: PrayerTimesParams) -> Optional[timedelta]:
        """
        TTL for a day's prayer times, capped at the end of that day.

        The day ends at local midnight of the machine. Returns None when
        the day is already over so the result is not written.
        """
        next_day = params.date + timedelta(days=1)
        day_end = datetime.combine(next_day, time.min).astimezone(timezone.utc)
        remaining = day_end - self._clock()
        if remaining <= timedelta(0):
            return None
        return min(self._prayer_ttl, remaining)

    @staticmethod
    def _variant_parts(params: PrayerTimesParams) -> tuple:
        """Parameters besides location, date and method that change timings."""
        return (params.school, params.timezone, params.adjustment, params.iso8601)
