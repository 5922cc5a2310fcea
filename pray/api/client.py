"""
Prayer times API client.

Sandi Metz Principles:
- Single Responsibility: Map API operations onto HTTP requests
- Dependency Injection: HTTP client and configuration injected
- Small methods: URL building, fetching and parsing separated
"""

import json
from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pray.api.validators import (
    validate_calendar_params,
    validate_coordinates,
    validate_prayer_params,
)
from pray.config import PrayConfig
from pray.exceptions import (
    FetchError,
    RemoteAPIError,
    RequestCancelledError,
    ResponseParseError,
    RetryExhaustedError,
    ValidationError,
)
from pray.http.client import HTTPClientConfig, RetryingHTTPClient
from pray.http.deadline import Deadline
from pray.models.prayer import (
    API_SUCCESS_CODE,
    CalendarParams,
    CalendarResult,
    PrayerTimesData,
    PrayerTimesParams,
    PrayerTimesResult,
    QiblaResult,
)
from pray.utils.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

ICS_PATH = "/api/prayer-times.ics"

ENDPOINT_PRAYER_TIMES = "prayer times"
ENDPOINT_QIBLA = "Qibla direction"
ENDPOINT_CALENDAR = "calendar"
ENDPOINT_ICS = "ICS file"


class PrayerTimesClient:
    """
    Uncached client for the AlAdhan-compatible prayer times API.

    Every operation returns a typed result or raises FetchError naming
    the endpoint, with the underlying cause chained.
    """

    def __init__(
        self,
        config: PrayConfig | None = None,
        http_client: RetryingHTTPClient | None = None,
    ):
        """
        Initialize client.

        Args:
            config: Core configuration (uses defaults if None)
            http_client: Retrying HTTP client (built from config if None)
        """
        self._config = config or PrayConfig()
        self._http = http_client or RetryingHTTPClient(
            HTTPClientConfig.from_config(self._config)
        )
        self._base_url = self._config.api_base_url

    @property
    def base_url(self) -> str:
        """Get API base URL."""
        return self._base_url

    async def get_prayer_times(
        self, params: PrayerTimesParams, deadline: Optional[Deadline] = None
    ) -> PrayerTimesResult:
        """
        Fetch prayer times for a date and coordinates.

        Args:
            params: Request parameters
            deadline: Cancellation signal

        Returns:
            Prayer times result

        Raises:
            ValidationError: If a parameter is out of range
            FetchError: If the request, parsing or API check fails
        """
        validate_prayer_params(params)
        url = f"{self._base_url}/timings/{params.date_string()}"
        body = await self._fetch(
            ENDPOINT_PRAYER_TIMES, url, params.to_query_params(), deadline
        )
        return self._parse(ENDPOINT_PRAYER_TIMES, body, PrayerTimesResult)

    async def get_prayer_times_by_address(
        self, params: PrayerTimesParams, deadline: Optional[Deadline] = None
    ) -> PrayerTimesResult:
        """
        Fetch prayer times for a date and free-text address.

        Args:
            params: Request parameters (address required)
            deadline: Cancellation signal

        Returns:
            Prayer times result

        Raises:
            ValidationError: If no address is given or a parameter is out of range
            FetchError: If the request, parsing or API check fails
        """
        if not params.address:
            raise ValidationError("address is required")
        validate_prayer_params(params)

        url = f"{self._base_url}/timingsByAddress/{params.date_string()}"
        query = params.to_query_params()
        query["address"] = params.address
        body = await self._fetch(ENDPOINT_PRAYER_TIMES, url, query, deadline)
        return self._parse(ENDPOINT_PRAYER_TIMES, body, PrayerTimesResult)

    async def get_qibla(
        self,
        latitude: float,
        longitude: float,
        deadline: Optional[Deadline] = None,
    ) -> QiblaResult:
        """
        Fetch Qibla direction for coordinates.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            deadline: Cancellation signal

        Returns:
            Qibla result

        Raises:
            ValidationError: If a parameter is out of range
            FetchError: If the request, parsing or API check fails
        """
        validate_coordinates(latitude, longitude)
        url = f"{self._base_url}/qibla/{latitude:f}/{longitude:f}"
        body = await self._fetch(ENDPOINT_QIBLA, url, None, deadline)
        return self._parse(ENDPOINT_QIBLA, body, QiblaResult)

    async def get_calendar_month(
        self, params: CalendarParams, deadline: Optional[Deadline] = None
    ) -> List[PrayerTimesData]:
        """
        Fetch prayer times for every day of a month.

        Args:
            params: Calendar parameters (year, month, location, method)
            deadline: Cancellation signal

        Returns:
            One entry per day

        Raises:
            ValidationError: If a parameter is out of range
            FetchError: If the request, parsing or API check fails
        """
        validate_calendar_params(params)
        url = f"{self._base_url}/calendar/{params.year}/{params.month}"
        body = await self._fetch(
            ENDPOINT_CALENDAR, url, params.to_query_params(), deadline
        )
        return self._parse(ENDPOINT_CALENDAR, body, CalendarResult).data

    async def download_ics(
        self, url: str, deadline: Optional[Deadline] = None
    ) -> bytes:
        """
        Download an ICS calendar file.

        Args:
            url: ICS URL (see build_ics_url)
            deadline: Cancellation signal

        Returns:
            Raw ICS bytes

        Raises:
            FetchError: If the download fails
        """
        return await self._fetch(
            ENDPOINT_ICS, url, None, deadline, headers={"Accept": "text/calendar"}
        )

    def build_ics_url(self, params: CalendarParams) -> str:
        """
        Build a subscription URL for the ICS calendar service.

        Args:
            params: Calendar parameters

        Returns:
            Absolute ICS URL

        Raises:
            ValidationError: If a parameter is out of range
        """
        validate_calendar_params(params)
        query = urlencode(params.to_ics_query_params())
        return f"{self._config.ics_base_url}{ICS_PATH}?{query}"

    async def _fetch(
        self,
        endpoint: str,
        url: str,
        params: Optional[dict[str, str]],
        deadline: Optional[Deadline],
        headers: Optional[dict[str, str]] = None,
    ) -> bytes:
        """Perform a GET, wrapping HTTP failures with the endpoint kind."""
        try:
            return await self._http.get(
                url, params=params, headers=headers, deadline=deadline
            )
        except (RetryExhaustedError, RequestCancelledError) as e:
            logger.warning("Fetch failed", endpoint=endpoint, error=str(e))
            raise FetchError(endpoint, e) from e

    @staticmethod
    def _parse(endpoint: str, body: bytes, model: Type[ModelT]) -> ModelT:
        """
        Parse a JSON envelope and require a success code.

        The code is checked on the raw document before model validation.
        """
        try:
            document: Any = json.loads(body)
        except ValueError as e:
            cause = ResponseParseError(f"failed to parse response: {e}")
            raise FetchError(endpoint, cause) from e

        if not isinstance(document, dict):
            cause = ResponseParseError("failed to parse response: expected object")
            raise FetchError(endpoint, cause)

        code = document.get("code")
        if code != API_SUCCESS_CODE:
            cause = RemoteAPIError(code, document.get("status"))
            raise FetchError(endpoint, cause)

        try:
            return model.model_validate(document)
        except PydanticValidationError as e:
            cause = ResponseParseError(f"failed to parse response: {e}")
            raise FetchError(endpoint, cause) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def __aenter__(self) -> "PrayerTimesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
