"""
Retrying HTTP client.

Sandi Metz Principles:
- Single Responsibility: One logical request, many attempts
- Dependency Injection: Transport and configuration injected
- Small methods: Attempt, status check and retry loop separated
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from pray.config import PrayConfig
from pray.exceptions import RequestCancelledError, TransportError
from pray.http.deadline import Deadline
from pray.http.retry import RetryConfig, RetryHandler
from pray.utils.logger import get_logger, log_http_attempt

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "pray-cli/1.0.0"
MAX_ERROR_BODY = 200


@dataclass
class HTTPClientConfig:
    """HTTP client configuration."""

    timeout: float = 30.0
    max_retries: int = 3
    user_agent: str = DEFAULT_USER_AGENT
    backoff_base: float = 0.1

    @classmethod
    def from_config(
        cls, config: PrayConfig, timeout: float | None = None
    ) -> "HTTPClientConfig":
        """
        Build from core configuration.

        Args:
            config: Core configuration
            timeout: Per-attempt timeout override

        Returns:
            HTTP client configuration
        """
        return cls(
            timeout=timeout or config.api_timeout,
            max_retries=config.max_retries,
            user_agent=config.user_agent,
        )


class RetryingHTTPClient:
    """
    HTTP client masking transient failures.

    Only 2xx responses succeed; network errors, attempt timeouts and
    any other status are retried with backoff until the retry budget
    or the caller's deadline runs out.
    """

    def __init__(
        self,
        config: HTTPClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize client.

        Args:
            config: Client configuration (uses defaults if None)
            http_client: Transport (created and owned here if None)
        """
        self._config = config or HTTPClientConfig()
        self._http = http_client or httpx.AsyncClient(follow_redirects=True)
        self._owns_http = http_client is None
        self._retry = RetryHandler(
            RetryConfig(
                max_retries=self._config.max_retries,
                base_delay=self._config.backoff_base,
            )
        )

    @property
    def config(self) -> HTTPClientConfig:
        """Get client configuration."""
        return self._config

    async def get(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        deadline: Optional[Deadline] = None,
    ) -> bytes:
        """Issue a GET request. See request()."""
        return await self.request(
            "GET", url, params=params, headers=headers, deadline=deadline
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        content: Optional[bytes] = None,
        headers: Optional[Mapping[str, str]] = None,
        deadline: Optional[Deadline] = None,
    ) -> bytes:
        """
        Perform one logical request with retries.

        Args:
            method: HTTP method
            url: Absolute URL
            params: Query parameters
            content: Request body
            headers: Extra headers
            deadline: Cancellation signal for the whole request

        Returns:
            Raw response body of the first 2xx response

        Raises:
            RequestCancelledError: If the deadline fired
            RetryExhaustedError: If every attempt failed
        """
        deadline = deadline or Deadline.never()
        merged_headers = self._build_headers(headers)
        attempt = 0

        async def send_once() -> bytes:
            nonlocal attempt
            attempt += 1
            log_http_attempt(method, url, attempt)
            return await self._send_once(
                method, url, params, content, merged_headers, deadline
            )

        return await self._retry.execute(send_once, deadline)

    async def _send_once(
        self,
        method: str,
        url: str,
        params: Optional[Mapping[str, Any]],
        content: Optional[bytes],
        headers: Mapping[str, str],
        deadline: Deadline,
    ) -> bytes:
        """Perform a single attempt bounded by the deadline."""
        timeout = deadline.bound(self._config.timeout)
        if timeout <= 0:
            raise RequestCancelledError("deadline exceeded")

        try:
            response = await asyncio.wait_for(
                self._http.request(
                    method, url, params=params, content=content, headers=headers
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(f"request timed out after {timeout:.2f}s") from e
        except httpx.HTTPError as e:
            raise TransportError(f"request failed: {e}") from e

        return self._check_status(response)

    @staticmethod
    def _check_status(response: httpx.Response) -> bytes:
        """Return body for 2xx, raise TransportError otherwise."""
        if 200 <= response.status_code < 300:
            return response.content

        body = response.text[:MAX_ERROR_BODY]
        raise TransportError(
            f"unexpected status code: {response.status_code}, body: {body}",
            status_code=response.status_code,
        )

    def _build_headers(self, extra: Optional[Mapping[str, str]]) -> dict[str, str]:
        """Merge default headers with per-request headers."""
        headers = {"User-Agent": self._config.user_agent, "Accept": "application/json"}
        if extra:
            headers.update(extra)
        return headers

    async def aclose(self) -> None:
        """Close the transport if owned."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "RetryingHTTPClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
