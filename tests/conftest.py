"""
Pytest configuration and fixtures.

Provides common fixtures for testing.
"""

from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from pray.cache.response_cache import ResponseCache
from pray.config import PrayConfig
from pray.http.client import HTTPClientConfig, RetryingHTTPClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def test_config(tmp_path: Path) -> PrayConfig:
    """
    Create test configuration.

    Returns:
        Test configuration instance with an isolated cache directory
    """
    return PrayConfig(
        cache_dir=tmp_path / "cache",
        api_timeout=5.0,
        max_retries=3,
        update_check_enabled=False,
    )


@pytest.fixture
def response_cache(tmp_path: Path) -> ResponseCache:
    """
    Create a response cache in a temporary directory.

    Returns:
        Empty response cache
    """
    return ResponseCache(tmp_path / "cache")


@pytest.fixture
def no_sleep():
    """
    Patch asyncio.sleep so retry backoff is instant.

    Returns:
        The AsyncMock standing in for asyncio.sleep
    """
    with patch("pray.http.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        yield sleep


@pytest.fixture
def make_http_client() -> Callable[..., RetryingHTTPClient]:
    """
    Factory for retrying clients backed by httpx.MockTransport.

    Returns:
        Function (handler, **config) -> RetryingHTTPClient
    """

    def factory(handler: Handler, **config) -> RetryingHTTPClient:
        transport = httpx.MockTransport(handler)
        return RetryingHTTPClient(
            HTTPClientConfig(**config),
            http_client=httpx.AsyncClient(transport=transport),
        )

    return factory


@pytest.fixture
def prayer_times_payload() -> dict:
    """
    Sample /timings response body.

    Returns:
        Prayer times envelope
    """
    return {
        "code": 200,
        "status": "OK",
        "data": {
            "timings": {
                "Fajr": "04:32",
                "Sunrise": "06:01",
                "Dhuhr": "11:57",
                "Asr": "15:24",
                "Sunset": "17:53",
                "Maghrib": "17:53",
                "Isha": "19:11",
                "Imsak": "04:22",
                "Midnight": "23:57",
                "Firstthird": "21:56",
                "Lastthird": "01:58",
            },
            "date": {
                "readable": "15 Mar 2025",
                "timestamp": "1742025600",
                "gregorian": {"date": "15-03-2025"},
                "hijri": {"date": "15-09-1446", "month": {"en": "Ramaḍān"}},
            },
            "meta": {
                "latitude": 30.0444,
                "longitude": 31.2357,
                "timezone": "Africa/Cairo",
                "method": {"id": 5, "name": "Egyptian General Authority of Survey"},
                "school": "STANDARD",
            },
        },
    }


@pytest.fixture
def qibla_payload() -> dict:
    """
    Sample /qibla response body.

    Returns:
        Qibla envelope
    """
    return {
        "code": 200,
        "status": "OK",
        "data": {"latitude": 30.0444, "longitude": 31.2357, "direction": 136.14},
    }

