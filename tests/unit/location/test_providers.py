"""Tests for IP geolocation providers."""

import httpx
import pytest

from pray.exceptions import GeolocationProviderError, RetryExhaustedError
from pray.http.deadline import Deadline
from pray.location.providers import (
    IPAPICoProvider,
    IPAPIProvider,
    IPInfoProvider,
    default_providers,
    parse_lat_lon,
)


class TestIPAPIProvider:
    """Test ip-api.com adapter."""

    def test_parse_success(self):
        """Test field mapping."""
        location = IPAPIProvider(None).parse(
            {
                "status": "success",
                "lat": 30.0444,
                "lon": 31.2357,
                "city": "Cairo",
                "country": "Egypt",
                "countryCode": "EG",
                "timezone": "Africa/Cairo",
            }
        )
        assert location.latitude == 30.0444
        assert location.country_code == "EG"
        assert location.timezone == "Africa/Cairo"
        assert location.address == "Cairo, Egypt"

    def test_parse_ignores_mistyped_fields(self):
        """Test non-string fields read as empty."""
        location = IPAPIProvider(None).parse(
            {"status": "success", "lat": 30, "lon": 31, "city": 5, "country": ["EG"]}
        )
        assert location.city == ""
        assert location.country == ""
        assert location.address == ""
        assert location.is_valid()

    def test_parse_failure_status(self):
        """Test service-reported failure."""
        with pytest.raises(GeolocationProviderError, match="reserved range"):
            IPAPIProvider(None).parse({"status": "fail", "message": "reserved range"})


class TestIPInfoProvider:
    """Test ipinfo.io adapter."""

    def test_parse_loc_string(self):
        """Test "lat,lon" parsing."""
        location = IPInfoProvider(None).parse(
            {
                "loc": "30.0444,31.2357",
                "city": "Cairo",
                "region": "Cairo Governorate",
                "country": "EG",
                "timezone": "Africa/Cairo",
            }
        )
        assert (location.latitude, location.longitude) == (30.0444, 31.2357)
        assert location.country_code == "EG"
        assert location.address == "Cairo, Cairo Governorate"

    def test_parse_non_string_loc(self):
        """Test a loc that is not a string."""
        with pytest.raises(GeolocationProviderError):
            IPInfoProvider(None).parse({"loc": [30.0, 31.0]})

    def test_parse_missing_loc(self):
        """Test absent coordinates."""
        with pytest.raises(GeolocationProviderError):
            IPInfoProvider(None).parse({"city": "Cairo"})


class TestIPAPICoProvider:
    """Test ipapi.co adapter."""

    def test_parse_success(self):
        """Test field mapping."""
        location = IPAPICoProvider(None).parse(
            {
                "latitude": 51.5,
                "longitude": -0.12,
                "city": "London",
                "country_name": "United Kingdom",
                "country_code": "GB",
                "timezone": "Europe/London",
            }
        )
        assert location.country == "United Kingdom"
        assert location.address == "London, United Kingdom"

    def test_parse_error_flag(self):
        """Test service-reported error."""
        with pytest.raises(GeolocationProviderError, match="RateLimited"):
            IPAPICoProvider(None).parse({"error": True, "reason": "RateLimited"})


class TestParseLatLon:
    """Test coordinate string parsing."""

    def test_with_spaces(self):
        """Test whitespace tolerance."""
        assert parse_lat_lon(" 1.5 , -2.25 ") == (1.5, -2.25)

    @pytest.mark.parametrize("value", ["", "1.5", "1,2,3", "a,b"])
    def test_invalid(self, value):
        """Test malformed strings."""
        with pytest.raises(GeolocationProviderError):
            parse_lat_lon(value)


class TestProviderResolve:
    """Test fetching through the HTTP client."""

    @pytest.mark.asyncio
    async def test_resolve_fetches_endpoint(self, make_http_client):
        """Test provider requests its own URL."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json={"loc": "1.0,2.0", "city": "X"})

        provider = IPInfoProvider(make_http_client(handler, max_retries=0))
        location = await provider.resolve(Deadline.after(5.0))

        assert seen == ["https://ipinfo.io/json"]
        assert location.latitude == 1.0

    @pytest.mark.asyncio
    async def test_resolve_rejects_non_json(self, make_http_client):
        """Test undecodable body."""
        client = make_http_client(
            lambda request: httpx.Response(200, content=b"nope"), max_retries=0
        )
        with pytest.raises(GeolocationProviderError):
            await IPAPIProvider(client).resolve(Deadline.after(5.0))

    @pytest.mark.asyncio
    async def test_resolve_http_failure(self, make_http_client):
        """Test HTTP failures propagate."""
        client = make_http_client(
            lambda request: httpx.Response(500), max_retries=0
        )
        with pytest.raises(RetryExhaustedError):
            await IPAPICoProvider(client).resolve(Deadline.after(5.0))

    def test_default_order(self):
        """Test fallback order."""
        names = [provider.get_name() for provider in default_providers(None)]
        assert names == ["ip-api.com", "ipinfo.io", "ipapi.co"]
