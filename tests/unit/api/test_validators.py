"""Tests for request parameter validators."""

import pytest

from pray.api.validators import (
    validate_calendar_params,
    validate_coordinates,
    validate_method,
    validate_prayer_params,
)
from pray.exceptions import ValidationError
from pray.models.prayer import CalendarParams, PrayerTimesParams
from pray.prayer.methods import CALCULATION_METHODS


class TestPrayerParamsValidator:
    """Test single-day parameter validation."""

    def test_accepts_coordinates(self):
        """Test valid coordinates."""
        params = PrayerTimesParams(latitude=30.0, longitude=31.0)
        assert validate_prayer_params(params) is params

    def test_accepts_address_only(self):
        """Test address without coordinates."""
        validate_prayer_params(PrayerTimesParams(address="Cairo"))

    def test_requires_location(self):
        """Test missing location."""
        with pytest.raises(ValidationError, match="location is required"):
            validate_prayer_params(PrayerTimesParams())

    @pytest.mark.parametrize(
        "field,value",
        [
            ("latitude", 91.0),
            ("longitude", -181.0),
            ("method", 24),
            ("method", -1),
            ("school", 2),
            ("adjustment", 31),
            ("adjustment", -31),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        """Test each bounded field."""
        values = {"latitude": 10.0, "longitude": 10.0, field: value}
        params = PrayerTimesParams(**values)
        with pytest.raises(ValidationError, match=field):
            validate_prayer_params(params)


class TestCalendarParamsValidator:
    """Test calendar parameter validation."""

    def test_accepts_defaults_with_location(self):
        """Test defaults are valid."""
        params = CalendarParams(address="Cairo", year=2025, month=3)
        assert validate_calendar_params(params) is params

    @pytest.mark.parametrize(
        "field,value",
        [
            ("duration", 0),
            ("duration", 121),
            ("months", 13),
            ("year", 1999),
            ("year", 2101),
            ("month", 0),
            ("month", 13),
        ],
    )
    def test_rejects_out_of_range(self, field, value):
        """Test each bounded field."""
        values = {"address": "Cairo", "year": 2025, "month": 3, field: value}
        with pytest.raises(ValidationError, match=field):
            validate_calendar_params(CalendarParams(**values))


class TestSingleValidators:
    """Test standalone validators."""

    def test_validate_coordinates(self):
        """Test coordinate bounds."""
        validate_coordinates(-90, 180)
        with pytest.raises(ValidationError):
            validate_coordinates(90.1, 0)

    def test_validate_method(self):
        """Test method bounds."""
        assert validate_method(23) == 23
        with pytest.raises(ValidationError):
            validate_method(99)

    def test_validate_method_accepts_catalogue(self):
        """Test every known method passes."""
        for method in CALCULATION_METHODS:
            assert validate_method(method.id) == method.id
