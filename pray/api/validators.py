"""
Validators for prayer times request parameters.

Sandi Metz Principles:
- Single Responsibility: Each validator validates one thing
- Small methods: Each method < 10 lines
- Clear naming: Descriptive validator names
"""

from pray.exceptions import ValidationError
from pray.models.prayer import CalendarParams, PrayerTimesParams
from pray.prayer.methods import CALCULATION_METHODS, valid_method_id

MIN_METHOD = min(method.id for method in CALCULATION_METHODS)
MAX_METHOD = max(method.id for method in CALCULATION_METHODS)
MAX_ADJUSTMENT = 30
MAX_EVENT_DURATION = 120
MAX_MONTHS = 12
MIN_YEAR = 2000
MAX_YEAR = 2100

LOCATION_REQUIRED = "location is required: provide either address or coordinates"


def validate_prayer_params(params: PrayerTimesParams) -> PrayerTimesParams:
    """
    Validate single-day request parameters.

    Args:
        params: Request parameters

    Returns:
        The same parameters

    Raises:
        ValidationError: If any parameter is out of range
    """
    _validate_location(params.address, params.latitude, params.longitude)
    validate_method(params.method)

    if params.school not in (0, 1):
        raise ValidationError(
            f"school must be 0 (Shafi) or 1 (Hanafi), got {params.school}"
        )

    if not -MAX_ADJUSTMENT <= params.adjustment <= MAX_ADJUSTMENT:
        raise ValidationError(
            f"adjustment must be between -{MAX_ADJUSTMENT} and {MAX_ADJUSTMENT}, "
            f"got {params.adjustment}"
        )

    return params


def validate_calendar_params(params: CalendarParams) -> CalendarParams:
    """
    Validate calendar and subscription parameters.

    Args:
        params: Calendar parameters

    Returns:
        The same parameters

    Raises:
        ValidationError: If any parameter is out of range
    """
    _validate_location(params.address, params.latitude, params.longitude)
    validate_method(params.method)
    _validate_range("duration", params.duration, 1, MAX_EVENT_DURATION, " minutes")
    _validate_range("months", params.months, 1, MAX_MONTHS)
    _validate_range("year", params.year, MIN_YEAR, MAX_YEAR)
    _validate_range("month", params.month, 1, 12)
    return params


def validate_coordinates(latitude: float, longitude: float) -> None:
    """
    Validate latitude and longitude ranges.

    Raises:
        ValidationError: If either coordinate is out of range
    """
    if not -90 <= latitude <= 90:
        raise ValidationError(f"latitude must be between -90 and 90, got {latitude:f}")
    if not -180 <= longitude <= 180:
        raise ValidationError(
            f"longitude must be between -180 and 180, got {longitude:f}"
        )


def validate_method(method: int) -> int:
    """Validate a calculation method ID against the method catalogue."""
    if not valid_method_id(method):
        raise ValidationError(
            f"method must be between {MIN_METHOD} and {MAX_METHOD}, got {method}"
        )
    return method


def _validate_location(address: str, latitude: float, longitude: float) -> None:
    """Require an address or non-zero coordinates, then check ranges."""
    if not address and latitude == 0 and longitude == 0:
        raise ValidationError(LOCATION_REQUIRED)
    validate_coordinates(latitude, longitude)


def _validate_range(
    name: str, value: int, low: int, high: int, unit: str = ""
) -> None:
    """Raise if value is outside [low, high]."""
    if not low <= value <= high:
        raise ValidationError(
            f"{name} must be between {low} and {high}{unit}, got {value}"
        )
