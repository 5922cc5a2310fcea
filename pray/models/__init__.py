"""
Models package for pray.

Exports all model classes for easy imports throughout the package.
"""

# Cache models
from pray.models.cache_entry import CacheEntry, CacheStats

# Location models
from pray.models.location import Location, LocationSource

# Prayer times models
from pray.models.prayer import (
    CalendarParams,
    CalendarResult,
    DateInfo,
    Meta,
    PrayerTimesData,
    PrayerTimesParams,
    PrayerTimesResult,
    QiblaData,
    QiblaResult,
    Timings,
)

__all__ = [
    # Cache
    "CacheEntry",
    "CacheStats",
    # Location
    "Location",
    "LocationSource",
    # Prayer times
    "CalendarParams",
    "CalendarResult",
    "DateInfo",
    "Meta",
    "PrayerTimesData",
    "PrayerTimesParams",
    "PrayerTimesResult",
    "QiblaData",
    "QiblaResult",
    "Timings",
]
