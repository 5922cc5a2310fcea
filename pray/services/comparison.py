"""
Prayer times comparison between two locations.

Sandi Metz Principles:
- Single Responsibility: Fetch two locations and diff their timings
- Dependency Injection: Client injected
- Small methods: Fetching and arithmetic separated
"""

import asyncio
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from pray.api.cached_client import CachedPrayerTimesClient
from pray.exceptions import ComparisonError, FetchError
from pray.http.deadline import Deadline
from pray.models.prayer import PrayerTimesParams, PrayerTimesResult
from pray.prayer.times import PRAYER_NAMES, clean_time, time_to_minutes
from pray.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PrayerDifference:
    """One row of a comparison."""

    name: str
    first: str
    second: str
    minutes: int

    @property
    def formatted(self) -> str:
        """Signed difference ("+1h 5m", "-20m", "0m")."""
        text = format_diff(self.minutes)
        return f"+{text}" if self.minutes > 0 else text


@dataclass(frozen=True)
class Comparison:
    """Side-by-side timings for two locations."""

    first_location: str
    second_location: str
    first: PrayerTimesResult
    second: PrayerTimesResult
    differences: List[PrayerDifference]


class ComparisonService:
    """Fetch two addresses concurrently and diff their timings."""

    def __init__(self, client: CachedPrayerTimesClient):
        """
        Initialize service.

        Args:
            client: Prayer times client
        """
        self._client = client

    async def compare(
        self,
        first_location: str,
        second_location: str,
        method: int,
        day: Optional[date] = None,
        deadline: Optional[Deadline] = None,
    ) -> Comparison:
        """
        Compare prayer times for two addresses on the same day.

        Both lookups run concurrently and both must succeed.

        Args:
            first_location: First address
            second_location: Second address
            method: Calculation method
            day: Day to compare (today if None)
            deadline: Shared cancellation signal

        Returns:
            Comparison with per-prayer differences (second minus first)

        Raises:
            ComparisonError: Naming the first location that failed
        """
        first, second = await asyncio.gather(
            self._fetch(first_location, method, day, deadline),
            self._fetch(second_location, method, day, deadline),
            return_exceptions=True,
        )

        for location, outcome in ((first_location, first), (second_location, second)):
            if isinstance(outcome, FetchError):
                logger.warning("Comparison fetch failed", location=location)
                raise ComparisonError(location, outcome) from outcome
            if isinstance(outcome, BaseException):
                raise outcome

        return Comparison(
            first_location=first_location,
            second_location=second_location,
            first=first,
            second=second,
            differences=calculate_differences(first, second),
        )

    async def _fetch(
        self,
        address: str,
        method: int,
        day: Optional[date],
        deadline: Optional[Deadline],
    ) -> PrayerTimesResult:
        params = PrayerTimesParams(address=address, method=method)
        if day is not None:
            params = params.model_copy(update={"date": day})
        return await self._client.get_prayer_times_by_address(params, deadline)


def calculate_differences(
    first: PrayerTimesResult, second: PrayerTimesResult
) -> List[PrayerDifference]:
    """
    Diff each prayer's time between two results.

    Args:
        first: Reference result
        second: Compared result

    Returns:
        One row per prayer, positive when the second location is later
    """
    first_timings = first.data.timings.as_dict()
    second_timings = second.data.timings.as_dict()
    rows = []
    for name in PRAYER_NAMES:
        a = clean_time(first_timings.get(name, ""))
        b = clean_time(second_timings.get(name, ""))
        rows.append(PrayerDifference(name, a, b, calculate_time_diff(a, b)))
    return rows


def calculate_time_diff(first: str, second: str) -> int:
    """Minutes from first to second ("HH:MM")."""
    return time_to_minutes(second) - time_to_minutes(first)


def format_diff(minutes: int) -> str:
    """
    Format a signed minute difference.

    Args:
        minutes: Difference in minutes

    Returns:
        "0m", "-20m", "2h" or "-1h 5m" (no "+" for positive values)
    """
    if minutes == 0:
        return "0m"
    if abs(minutes) < 60:
        return f"{minutes}m"

    sign = "-" if minutes < 0 else ""
    hours, rest = divmod(abs(minutes), 60)
    if rest == 0:
        return f"{sign}{hours}h"
    return f"{sign}{hours}h {rest}m"
