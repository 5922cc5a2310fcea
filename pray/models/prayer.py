"""
Prayer times request and response models.

Sandi Metz Principles:
- Small classes focused on data validation
- Clear property names
- Single responsibility per model
"""

from datetime import date as date_type
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from pray.utils.hasher import format_coordinate

API_SUCCESS_CODE = 200
API_DATE_FORMAT = "%d-%m-%Y"


def _today() -> date_type:
    return date_type.today()


class PrayerTimesParams(BaseModel):
    """Parameters for a single-day prayer times request."""

    latitude: float = Field(default=0.0, description="Latitude")
    longitude: float = Field(default=0.0, description="Longitude")
    address: str = Field(default="", description="Address (resolved remotely)")
    date: date_type = Field(default_factory=_today, description="Requested day")
    method: int = Field(default=5, description="Calculation method (0-23)")
    school: int = Field(default=0, description="0 = Shafi, 1 = Hanafi")
    timezone: str = Field(default="", description="Timezone override")
    language: str = Field(default="en", description="Language (en or ar)")
    adjustment: int = Field(default=0, description="Hijri day adjustment")
    iso8601: bool = Field(default=False, description="ISO 8601 timings")

    @property
    def has_coordinates(self) -> bool:
        """Check if any coordinate is set."""
        return self.latitude != 0 or self.longitude != 0

    def date_string(self) -> str:
        """Get date formatted for the API (DD-MM-YYYY)."""
        return self.date.strftime(API_DATE_FORMAT)

    def to_query_params(self) -> Dict[str, str]:
        """Convert to URL query parameters."""
        query: Dict[str, str] = {}

        if self.has_coordinates:
            query["latitude"] = format_coordinate(self.latitude)
            query["longitude"] = format_coordinate(self.longitude)

        query["method"] = str(self.method)

        if self.school > 0:
            query["school"] = str(self.school)
        if self.timezone:
            query["timezonestring"] = self.timezone
        if self.adjustment != 0:
            query["adjustment"] = str(self.adjustment)
        if self.iso8601:
            query["iso8601"] = "true"

        return query


class CalendarParams(BaseModel):
    """Parameters for monthly calendar and ICS subscription requests."""

    latitude: float = Field(default=0.0, description="Latitude")
    longitude: float = Field(default=0.0, description="Longitude")
    address: str = Field(default="", description="Address")
    year: int = Field(default_factory=lambda: _today().year, description="Year")
    month: int = Field(default_factory=lambda: _today().month, description="Month")
    method: int = Field(default=5, description="Calculation method (0-23)")

    # Event settings
    duration: int = Field(default=25, description="Event duration in minutes")
    months: int = Field(default=3, description="Number of months to generate")
    alarm: str = Field(default="5,10,15", description="Alarm offsets in minutes")
    events: str = Field(default="all", description="Events to include")

    # Display settings
    language: str = Field(default="en", description="Language")
    color: str = Field(default="#1e90ff", description="Calendar color")
    hijri: str = Field(default="desc", description="Hijri date placement")

    # Special features
    jumuah: bool = False
    jumuah_duration: int = 0
    qibla: bool = False
    dua: bool = False
    traveler: bool = False
    ramadan: bool = False
    iftar_duration: int = 0
    taraweeh_duration: int = 0
    suhoor_duration: int = 0
    hijri_holidays: bool = False
    iqama: str = ""

    @property
    def has_coordinates(self) -> bool:
        """Check if any coordinate is set."""
        return self.latitude != 0 or self.longitude != 0

    def to_query_params(self) -> Dict[str, str]:
        """Convert to calendar endpoint query parameters."""
        query: Dict[str, str] = {}
        if self.has_coordinates:
            query["latitude"] = format_coordinate(self.latitude)
            query["longitude"] = format_coordinate(self.longitude)
        query["method"] = str(self.method)
        return query

    def to_ics_query_params(self) -> Dict[str, str]:
        """Convert to ICS subscription query parameters."""
        query: Dict[str, str] = {}

        if self.address:
            query["address"] = self.address
        else:
            query["latitude"] = format_coordinate(self.latitude)
            query["longitude"] = format_coordinate(self.longitude)

        positive_ints = {
            "method": self.method,
            "duration": self.duration,
            "months": self.months,
            "jumuahDuration": self.jumuah_duration,
            "iftarDuration": self.iftar_duration,
            "taraweehDuration": self.taraweeh_duration,
            "suhoorDuration": self.suhoor_duration,
        }
        strings = {
            "alarm": self.alarm,
            "events": self.events,
            "lang": self.language,
            "color": self.color,
            "hijri": self.hijri,
            "iqama": self.iqama,
        }
        flags = {
            "jumuah": self.jumuah,
            "qibla": self.qibla,
            "dua": self.dua,
            "traveler": self.traveler,
            "ramadan": self.ramadan,
            "hijriHolidays": self.hijri_holidays,
        }

        query.update({k: str(v) for k, v in positive_ints.items() if v > 0})
        query.update({k: v for k, v in strings.items() if v})
        query.update({k: "true" for k, v in flags.items() if v})
        return query


class _RemoteModel(BaseModel):
    """Frozen model that keeps unknown remote fields."""

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class Timings(_RemoteModel):
    """Prayer times for one day (HH:MM, possibly with a zone suffix)."""

    Fajr: str = ""
    Sunrise: str = ""
    Dhuhr: str = ""
    Asr: str = ""
    Sunset: str = ""
    Maghrib: str = ""
    Isha: str = ""
    Imsak: str = ""
    Midnight: str = ""
    Firstthird: str = ""
    Lastthird: str = ""

    def as_dict(self) -> Dict[str, str]:
        """Get timings keyed by prayer name, skipping blanks."""
        return {name: value for name, value in self.model_dump().items() if value}


class DateInfo(_RemoteModel):
    """Gregorian and Hijri date information."""

    readable: str = ""
    timestamp: str = ""
    gregorian: Dict[str, Any] = Field(default_factory=dict)
    hijri: Dict[str, Any] = Field(default_factory=dict)


class Meta(_RemoteModel):
    """Calculation metadata."""

    latitude: float = 0.0
    longitude: float = 0.0
    timezone: str = ""
    method: Dict[str, Any] = Field(default_factory=dict)
    school: str = ""


class PrayerTimesData(_RemoteModel):
    """Main prayer times payload."""

    timings: Timings = Field(default_factory=Timings)
    date: DateInfo = Field(default_factory=DateInfo)
    meta: Meta = Field(default_factory=Meta)


class PrayerTimesResult(_RemoteModel):
    """Prayer times API response envelope."""

    code: int
    status: str = ""
    data: PrayerTimesData = Field(default_factory=PrayerTimesData)

    @property
    def is_success(self) -> bool:
        """Check the envelope reports success."""
        return self.code == API_SUCCESS_CODE


class CalendarResult(_RemoteModel):
    """Monthly calendar API response envelope."""

    code: int
    status: str = ""
    data: List[PrayerTimesData] = Field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check the envelope reports success."""
        return self.code == API_SUCCESS_CODE


class QiblaData(_RemoteModel):
    """Qibla direction payload."""

    latitude: float = 0.0
    longitude: float = 0.0
    direction: float = 0.0


class QiblaResult(_RemoteModel):
    """Qibla API response envelope."""

    code: int
    status: str = ""
    data: QiblaData = Field(default_factory=QiblaData)

    @property
    def is_success(self) -> bool:
        """Check the envelope reports success."""
        return self.code == API_SUCCESS_CODE

