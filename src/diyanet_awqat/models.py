"""Typed records returned by the Diyanet Awqat Salah API.

Field values are passed through as the service sends them; only the ISO 8601
date fields of :class:`PrayerTime` are converted to ``datetime``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone, tzinfo
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from .client import Client

_FRACTION_RE = re.compile(r"\.(\d+)")


def _field(data: Dict[str, Any], key: str, default: Any = "") -> Any:
    """Look up ``key`` the way the service's JSON is keyed (camelCase, case-insensitive)."""

    if key in data:
        value = data[key]
    else:
        lowered = key.lower()
        value = next((v for k, v in data.items() if k.lower() == lowered), default)
    return default if value is None else value


def _parse_iso8601(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # fromisoformat wants exactly six fractional digits before Python 3.11
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.strip())
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _require_mapping(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class Country:
    id: int
    code: str
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> "Country":
        data = _require_mapping(data)
        return cls(id=int(_field(data, "id", 0)), code=_field(data, "code"), name=_field(data, "name"))


@dataclass(frozen=True)
class State:
    id: int
    code: str
    name: str

    @classmethod
    def from_dict(cls, data: Any) -> "State":
        data = _require_mapping(data)
        return cls(id=int(_field(data, "id", 0)), code=_field(data, "code"), name=_field(data, "name"))


@dataclass(frozen=True)
class CityDetail:
    """Detailed information about a city, including its qibla data."""

    id: str
    name: str
    code: str
    geographic_qibla_angle: str
    distance_to_kaaba: str
    qibla_angle: str
    city: str
    city_en: str
    country: str
    country_en: str

    @classmethod
    def from_dict(cls, data: Any) -> "CityDetail":
        data = _require_mapping(data)
        return cls(
            id=str(_field(data, "id")),
            name=_field(data, "name"),
            code=_field(data, "code"),
            geographic_qibla_angle=_field(data, "geographicQiblaAngle"),
            distance_to_kaaba=_field(data, "distanceToKaaba"),
            qibla_angle=_field(data, "qiblaAngle"),
            city=_field(data, "city"),
            city_en=_field(data, "cityEn"),
            country=_field(data, "country"),
            country_en=_field(data, "countryEn"),
        )


@dataclass(frozen=True)
class DailyContent:
    """A day's devotional content: a verse, a hadith and a prayer with their sources."""

    id: int
    day_of_year: int
    verse: str
    verse_source: str
    hadith: str
    hadith_source: str
    pray: str
    pray_source: str

    @classmethod
    def from_dict(cls, data: Any) -> "DailyContent":
        data = _require_mapping(data)
        return cls(
            id=int(_field(data, "id", 0)),
            day_of_year=int(_field(data, "dayOfYear", 0)),
            verse=_field(data, "verse"),
            verse_source=_field(data, "verseSource"),
            hadith=_field(data, "hadith"),
            hadith_source=_field(data, "hadithSource"),
            pray=_field(data, "pray"),
            pray_source=_field(data, "praySource"),
        )


@dataclass(frozen=True)
class PrayerTime:
    """Prayer times and calendar information for one day in one city."""

    shape_moon_url: str
    fajr: str
    sunrise: str
    dhuhr: str
    asr: str
    maghrib: str
    isha: str
    astronomical_sunset: str
    astronomical_sunrise: str
    hijri_date_short: str
    hijri_date_long: str
    hijri_date: Optional[datetime]
    qibla_time: str
    gregorian_date_short: str
    gregorian_date_long: str
    gregorian_date: Optional[datetime]
    greenwich_mean_timezone: float

    @classmethod
    def from_dict(cls, data: Any) -> "PrayerTime":
        data = _require_mapping(data)
        return cls(
            shape_moon_url=_field(data, "shapeMoonUrl"),
            fajr=_field(data, "fajr"),
            sunrise=_field(data, "sunrise"),
            dhuhr=_field(data, "dhuhr"),
            asr=_field(data, "asr"),
            maghrib=_field(data, "maghrib"),
            isha=_field(data, "isha"),
            astronomical_sunset=_field(data, "astronomicalSunset"),
            astronomical_sunrise=_field(data, "astronomicalSunrise"),
            hijri_date_short=_field(data, "hijriDateShort"),
            hijri_date_long=_field(data, "hijriDateLong"),
            hijri_date=_parse_iso8601(_field(data, "hijriDateLongIso8601", None)),
            qibla_time=_field(data, "qiblaTime"),
            gregorian_date_short=_field(data, "gregorianDateShort"),
            gregorian_date_long=_field(data, "gregorianDateLong"),
            gregorian_date=_parse_iso8601(_field(data, "gregorianDateLongIso8601", None)),
            greenwich_mean_timezone=float(_field(data, "greenwichMeanTimeZone", 0.0)),
        )

    def with_local_date(self, tz: Optional[tzinfo] = None) -> "PrayerTime":
        """Pin ``gregorian_date`` to midnight of its calendar day in ``tz``.

        Without ``tz`` a fixed-offset zone is built from the GMT offset the
        service reports for the city.
        """

        if self.gregorian_date is None:
            return self
        if tz is None:
            offset = self.greenwich_mean_timezone
            tz = timezone(timedelta(hours=offset), f"GMT{offset:.2f}")
        day = self.gregorian_date
        return replace(self, gregorian_date=datetime(day.year, day.month, day.day, tzinfo=tz))


@dataclass(frozen=True)
class City:
    """A city; when fetched through a :class:`Client` it can query its own data."""

    id: int
    code: str
    name: str
    client: Optional["Client"] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "City":
        data = _require_mapping(data)
        return cls(id=int(_field(data, "id", 0)), code=_field(data, "code"), name=_field(data, "name"))

    def bind(self, client: "Client") -> "City":
        return replace(self, client=client)

    @property
    def label(self) -> str:
        return f"city {self.name} ({self.id} - {self.code})"

    def _bound_client(self) -> "Client":
        if self.client is None:
            raise RuntimeError(f"{self.label} is not bound to a client")
        return self.client

    def get_city_detail(self) -> CityDetail:
        return self._bound_client().get_city_detail(self.id, subject=self.label)

    def get_prayer_time_daily(self, tz: Optional[tzinfo] = None) -> List[PrayerTime]:
        return self._bound_client().get_prayer_time_daily(self.id, tz, subject=self.label)

    def get_prayer_time_weekly(self, tz: Optional[tzinfo] = None) -> List[PrayerTime]:
        return self._bound_client().get_prayer_time_weekly(self.id, tz, subject=self.label)

    def get_prayer_time_monthly(self, tz: Optional[tzinfo] = None) -> List[PrayerTime]:
        return self._bound_client().get_prayer_time_monthly(self.id, tz, subject=self.label)

    def get_prayer_time_ramadan(self, tz: Optional[tzinfo] = None) -> List[PrayerTime]:
        return self._bound_client().get_prayer_time_ramadan(self.id, tz, subject=self.label)
