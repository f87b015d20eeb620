"""Resource accessors for the Diyanet Awqat Salah API."""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, Callable, List, Optional, TypeVar

import requests

from .envelope import decode_response
from .errors import TransportError
from .models import City, CityDetail, Country, DailyContent, PrayerTime, State

logger = logging.getLogger("diyanet-client")

T = TypeVar("T")

DEFAULT_TIMEOUT = 30

COUNTRIES_PATH = "api/Place/Countries"
STATES_PATH = "api/Place/States"
STATES_BY_COUNTRY_PATH = "api/Place/States/{id}"
CITIES_PATH = "api/Place/Cities"
CITIES_BY_STATE_PATH = "api/Place/Cities/{id}"
CITY_DETAIL_PATH = "api/Place/CityDetail/{id}"
DAILY_CONTENT_PATH = "api/DailyContent"
PRAYER_TIME_PATHS = {
    "daily": "api/PrayerTime/Daily/{id}",
    "weekly": "api/PrayerTime/Weekly/{id}",
    "monthly": "api/PrayerTime/Monthly/{id}",
    "Ramadan": "api/PrayerTime/Ramadan/{id}",
}


def _list_of(parse: Callable[[Any], T]) -> Callable[[Any], List[T]]:
    def parse_list(data: Any) -> List[T]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [parse(item) for item in data]

    return parse_list


class Client:
    """Diyanet Awqat Salah API client.

    ``session`` must already authenticate its requests, which is what
    :meth:`diyanet_awqat.Config.new_client` sets up.
    """

    def __init__(self, session: requests.Session, *, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout

    def _get(self, path: str, operation: str, parse: Callable[[Any], T]) -> T:
        url = self._base_url + path
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise TransportError(operation, str(exc)) from exc
        return decode_response(response, operation, parse)

    def get_countries(self) -> List[Country]:
        return self._get(COUNTRIES_PATH, "get countries", _list_of(Country.from_dict))

    def get_states(self) -> List[State]:
        return self._get(STATES_PATH, "get states", _list_of(State.from_dict))

    def get_states_by_country(self, country_id: int) -> List[State]:
        return self._get(
            STATES_BY_COUNTRY_PATH.format(id=country_id),
            f"get states for country ID {country_id}",
            _list_of(State.from_dict),
        )

    def get_cities(self) -> List[City]:
        cities = self._get(CITIES_PATH, "get cities", _list_of(City.from_dict))
        return [city.bind(self) for city in cities]

    def get_cities_by_state(self, state_id: int) -> List[City]:
        cities = self._get(
            CITIES_BY_STATE_PATH.format(id=state_id),
            f"get cities for state ID {state_id}",
            _list_of(City.from_dict),
        )
        return [city.bind(self) for city in cities]

    def get_city_detail(self, city_id: int, *, subject: Optional[str] = None) -> CityDetail:
        subject = subject or f"city ID {city_id}"
        return self._get(
            CITY_DETAIL_PATH.format(id=city_id),
            f"get city detail for {subject}",
            CityDetail.from_dict,
        )

    def get_daily_content(self) -> DailyContent:
        return self._get(DAILY_CONTENT_PATH, "get daily content", DailyContent.from_dict)

    def _get_prayer_times(
        self,
        period: str,
        city_id: int,
        tz: Optional[tzinfo],
        subject: Optional[str],
    ) -> List[PrayerTime]:
        subject = subject or f"city ID {city_id}"
        times = self._get(
            PRAYER_TIME_PATHS[period].format(id=city_id),
            f"get {period} prayer time for {subject}",
            _list_of(PrayerTime.from_dict),
        )
        return [item.with_local_date(tz) for item in times]

    def get_prayer_time_daily(
        self, city_id: int, tz: Optional[tzinfo] = None, *, subject: Optional[str] = None
    ) -> List[PrayerTime]:
        """Prayer times for today.

        ``gregorian_date`` is pinned to midnight in ``tz``, or in the city's
        own GMT offset when ``tz`` is omitted.
        """
        return self._get_prayer_times("daily", city_id, tz, subject)

    def get_prayer_time_weekly(
        self, city_id: int, tz: Optional[tzinfo] = None, *, subject: Optional[str] = None
    ) -> List[PrayerTime]:
        return self._get_prayer_times("weekly", city_id, tz, subject)

    def get_prayer_time_monthly(
        self, city_id: int, tz: Optional[tzinfo] = None, *, subject: Optional[str] = None
    ) -> List[PrayerTime]:
        return self._get_prayer_times("monthly", city_id, tz, subject)

    def get_prayer_time_ramadan(
        self, city_id: int, tz: Optional[tzinfo] = None, *, subject: Optional[str] = None
    ) -> List[PrayerTime]:
        return self._get_prayer_times("Ramadan", city_id, tz, subject)
