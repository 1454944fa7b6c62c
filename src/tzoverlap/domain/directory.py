"""City and timezone directory.

Provides the default city list and a small search over the country and
timezone tables shipped with ``pytz``. Search results are City candidates
with default 9-17 working hours, ready to be added to a session.
"""

import re
from typing import Optional

import pytz

from tzoverlap.domain.models import City

DEFAULT_COUNTRY_CODE = "US"

DEFAULT_CITIES: tuple[City, ...] = (
    City(id="new-york", name="New York", timezone="America/New_York", country_code="US"),
    City(id="london", name="London", timezone="Europe/London", country_code="GB"),
    City(id="hong-kong", name="Hong Kong", timezone="Asia/Hong_Kong", country_code="HK"),
    City(id="sydney", name="Sydney", timezone="Australia/Sydney", country_code="AU"),
    City(id="dubai", name="Dubai", timezone="Asia/Dubai", country_code="AE"),
    City(id="singapore", name="Singapore", timezone="Asia/Singapore", country_code="SG"),
)


def slugify(name: str) -> str:
    """Turn a display name into a city ID (e.g., "Hong Kong" -> "hong-kong")."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def city_name_from_timezone(timezone: str) -> str:
    """Display name from the last part of an IANA ID."""
    return timezone.rsplit("/", 1)[-1].replace("_", " ")


class CityDirectory:
    """Lookup service mapping free-text queries to timezone candidates.

    Example:
        >>> directory = CityDirectory()
        >>> [c.timezone for c in directory.search("tokyo")]
        ['Asia/Tokyo']
    """

    def __init__(self):
        self._entries: Optional[list[tuple[str, str, str]]] = None
        self._country_by_timezone: Optional[dict[str, str]] = None

    def search(self, query: str, limit: int = 10) -> list[City]:
        """Find timezone candidates for a query.

        The query is matched against the city part of IANA IDs, full IANA
        IDs, country names and exact country codes. Exact city matches come
        first, then prefix matches, then everything else.

        Args:
            query: Free-text search string.
            limit: Maximum number of candidates returned.

        Returns:
            City candidates with default working hours.
        """
        needle = query.strip().lower()
        if not needle:
            return []

        ranked = []
        seen = set()
        for code, country_name, timezone in self._load_entries():
            if timezone in seen:
                continue
            city_name = city_name_from_timezone(timezone)
            rank = self._rank(needle, code, country_name, timezone, city_name)
            if rank is None:
                continue
            seen.add(timezone)
            ranked.append((rank, city_name, timezone, code))

        ranked.sort()
        return [
            City(id=slugify(city_name), name=city_name, timezone=timezone, country_code=code)
            for _, city_name, timezone, code in ranked[:limit]
        ]

    def country_for_timezone(self, timezone: str) -> str:
        """Country code owning a timezone, defaulting to "US" when unknown."""
        if self._country_by_timezone is None:
            self._country_by_timezone = {}
            for code, _, tz in self._load_entries():
                self._country_by_timezone.setdefault(tz, code)
        return self._country_by_timezone.get(timezone, DEFAULT_COUNTRY_CODE)

    def _rank(
        self,
        needle: str,
        code: str,
        country_name: str,
        timezone: str,
        city_name: str,
    ) -> Optional[int]:
        """Rank a directory entry against the query; None if no match."""
        city = city_name.lower()
        if city == needle:
            return 0
        if city.startswith(needle):
            return 1
        if needle in city or needle in timezone.lower():
            return 2
        if needle == code.lower() or needle in country_name.lower():
            return 3
        return None

    def _load_entries(self) -> list[tuple[str, str, str]]:
        """(country_code, country_name, timezone) rows from pytz."""
        if self._entries is None:
            entries = []
            for code in pytz.country_timezones:
                country_name = pytz.country_names.get(code, code)
                for timezone in pytz.country_timezones[code]:
                    entries.append((code, country_name, timezone))
            self._entries = entries
        return self._entries
