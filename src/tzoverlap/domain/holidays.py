"""Public holiday lookups.

The engine only needs to know whether a local calendar date is a public
holiday in a city's country. Lookups go through a HolidayOracle so the
calendar source can be swapped out, and results are memoized in an explicit
HolidayCache that is created once and handed to the oracle.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

import holidays

logger = logging.getLogger(__name__)


class HolidayCache:
    """Append-only memo of holiday answers keyed by (country_code, date).

    Holiday facts for a given date never change during a process lifetime,
    so entries are never invalidated.
    """

    def __init__(self):
        self._entries: dict[tuple[str, date], bool] = {}
        self.hits = 0
        self.misses = 0

    def get(self, country_code: str, day: date) -> Optional[bool]:
        """Return the cached answer, or None if the pair was never looked up."""
        result = self._entries.get((country_code, day))
        if result is None:
            self.misses += 1
        else:
            self.hits += 1
        return result

    def put(self, country_code: str, day: date, is_holiday: bool) -> None:
        self._entries.setdefault((country_code, day), is_holiday)

    def __contains__(self, key: tuple[str, date]) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class HolidayOracle(ABC):
    """Abstract base class for public holiday sources."""

    @abstractmethod
    def is_holiday(self, day: date, country_code: str) -> bool:
        """Check if a date is a public holiday in a country.

        Args:
            day: Local calendar date.
            country_code: ISO 3166 alpha-2 country code.

        Returns:
            True for public holidays. Unknown countries are never holidays.
        """
        pass

    @abstractmethod
    def holiday_name(self, day: date, country_code: str) -> Optional[str]:
        """Get the name of the public holiday on a date, if any."""
        pass


class NoHolidays(HolidayOracle):
    """Oracle that never reports a holiday."""

    def is_holiday(self, day: date, country_code: str) -> bool:
        return False

    def holiday_name(self, day: date, country_code: str) -> Optional[str]:
        return None


class PublicHolidayOracle(HolidayOracle):
    """Holiday oracle backed by the ``holidays`` package.

    Only the public category is consulted, so observances and optional
    days off do not block working hours. One calendar object is kept per
    country; it grows new years on demand.

    Example:
        >>> oracle = PublicHolidayOracle(HolidayCache())
        >>> oracle.is_holiday(date(2025, 12, 25), "GB")
        True
    """

    def __init__(self, cache: Optional[HolidayCache] = None):
        self.cache = cache if cache is not None else HolidayCache()
        self._calendars: dict[str, Optional[holidays.HolidayBase]] = {}

    def is_holiday(self, day: date, country_code: str) -> bool:
        if not country_code:
            return False

        code = country_code.upper()
        cached = self.cache.get(code, day)
        if cached is not None:
            return cached

        calendar = self._get_calendar(code)
        result = calendar is not None and day in calendar
        self.cache.put(code, day, result)
        return result

    def holiday_name(self, day: date, country_code: str) -> Optional[str]:
        if not country_code:
            return None
        calendar = self._get_calendar(country_code.upper())
        if calendar is None:
            return None
        return calendar.get(day)

    def _get_calendar(self, code: str) -> Optional[holidays.HolidayBase]:
        """Get (or create) the calendar for a country; None if unsupported."""
        if code not in self._calendars:
            try:
                self._calendars[code] = holidays.country_holidays(code)
            except NotImplementedError:
                logger.debug("No holiday calendar for country code %r", code)
                self._calendars[code] = None
        return self._calendars[code]


_default_oracle: Optional[PublicHolidayOracle] = None


def default_holiday_oracle() -> PublicHolidayOracle:
    """Process-wide PublicHolidayOracle used when callers do not inject one."""
    global _default_oracle
    if _default_oracle is None:
        _default_oracle = PublicHolidayOracle()
    return _default_oracle
