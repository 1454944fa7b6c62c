"""Policy definitions for working-hours rules.

This module decides whether a local time counts as working time for a city.
The grid builder only sees the WorkingHoursPolicy interface, so weekend
and holiday rules can be swapped without touching it.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from tzoverlap.domain.holidays import HolidayOracle, default_holiday_oracle

# date.weekday() values for Saturday and Sunday
DEFAULT_WEEKEND_DAYS = (5, 6)


def is_weekend(day: date, weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS) -> bool:
    """Check if a date falls on a weekend day."""
    return day.weekday() in weekend_days


def is_within_window(time_decimal: float, work_start: float, work_end: float) -> bool:
    """Time-of-day rule for a working window.

    Start is inclusive and end exclusive. A window with work_start greater
    than work_end wraps past midnight (e.g., 22 -> 6). A zero-length window
    (work_start == work_end) contains no time at all.
    """
    if work_start <= work_end:
        return work_start <= time_decimal < work_end
    # Overnight window, e.g. 22 -> 6
    return time_decimal >= work_start or time_decimal < work_end


def is_within_working_hours(
    time_decimal: float,
    work_start: float,
    work_end: float,
    local_date: Optional[date] = None,
    country_code: Optional[str] = None,
    holiday_oracle: Optional[HolidayOracle] = None,
) -> bool:
    """Check if a local time is working time.

    Args:
        time_decimal: Local time of day in decimal hours.
        work_start: Start of the working window.
        work_end: End of the working window (exclusive).
        local_date: Local calendar date; weekends are never working.
        country_code: Country for the holiday check (needs local_date).
        holiday_oracle: Holiday source. Defaults to the shared
            PublicHolidayOracle when both local_date and country_code are set.
    """
    if local_date is not None:
        if is_weekend(local_date):
            return False
        if country_code:
            oracle = holiday_oracle if holiday_oracle is not None else default_holiday_oracle()
            if oracle.is_holiday(local_date, country_code):
                return False

    return is_within_window(time_decimal, work_start, work_end)


class WorkingHoursPolicy(ABC):
    """Abstract base class for working-hours policies."""

    @abstractmethod
    def is_working(
        self,
        time_decimal: float,
        work_start: float,
        work_end: float,
        local_date: Optional[date] = None,
        country_code: Optional[str] = None,
    ) -> bool:
        """Check if a local time counts as working time.

        Args:
            time_decimal: Local time of day in decimal hours.
            work_start: Start of the working window (inclusive).
            work_end: End of the working window (exclusive).
            local_date: Local calendar date, if known.
            country_code: Country code for holiday checks, if known.

        Returns:
            True if the slot is working time.
        """
        pass


class DefaultWorkingHoursPolicy(WorkingHoursPolicy):
    """Default working-hours policy.

    Rules:
    - Time of day must fall inside the working window (overnight windows wrap)
    - Saturday and Sunday are never working
    - Public holidays in the city's country are never working

    Date based rules only apply when a local date is supplied.
    """

    def __init__(
        self,
        holiday_oracle: Optional[HolidayOracle] = None,
        weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS,
    ):
        self.holiday_oracle = (
            holiday_oracle if holiday_oracle is not None else default_holiday_oracle()
        )
        self.weekend_days = weekend_days

    def is_working(
        self,
        time_decimal: float,
        work_start: float,
        work_end: float,
        local_date: Optional[date] = None,
        country_code: Optional[str] = None,
    ) -> bool:
        if local_date is not None:
            if is_weekend(local_date, self.weekend_days):
                return False
            if self.is_holiday(local_date, country_code):
                return False

        return is_within_window(time_decimal, work_start, work_end)

    def is_holiday(self, local_date: date, country_code: Optional[str]) -> bool:
        """Check the holiday oracle for a country; no country means no holiday."""
        if not country_code:
            return False
        return self.holiday_oracle.is_holiday(local_date, country_code)
