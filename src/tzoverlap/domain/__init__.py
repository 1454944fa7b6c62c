"""Domain models and business rules for the overlap engine."""

from tzoverlap.domain.directory import DEFAULT_CITIES, CityDirectory
from tzoverlap.domain.holidays import (
    HolidayCache,
    HolidayOracle,
    NoHolidays,
    PublicHolidayOracle,
    default_holiday_oracle,
)
from tzoverlap.domain.models import (
    MINUTES_PER_SLOT,
    SLOTS_PER_DAY,
    City,
    MeetingSelection,
    MeetingTime,
    ResolvedSlot,
    SlotGrid,
    SlotRecord,
    TimeOption,
)
from tzoverlap.domain.policies import (
    DefaultWorkingHoursPolicy,
    WorkingHoursPolicy,
    is_weekend,
    is_within_working_hours,
)

__all__ = [
    # Models
    "City",
    "MeetingSelection",
    "MeetingTime",
    "ResolvedSlot",
    "SlotGrid",
    "SlotRecord",
    "TimeOption",
    "MINUTES_PER_SLOT",
    "SLOTS_PER_DAY",
    # Directory
    "CityDirectory",
    "DEFAULT_CITIES",
    # Holidays
    "HolidayCache",
    "HolidayOracle",
    "NoHolidays",
    "PublicHolidayOracle",
    "default_holiday_oracle",
    # Policies
    "DefaultWorkingHoursPolicy",
    "WorkingHoursPolicy",
    "is_weekend",
    "is_within_working_hours",
]
