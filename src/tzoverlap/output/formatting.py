"""Time and date labels used by the grid, pickers and meeting display."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from tzoverlap.domain.models import MINUTES_PER_SLOT, SLOTS_PER_DAY, TimeOption


def _twelve_hour(hour: int) -> tuple[int, str]:
    period = "PM" if hour >= 12 else "AM"
    return (hour % 12 or 12, period)


def format_slot(hour: int, minutes: int) -> str:
    """Compact 12-hour label: "9AM", "9:30AM", "12PM"."""
    display_hour, period = _twelve_hour(hour)
    if minutes == 0:
        return f"{display_hour}{period}"
    return f"{display_hour}:{minutes:02d}{period}"


def format_decimal_time(time_decimal: float) -> str:
    """Picker label from decimal hours: 9.5 -> "9:30 AM"."""
    hours = int(time_decimal)
    minutes = round((time_decimal - hours) * 60)
    display_hour, period = _twelve_hour(hours)
    return f"{display_hour}:{minutes:02d} {period}"


def get_time_options() -> list[TimeOption]:
    """All 48 half-hour choices from 12:00 AM to 11:30 PM."""
    options = []
    for i in range(SLOTS_PER_DAY):
        hours, minutes = divmod(i * MINUTES_PER_SLOT, 60)
        value = hours + minutes / 60
        options.append(TimeOption(value=value, label=format_decimal_time(value)))
    return options


def day_abbreviation(day: date) -> str:
    """Three-letter weekday, e.g. "Tue"."""
    return day.strftime("%a")


def format_date_label(day: date) -> str:
    """Short date, e.g. "Tue, Jan 7"."""
    return f"{day.strftime('%a, %b')} {day.day}"


def format_duration(minutes: int) -> str:
    """Meeting length: "30m", "1h", "1h 30m"."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def timezone_offset_label(timezone: str, when: datetime) -> str:
    """UTC offset of a timezone at an instant, e.g. "UTC+09:00".

    Naive datetimes are taken to be UTC.
    """
    if when.tzinfo is None:
        when = when.replace(tzinfo=ZoneInfo("UTC"))
    offset = when.astimezone(ZoneInfo(timezone)).utcoffset() or timedelta(0)

    total_minutes = int(offset.total_seconds()) // 60
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"
