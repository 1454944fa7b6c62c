"""Slot-time resolution.

Slots are half-hour intervals of the reference date, measured in the
viewer's own timezone (the reference timezone). This module converts a slot
into wall-clock time in any other IANA timezone and reports whether that
local time falls on the previous, same or next calendar day.
"""

from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from tzoverlap.domain.models import (
    MINUTES_PER_SLOT,
    SLOTS_PER_DAY,
    ResolvedSlot,
    check_slot_index,
)

DEFAULT_REFERENCE_TIMEZONE = "UTC"

DateLike = Union[date, datetime]


def reference_day(reference_date: DateLike) -> date:
    """Calendar date of a reference date, dropping any time of day."""
    if isinstance(reference_date, datetime):
        return reference_date.date()
    return reference_date


def slot_start(
    reference_date: DateLike,
    slot_index: int,
    reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE,
) -> datetime:
    """Aware datetime at which a slot starts, in the reference timezone."""
    check_slot_index(slot_index)
    day = reference_day(reference_date)
    hours, minutes = divmod(slot_index * MINUTES_PER_SLOT, 60)
    return datetime(
        day.year, day.month, day.day, hours, minutes,
        tzinfo=ZoneInfo(reference_timezone),
    )


def resolve_slot(
    reference_date: DateLike,
    slot_index: int,
    timezone: str,
    reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE,
) -> ResolvedSlot:
    """Resolve a slot into wall-clock time in a timezone.

    Args:
        reference_date: Date anchoring slot 0 (time of day is ignored).
        slot_index: Slot in [0, 48).
        timezone: Target IANA timezone.
        reference_timezone: Timezone the slot grid is laid out in.

    Returns:
        ResolvedSlot with local hour, minutes, decimal time, day offset and
        local date.

    Raises:
        ValueError: If slot_index is outside [0, 48).
        zoneinfo.ZoneInfoNotFoundError: If a timezone is unknown.
    """
    instant = slot_start(reference_date, slot_index, reference_timezone)
    local = instant.astimezone(ZoneInfo(timezone))

    base_day = reference_day(reference_date)
    local_day = local.date()
    if local_day > base_day:
        day_offset = 1
    elif local_day < base_day:
        day_offset = -1
    else:
        day_offset = 0

    return ResolvedSlot(
        hour=local.hour,
        minutes=local.minute,
        time_decimal=local.hour + local.minute / 60,
        day_offset=day_offset,
        local_date=local_day,
        local_datetime=local,
    )


class SlotResolver:
    """Resolves slots for a fixed reference timezone.

    Example:
        >>> resolver = SlotResolver("UTC")
        >>> resolver.resolve(date(2025, 1, 7), 38, "America/New_York").hour
        14
    """

    def __init__(self, reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE):
        # Fail early on a bad reference zone instead of on the first resolve
        ZoneInfo(reference_timezone)
        self.reference_timezone = reference_timezone

    def resolve(
        self,
        reference_date: DateLike,
        slot_index: int,
        timezone: str,
    ) -> ResolvedSlot:
        return resolve_slot(reference_date, slot_index, timezone, self.reference_timezone)

    def slot_start(self, reference_date: DateLike, slot_index: int) -> datetime:
        return slot_start(reference_date, slot_index, self.reference_timezone)

    def slot_start_times(self, reference_date: DateLike) -> list[datetime]:
        """Start instants of all 48 slots of the reference date."""
        return [self.slot_start(reference_date, i) for i in range(SLOTS_PER_DAY)]

    def now(self) -> datetime:
        """Current instant in the reference timezone."""
        return datetime.now(ZoneInfo(self.reference_timezone))


def first_future_slot(
    reference_date: DateLike,
    now: datetime,
    reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE,
) -> int:
    """Index of the first slot that has not started yet.

    Returns 48 when the reference date is in the past and 0 when it is in
    the future. On the current day the slot containing ``now`` counts as
    the first future slot. Aware ``now`` values are converted to the
    reference timezone; naive ones are assumed to be in it already.
    """
    if now.tzinfo is not None:
        now = now.astimezone(ZoneInfo(reference_timezone))

    ref_day = reference_day(reference_date)
    today = now.date()
    if ref_day < today:
        return SLOTS_PER_DAY
    if ref_day > today:
        return 0
    return now.hour * 2 + (1 if now.minute >= 30 else 0)


def current_time_position(timezone: str, now: Optional[datetime] = None) -> float:
    """Percentage of the local day elapsed in a timezone (0-100)."""
    zone = ZoneInfo(timezone)
    local = datetime.now(zone) if now is None else now.astimezone(zone)
    return (local.hour * 60 + local.minute) / (24 * 60) * 100
