"""Domain models for the overlap engine.

This module contains the core data structures shared by the engine:
tracked cities, meeting selections, resolved slots and the slot grid.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

SLOTS_PER_DAY = 48
MINUTES_PER_SLOT = 30


def check_slot_index(slot: int) -> int:
    """Return ``slot`` unchanged, raising ValueError if it is not a valid index."""
    if isinstance(slot, bool) or not isinstance(slot, int):
        raise ValueError(f"Slot index must be an int, got {slot!r}")
    if not 0 <= slot < SLOTS_PER_DAY:
        raise ValueError(f"Slot index {slot} outside [0, {SLOTS_PER_DAY})")
    return slot


def check_decimal_hour(value: float, name: str = "hour") -> float:
    """Return ``value`` unchanged; ValueError unless it is a number in [0, 24)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not 0 <= value < 24:
        raise ValueError(f"{name} must be in [0, 24), got {value}")
    return value


@dataclass(frozen=True)
class City:
    """A tracked location.

    Attributes:
        id: Unique identifier (e.g., "new-york").
        name: Display name.
        timezone: IANA timezone identifier.
        country_code: ISO 3166 alpha-2 country code used for holidays.
        work_start: Local start of the working day in decimal hours.
        work_end: Local end of the working day in decimal hours. When it is
            smaller than work_start the window wraps past midnight.
    """

    id: str
    name: str
    timezone: str
    country_code: str = ""
    work_start: float = 9
    work_end: float = 17

    @property
    def is_overnight(self) -> bool:
        """True when the working window wraps past midnight."""
        return self.work_start > self.work_end

    def with_working_hours(self, start: float, end: float) -> "City":
        """Return a copy of this city with new working hours."""
        check_decimal_hour(start, "work_start")
        check_decimal_hour(end, "work_end")
        return replace(self, work_start=start, work_end=end)

    def to_dict(self) -> dict:
        """Serialize using the stored-list key names."""
        return {
            "id": self.id,
            "name": self.name,
            "timezone": self.timezone,
            "countryCode": self.country_code,
            "workStart": self.work_start,
            "workEnd": self.work_end,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "City":
        """Build a city from a stored dict; missing hours default to 9-17.

        Raises:
            KeyError: If id or timezone is missing.
            ValueError: If an hour is not a number in [0, 24).
        """
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            timezone=data["timezone"],
            country_code=data.get("countryCode") or "",
            work_start=check_decimal_hour(data.get("workStart", 9), "workStart"),
            work_end=check_decimal_hour(data.get("workEnd", 17), "workEnd"),
        )


@dataclass(frozen=True)
class MeetingSelection:
    """An inclusive range of slots picked on the grid.

    The two ends may be given in either order; consumers use
    first_slot/last_slot.

    Attributes:
        start_slot: Slot where the selection began.
        end_slot: Slot where the selection ended (inclusive).
    """

    start_slot: int
    end_slot: int

    def __post_init__(self):
        check_slot_index(self.start_slot)
        check_slot_index(self.end_slot)

    @property
    def first_slot(self) -> int:
        return min(self.start_slot, self.end_slot)

    @property
    def last_slot(self) -> int:
        return max(self.start_slot, self.end_slot)

    @property
    def end_exclusive(self) -> int:
        """Slot just after the selection; 48 when it runs to midnight."""
        return self.last_slot + 1

    @property
    def slot_count(self) -> int:
        return self.end_exclusive - self.first_slot

    @property
    def duration_minutes(self) -> int:
        return self.slot_count * MINUTES_PER_SLOT

    def contains(self, slot: int) -> bool:
        """Check if a slot falls within the selection."""
        return self.first_slot <= slot <= self.last_slot


@dataclass(frozen=True)
class ResolvedSlot:
    """A slot expressed in one city's wall-clock time.

    Attributes:
        hour: Local hour (0-23).
        minutes: Local minute.
        time_decimal: hour + minutes / 60.
        day_offset: -1, 0 or 1 relative to the reference calendar date.
        local_date: Local calendar date in the target timezone.
        local_datetime: Aware datetime in the target timezone.
    """

    hour: int
    minutes: int
    time_decimal: float
    day_offset: int
    local_date: date
    local_datetime: Optional[datetime] = None


@dataclass(frozen=True)
class SlotRecord:
    """One cell of the slot grid."""

    hour: int
    minutes: int
    is_working: bool


@dataclass
class SlotGrid:
    """Per-city slot records plus the overlap score vector.

    Attributes:
        reference_date: Calendar date anchoring slot 0.
        rows: Dict mapping city IDs to 48 SlotRecords, in city order.
        overlap: Count of working cities for each slot.
    """

    reference_date: date
    rows: dict[str, list[SlotRecord]] = field(default_factory=dict)
    overlap: list[int] = field(default_factory=lambda: [0] * SLOTS_PER_DAY)

    @property
    def city_count(self) -> int:
        return len(self.rows)

    def score_at(self, slot: int) -> int:
        """Number of cities working at a slot."""
        return self.overlap[check_slot_index(slot)]

    def overlap_ratio(self, slot: int) -> float:
        """Fraction of cities working at a slot (0.0 with no cities)."""
        if not self.rows:
            return 0.0
        return self.score_at(slot) / self.city_count

    def heatmap_level(self, slot: int) -> int:
        """Bucket the overlap ratio into levels 0-5.

        0 means nobody is working, 5 means everybody is; levels 1-4 cover
        the quarters in between.
        """
        score = self.score_at(slot)
        if score == 0:
            return 0
        ratio = self.overlap_ratio(slot)
        if ratio < 0.25:
            return 1
        elif ratio < 0.5:
            return 2
        elif ratio < 0.75:
            return 3
        elif ratio < 1:
            return 4
        return 5

    def best_slots(self) -> list[int]:
        """Slots with the highest non-zero overlap score."""
        best = max(self.overlap, default=0)
        if best == 0:
            return []
        return [slot for slot, score in enumerate(self.overlap) if score == best]

    def full_overlap_slots(self) -> list[int]:
        """Slots where every tracked city is working."""
        if not self.rows:
            return []
        return [
            slot for slot, score in enumerate(self.overlap)
            if score == self.city_count
        ]

    def working_cities_at(self, slot: int) -> list[str]:
        """City IDs working at a slot."""
        check_slot_index(slot)
        return [city_id for city_id, records in self.rows.items() if records[slot].is_working]


@dataclass(frozen=True)
class MeetingTime:
    """A meeting selection translated into one city's local time.

    Attributes:
        city: The city the times are expressed in.
        start: Resolved start slot.
        end: Resolved end boundary (exclusive end of the selection).
        duration_minutes: Length of the meeting.
        start_label: Short start label (e.g., "9AM").
        end_label: Short end label (e.g., "10:30AM").
        date_label: One date, or "start - end" when the meeting spans days.
    """

    city: City
    start: ResolvedSlot
    end: ResolvedSlot
    duration_minutes: int
    start_label: str
    end_label: str
    date_label: str

    @property
    def spans_days(self) -> bool:
        return self.start.local_date != self.end.local_date


@dataclass(frozen=True)
class TimeOption:
    """A half-hour choice for working-hours pickers."""

    value: float
    label: str
