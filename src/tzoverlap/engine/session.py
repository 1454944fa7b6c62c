"""Session state for a planning session.

Holds the tracked cities, the reference date and the current meeting
selection. Every change replaces the whole city tuple, so a grid computed
from an earlier value never sees a half-applied update.
"""

from collections.abc import Callable, Iterable
from datetime import date
from typing import Optional

from tzoverlap.domain.models import City, MeetingSelection
from tzoverlap.engine.resolver import DateLike, reference_day


class TimezoneSession:
    """Mutable session holding cities, reference date and meeting.

    Attributes:
        cities: Tracked cities in display order.
        reference_date: Date anchoring slot 0.
        meeting: Current selection, or None.
        on_change: Called with the new city tuple after each city change.
    """

    def __init__(
        self,
        cities: Iterable[City] = (),
        reference_date: Optional[DateLike] = None,
        on_change: Optional[Callable[[tuple[City, ...]], None]] = None,
    ):
        self.cities: tuple[City, ...] = tuple(cities)
        self.reference_date: date = (
            reference_day(reference_date) if reference_date is not None else date.today()
        )
        self.meeting: Optional[MeetingSelection] = None
        self.on_change = on_change

    def get_city(self, city_id: str) -> Optional[City]:
        """Find a tracked city by ID."""
        for city in self.cities:
            if city.id == city_id:
                return city
        return None

    def add_city(self, city: City) -> bool:
        """Append a city; returns False if its ID is already tracked."""
        if self.get_city(city.id) is not None:
            return False
        self._set_cities(self.cities + (city,))
        return True

    def remove_city(self, city_id: str) -> bool:
        """Remove a city by ID; returns False if it was not tracked."""
        remaining = tuple(c for c in self.cities if c.id != city_id)
        if len(remaining) == len(self.cities):
            return False
        self._set_cities(remaining)
        return True

    def update_working_hours(self, city_id: str, start: float, end: float) -> bool:
        """Replace a city's working hours; returns False if it was not tracked.

        Raises:
            ValueError: If start or end is outside [0, 24).
        """
        if self.get_city(city_id) is None:
            return False
        self._set_cities(tuple(
            c.with_working_hours(start, end) if c.id == city_id else c
            for c in self.cities
        ))
        return True

    def reorder_cities(self, from_index: int, to_index: int) -> None:
        """Move the city at from_index so it ends up at to_index.

        Raises:
            IndexError: If from_index is not a valid position.
        """
        cities = list(self.cities)
        moved = cities.pop(from_index)
        cities.insert(to_index, moved)
        self._set_cities(tuple(cities))

    def set_reference_date(self, reference_date: DateLike) -> None:
        self.reference_date = reference_day(reference_date)

    def set_meeting(self, meeting: Optional[MeetingSelection]) -> None:
        """Set or clear (None) the meeting selection."""
        self.meeting = meeting

    def clear_meeting(self) -> None:
        self.meeting = None

    def _set_cities(self, cities: tuple[City, ...]) -> None:
        self.cities = cities
        if self.on_change is not None:
            self.on_change(cities)
