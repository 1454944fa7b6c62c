"""Slot grid construction.

The grid holds, for every tracked city, the local time and working flag of
each of the 48 slots, plus the per-slot overlap score. It is cheap to build
(cities x 48 conversions) and is recomputed whenever the city list or the
reference date changes.
"""

from collections.abc import Sequence
from typing import Optional

from tzoverlap.domain.models import SLOTS_PER_DAY, City, SlotGrid, SlotRecord
from tzoverlap.domain.policies import DefaultWorkingHoursPolicy, WorkingHoursPolicy
from tzoverlap.engine.resolver import DateLike, SlotResolver, reference_day


class GridBuilder:
    """Builds slot grids from cities and a reference date.

    Example:
        >>> builder = GridBuilder()
        >>> grid = builder.build([new_york, london], date(2025, 1, 7))
        >>> grid.best_slots()
        [28, 29, 30, 31, 32, 33]
    """

    def __init__(
        self,
        resolver: Optional[SlotResolver] = None,
        policy: Optional[WorkingHoursPolicy] = None,
    ):
        """Initialize builder.

        Args:
            resolver: Slot resolver (defaults to a UTC reference frame).
            policy: Working-hours policy (defaults to weekends plus public
                holidays from the shared PublicHolidayOracle).
        """
        self.resolver = resolver or SlotResolver()
        self.policy = policy or DefaultWorkingHoursPolicy()

    def build(self, cities: Sequence[City], reference_date: DateLike) -> SlotGrid:
        """Build the grid for all cities.

        Args:
            cities: Tracked cities, in display order.
            reference_date: Date anchoring slot 0.

        Returns:
            SlotGrid with one row per city and the overlap vector.

        Raises:
            ValueError: If two cities share an ID.
        """
        grid = SlotGrid(reference_date=reference_day(reference_date))

        for city in cities:
            if city.id in grid.rows:
                raise ValueError(f"Duplicate city id: {city.id}")

            records = self.build_row(city, reference_date)
            for slot, record in enumerate(records):
                if record.is_working:
                    grid.overlap[slot] += 1
            grid.rows[city.id] = records

        return grid

    def build_row(self, city: City, reference_date: DateLike) -> list[SlotRecord]:
        """Slot records for a single city."""
        records = []
        for slot in range(SLOTS_PER_DAY):
            resolved = self.resolver.resolve(reference_date, slot, city.timezone)
            is_working = self.policy.is_working(
                resolved.time_decimal,
                city.work_start,
                city.work_end,
                resolved.local_date,
                city.country_code,
            )
            records.append(SlotRecord(resolved.hour, resolved.minutes, is_working))
        return records

    def overlap_score(
        self,
        cities: Sequence[City],
        slot: int,
        reference_date: DateLike,
    ) -> int:
        """Count working cities at one slot without building the full grid."""
        count = 0
        for city in cities:
            resolved = self.resolver.resolve(reference_date, slot, city.timezone)
            if self.policy.is_working(
                resolved.time_decimal,
                city.work_start,
                city.work_end,
                resolved.local_date,
                city.country_code,
            ):
                count += 1
        return count


def build_grid(
    cities: Sequence[City],
    reference_date: DateLike,
    resolver: Optional[SlotResolver] = None,
    policy: Optional[WorkingHoursPolicy] = None,
) -> SlotGrid:
    """Functional shortcut for GridBuilder(resolver, policy).build(...)."""
    return GridBuilder(resolver, policy).build(cities, reference_date)


def calculate_overlap_score(
    cities: Sequence[City],
    slot: int,
    reference_date: DateLike,
    resolver: Optional[SlotResolver] = None,
    policy: Optional[WorkingHoursPolicy] = None,
) -> int:
    """Functional shortcut for GridBuilder.overlap_score."""
    return GridBuilder(resolver, policy).overlap_score(cities, slot, reference_date)
