"""High-level overlap planner.

This module provides the OverlapPlanner class that wires the resolver,
working-hours policy, grid builder and meeting translator together from a
single configuration object.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from tzoverlap.domain.holidays import HolidayOracle, NoHolidays, default_holiday_oracle
from tzoverlap.domain.models import (
    MINUTES_PER_SLOT,
    City,
    MeetingSelection,
    MeetingTime,
    SlotGrid,
)
from tzoverlap.domain.policies import DEFAULT_WEEKEND_DAYS, DefaultWorkingHoursPolicy
from tzoverlap.engine.grid_builder import GridBuilder
from tzoverlap.engine.resolver import DEFAULT_REFERENCE_TIMEZONE, DateLike, SlotResolver
from tzoverlap.engine.translator import MeetingTranslator

logger = logging.getLogger(__name__)


@dataclass
class PlannerConfig:
    """Configuration for the overlap planner.

    Attributes:
        reference_timezone: Timezone the 48 slots are laid out in.
        weekend_days: date.weekday() values treated as non-working.
        check_holidays: If False, public holidays are ignored.
    """

    reference_timezone: str = DEFAULT_REFERENCE_TIMEZONE
    weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS
    check_holidays: bool = True


class OverlapPlanner:
    """Facade over grid building and meeting translation.

    Example:
        >>> planner = OverlapPlanner(PlannerConfig(reference_timezone="UTC"))
        >>> grid, stats = planner.plan_with_stats(cities, date(2025, 1, 7))
        >>> stats["best_score"]
        2
    """

    def __init__(
        self,
        config: Optional[PlannerConfig] = None,
        holiday_oracle: Optional[HolidayOracle] = None,
    ):
        """Initialize planner.

        Args:
            config: Planner configuration.
            holiday_oracle: Holiday source. Defaults to the shared PublicHolidayOracle,
                or NoHolidays when config.check_holidays is False.
        """
        self.config = config or PlannerConfig()

        if not self.config.check_holidays:
            holiday_oracle = NoHolidays()
        self.holiday_oracle = holiday_oracle or default_holiday_oracle()

        self.resolver = SlotResolver(self.config.reference_timezone)
        self.policy = DefaultWorkingHoursPolicy(
            holiday_oracle=self.holiday_oracle,
            weekend_days=self.config.weekend_days,
        )
        self.builder = GridBuilder(self.resolver, self.policy)
        self.translator = MeetingTranslator(self.resolver)

    def build_grid(self, cities: Sequence[City], reference_date: DateLike) -> SlotGrid:
        """Build the slot grid for the cities."""
        grid = self.builder.build(cities, reference_date)
        logger.debug(
            "Built grid for %d cities on %s (best score %d)",
            grid.city_count, grid.reference_date, max(grid.overlap, default=0),
        )
        return grid

    def translate(
        self,
        selection: MeetingSelection,
        reference_date: DateLike,
        cities: Sequence[City],
    ) -> list[MeetingTime]:
        """Translate a meeting selection for every city."""
        return self.translator.translate(selection, reference_date, cities)

    def plan_with_stats(
        self,
        cities: Sequence[City],
        reference_date: DateLike,
    ) -> tuple[SlotGrid, dict]:
        """Build the grid and return summary statistics.

        Returns:
            Tuple of (grid, stats_dict).
        """
        grid = self.build_grid(cities, reference_date)
        return grid, self._calculate_stats(grid)

    def _calculate_stats(self, grid: SlotGrid) -> dict:
        """Calculate grid statistics."""
        best_slots = grid.best_slots()
        full_overlap = grid.full_overlap_slots()

        return {
            "city_count": grid.city_count,
            "best_score": max(grid.overlap, default=0),
            "best_slots": best_slots,
            "full_overlap_slots": full_overlap,
            "full_overlap_minutes": len(full_overlap) * MINUTES_PER_SLOT,
            "working_slots_by_city": {
                city_id: sum(1 for r in records if r.is_working)
                for city_id, records in grid.rows.items()
            },
        }
