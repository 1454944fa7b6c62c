"""Tests for the overlap planner facade."""

from datetime import date

from tzoverlap.domain.holidays import NoHolidays, PublicHolidayOracle
from tzoverlap.domain.models import City, MeetingSelection
from tzoverlap.engine.planner import OverlapPlanner, PlannerConfig

NEW_YORK = City(id="new-york", name="New York", timezone="America/New_York", country_code="US")
LONDON = City(id="london", name="London", timezone="Europe/London", country_code="GB")


class TestOverlapPlanner:
    """Tests for OverlapPlanner."""

    def test_default_configuration(self):
        planner = OverlapPlanner()
        assert planner.config.reference_timezone == "UTC"
        assert isinstance(planner.holiday_oracle, PublicHolidayOracle)

    def test_holidays_disabled(self):
        planner = OverlapPlanner(PlannerConfig(check_holidays=False), PublicHolidayOracle())
        assert isinstance(planner.holiday_oracle, NoHolidays)

    def test_plan_with_stats(self):
        planner = OverlapPlanner(holiday_oracle=NoHolidays())
        grid, stats = planner.plan_with_stats([NEW_YORK, LONDON], date(2025, 1, 7))

        assert stats["city_count"] == 2
        assert stats["best_score"] == 2
        assert stats["best_slots"] == [28, 29, 30, 31, 32, 33]
        assert stats["full_overlap_slots"] == grid.full_overlap_slots()
        assert stats["full_overlap_minutes"] == 180
        assert stats["working_slots_by_city"] == {"new-york": 16, "london": 16}

    def test_christmas_removes_london(self):
        """Public holidays are checked by default."""
        planner = OverlapPlanner()
        _, stats = planner.plan_with_stats([NEW_YORK, LONDON], date(2025, 12, 25))
        assert stats["working_slots_by_city"]["london"] == 0
        assert stats["full_overlap_slots"] == []

    def test_holidays_ignored_when_disabled(self):
        planner = OverlapPlanner(PlannerConfig(check_holidays=False))
        _, stats = planner.plan_with_stats([LONDON], date(2025, 12, 25))
        assert stats["working_slots_by_city"]["london"] == 16

    def test_custom_weekend(self):
        """A Friday/Saturday weekend makes Sunday a working day."""
        planner = OverlapPlanner(PlannerConfig(weekend_days=(4, 5), check_holidays=False))
        _, stats = planner.plan_with_stats([LONDON], date(2025, 1, 5))
        assert stats["working_slots_by_city"]["london"] == 16

    def test_reference_timezone(self):
        """Slots laid out in New York time: slot 18 is 9:00 there."""
        planner = OverlapPlanner(
            PlannerConfig(reference_timezone="America/New_York", check_holidays=False),
        )
        grid = planner.build_grid([NEW_YORK, LONDON], date(2025, 1, 7))
        assert grid.rows["new-york"][18].hour == 9
        assert grid.rows["london"][18].hour == 14
        assert grid.best_slots() == [18, 19, 20, 21, 22, 23]

    def test_translate(self):
        planner = OverlapPlanner(holiday_oracle=NoHolidays())
        times = planner.translate(MeetingSelection(28, 29), date(2025, 1, 7), [NEW_YORK, LONDON])
        assert [(t.start_label, t.end_label) for t in times] == [("9AM", "10AM"), ("2PM", "3PM")]
