"""Tests for planning session state."""

from datetime import date, datetime

import pytest

from tzoverlap.domain.directory import DEFAULT_CITIES
from tzoverlap.domain.models import City, MeetingSelection
from tzoverlap.engine.session import TimezoneSession

TOKYO = City(id="tokyo", name="Tokyo", timezone="Asia/Tokyo", country_code="JP")


class TestTimezoneSession:
    """Tests for TimezoneSession."""

    @pytest.fixture
    def changes(self):
        return []

    @pytest.fixture
    def session(self, changes):
        return TimezoneSession(DEFAULT_CITIES, date(2025, 1, 7), on_change=changes.append)

    def test_defaults(self):
        session = TimezoneSession()
        assert session.cities == ()
        assert session.reference_date == date.today()
        assert session.meeting is None

    def test_reference_datetime_is_truncated(self):
        session = TimezoneSession(reference_date=datetime(2025, 1, 7, 18, 30))
        assert session.reference_date == date(2025, 1, 7)

    def test_add_city(self, session, changes):
        assert session.add_city(TOKYO) is True
        assert session.cities[-1] == TOKYO
        assert changes == [session.cities]

    def test_add_duplicate_city(self, session, changes):
        assert session.add_city(DEFAULT_CITIES[0]) is False
        assert session.cities == DEFAULT_CITIES
        assert changes == []

    def test_remove_city(self, session, changes):
        assert session.remove_city("london") is True
        assert session.get_city("london") is None
        assert len(session.cities) == len(DEFAULT_CITIES) - 1
        assert len(changes) == 1

    def test_remove_unknown_city(self, session, changes):
        assert session.remove_city("atlantis") is False
        assert changes == []

    def test_update_working_hours(self, session):
        assert session.update_working_hours("london", 22, 6) is True
        london = session.get_city("london")
        assert (london.work_start, london.work_end) == (22, 6)
        assert london.is_overnight is True
        # Other cities are untouched
        assert session.get_city("new-york") == DEFAULT_CITIES[0]

    def test_update_working_hours_unknown_city(self, session):
        assert session.update_working_hours("atlantis", 9, 17) is False

    def test_update_working_hours_out_of_range(self, session, changes):
        with pytest.raises(ValueError):
            session.update_working_hours("london", 9, 24)
        assert changes == []

    def test_update_replaces_city_tuple(self, session):
        """Earlier snapshots of the city list are not mutated."""
        before = session.cities
        session.update_working_hours("london", 8, 16)
        assert before == DEFAULT_CITIES
        assert session.cities is not before

    def test_reorder_cities(self, session):
        session.reorder_cities(0, 2)
        assert [c.id for c in session.cities[:3]] == ["london", "hong-kong", "new-york"]

    def test_reorder_to_end(self, session):
        session.reorder_cities(0, len(DEFAULT_CITIES) - 1)
        assert session.cities[-1].id == "new-york"

    def test_reorder_invalid_index(self, session):
        with pytest.raises(IndexError):
            session.reorder_cities(99, 0)

    def test_meeting_selection(self, session):
        session.set_meeting(MeetingSelection(18, 19))
        assert session.meeting.duration_minutes == 60
        session.clear_meeting()
        assert session.meeting is None

    def test_set_reference_date(self, session):
        session.set_reference_date(datetime(2025, 12, 25, 9, 0))
        assert session.reference_date == date(2025, 12, 25)
