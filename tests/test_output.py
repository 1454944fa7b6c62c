"""Tests for text and PDF report generation."""

from datetime import date

import pytest

from tzoverlap.domain.holidays import NoHolidays
from tzoverlap.domain.models import City, MeetingSelection
from tzoverlap.engine.planner import OverlapPlanner, PlannerConfig
from tzoverlap.output.pdf_generator import PDFGenerator
from tzoverlap.output.text_generator import TextReportGenerator

TUESDAY = date(2025, 1, 7)

CITIES = [
    City(id="new-york", name="New York", timezone="America/New_York", country_code="US"),
    City(id="london", name="London", timezone="Europe/London", country_code="GB"),
]


@pytest.fixture
def planner():
    return OverlapPlanner(PlannerConfig(reference_timezone="UTC"), NoHolidays())


@pytest.fixture
def grid(planner):
    return planner.build_grid(CITIES, TUESDAY)


class TestTextReportGenerator:
    """Tests for TextReportGenerator."""

    def test_report_contents(self, grid):
        report = TextReportGenerator().generate_to_string(grid, CITIES)

        assert "WORKING HOURS OVERLAP - Tue, Jan 7" in report
        assert "New York" in report
        assert "UTC-05:00" in report
        assert "UTC+00:00" in report
        assert "Score 2/2 in 6 slot(s)" in report
        assert "New York 9AM, London 2PM" in report

    def test_city_rows_mark_working_slots(self, grid):
        report = TextReportGenerator().generate_to_string(grid, CITIES)
        london_row = next(line for line in report.splitlines() if line.startswith("London"))
        marks = london_row.split()[-1]
        assert marks == "." * 18 + "#" * 16 + "." * 14

    def test_overlap_row(self, grid):
        report = TextReportGenerator().generate_to_string(grid, CITIES)
        overlap_row = next(line for line in report.splitlines() if line.startswith("Overlap"))
        scores = overlap_row.split()[-1]
        assert len(scores) == 48
        assert scores[28] == "2"
        assert scores[38] == "1"
        assert scores[0] == "."

    def test_no_overlap_message(self, planner):
        grid = planner.build_grid(CITIES, date(2025, 1, 4))
        report = TextReportGenerator().generate_to_string(grid, CITIES)
        assert "No slot falls within working hours for any city." in report

    def test_meeting_section(self, planner, grid):
        times = planner.translate(MeetingSelection(38, 39), TUESDAY, CITIES)
        report = TextReportGenerator().generate_to_string(grid, CITIES, times)
        assert "SELECTED MEETING (1h)" in report
        assert "2PM - 3PM" in report
        assert "7PM - 8PM" in report

    def test_offsets_use_reference_timezone(self):
        """Offsets are taken at noon in the reference timezone.

        New York springs forward at 07:00 UTC on 2025-03-09. Noon that day in
        Auckland is still 23:00 UTC on the 8th, so New York shows EST.
        """
        planner = OverlapPlanner(
            PlannerConfig(reference_timezone="Pacific/Auckland"), NoHolidays(),
        )
        cities = CITIES[:1]
        grid = planner.build_grid(cities, date(2025, 3, 9))

        report = TextReportGenerator(reference_timezone="Pacific/Auckland")
        content = report.generate_to_string(grid, cities)
        assert "UTC-05:00" in content
        assert "UTC-04:00" not in content

        utc_content = TextReportGenerator().generate_to_string(grid, cities)
        assert "UTC-04:00" in utc_content

    def test_generate_writes_file(self, grid, tmp_path):
        output = tmp_path / "report.txt"
        content = TextReportGenerator().generate(grid, CITIES, output)
        assert output.read_text() == content


class TestPDFGenerator:
    """Tests for PDFGenerator."""

    @pytest.fixture(autouse=True)
    def require_reportlab(self):
        pytest.importorskip("reportlab")

    def test_generate_to_buffer(self, grid):
        buffer = PDFGenerator().generate_to_buffer(grid, CITIES)
        assert buffer.read(4) == b"%PDF"

    def test_generate_with_meeting(self, planner, grid, tmp_path):
        selection = MeetingSelection(28, 31)
        times = planner.translate(selection, TUESDAY, CITIES)
        output = tmp_path / "overlap.pdf"

        PDFGenerator().generate(grid, CITIES, output, selection=selection, meeting_times=times)

        assert output.read_bytes().startswith(b"%PDF")

    def test_many_cities_without_summary(self, planner):
        cities = [
            City(id=f"city-{i}", name=f"City {i}", timezone="UTC", country_code="US")
            for i in range(40)
        ]
        grid = planner.build_grid(cities, TUESDAY)
        buffer = PDFGenerator().generate_to_buffer(grid, cities, include_summary=False)
        assert buffer.getvalue().startswith(b"%PDF")
