"""Text output for slot grids.

This module creates a fixed-width text report showing:
- One row per city with its working slots marked
- The overlap score for every slot
- The best meeting slots with each city's local time
- The selected meeting translated for every city, if any
"""

from collections.abc import Sequence
from datetime import datetime, time
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo

from tzoverlap.domain.models import (
    MINUTES_PER_SLOT,
    SLOTS_PER_DAY,
    City,
    MeetingTime,
    SlotGrid,
)
from tzoverlap.output.formatting import (
    format_date_label,
    format_duration,
    format_slot,
    timezone_offset_label,
)

WORKING_MARK = "#"
IDLE_MARK = "."


class TextReportGenerator:
    """Generates a text report of a slot grid.

    Example:
        >>> generator = TextReportGenerator()
        >>> print(generator.generate_to_string(grid, cities))
    """

    def __init__(self, name_width: int = 20, reference_timezone: str = "UTC"):
        """Initialize generator.

        Args:
            name_width: Width of the city name column.
            reference_timezone: Timezone the grid slots are laid out in; city
                offsets are shown as of noon on the reference date there.
        """
        self.name_width = name_width
        self.reference_timezone = reference_timezone

    def generate(
        self,
        grid: SlotGrid,
        cities: Sequence[City],
        output_path: Union[str, Path],
        meeting_times: Optional[Sequence[MeetingTime]] = None,
    ) -> str:
        """Generate the report and save it to a file.

        Args:
            grid: The slot grid to render.
            cities: Cities in display order (must match the grid rows).
            output_path: Path to save the text file.
            meeting_times: Translated meeting, if one is selected.

        Returns:
            The generated text content.
        """
        content = self._generate_content(grid, cities, meeting_times)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(
        self,
        grid: SlotGrid,
        cities: Sequence[City],
        meeting_times: Optional[Sequence[MeetingTime]] = None,
    ) -> str:
        """Generate the report and return it as a string."""
        return self._generate_content(grid, cities, meeting_times)

    def _generate_content(
        self,
        grid: SlotGrid,
        cities: Sequence[City],
        meeting_times: Optional[Sequence[MeetingTime]],
    ) -> str:
        """Generate the full report content."""
        width = self.name_width + 12 + SLOTS_PER_DAY
        lines = []

        lines.append("=" * width)
        lines.append(f"WORKING HOURS OVERLAP - {format_date_label(grid.reference_date)}")
        lines.append("=" * width)
        lines.append("")

        # Hour ruler: one label every two hours
        ruler = ""
        for hour in range(0, 24, 2):
            ruler += f"{hour:<4}"
        prefix = " " * (self.name_width + 12)
        lines.append(prefix + ruler)

        noon = datetime.combine(
            grid.reference_date, time(12), tzinfo=ZoneInfo(self.reference_timezone),
        )
        for city in cities:
            records = grid.rows.get(city.id)
            if records is None:
                continue
            name = city.name[: self.name_width]
            offset = timezone_offset_label(city.timezone, noon)
            marks = "".join(WORKING_MARK if r.is_working else IDLE_MARK for r in records)
            lines.append(f"{name:<{self.name_width}} {offset:<10} {marks}")

        scores = "".join(self._score_char(score) for score in grid.overlap)
        lines.append(f"{'Overlap':<{self.name_width}} {'':<10} {scores}")
        lines.append("")

        # Best slots
        lines.append("-" * width)
        lines.append("BEST SLOTS")
        lines.append("-" * width)
        best = grid.best_slots()
        if not best:
            lines.append("No slot falls within working hours for any city.")
        else:
            best_score = grid.score_at(best[0])
            lines.append(f"Score {best_score}/{grid.city_count} in {len(best)} slot(s)")
            for slot in best:
                local_times = []
                for city in cities:
                    records = grid.rows.get(city.id)
                    if records is None:
                        continue
                    record = records[slot]
                    local_times.append(f"{city.name} {format_slot(record.hour, record.minutes)}")
                lines.append(f"  {self._slot_label(slot):>7}: " + ", ".join(local_times))
        lines.append("")

        if meeting_times:
            lines.append("-" * width)
            duration = format_duration(meeting_times[0].duration_minutes)
            lines.append(f"SELECTED MEETING ({duration})")
            lines.append("-" * width)
            for meeting in meeting_times:
                name = meeting.city.name[: self.name_width]
                span = f"{meeting.start_label} - {meeting.end_label}"
                lines.append(f"{name:<{self.name_width}} {span:<17} {meeting.date_label}")
            lines.append("")

        return "\n".join(lines)

    def _score_char(self, score: int) -> str:
        if score == 0:
            return IDLE_MARK
        return str(score) if score < 10 else "+"

    def _slot_label(self, slot: int) -> str:
        """Label of a slot in the reference frame."""
        hours, minutes = divmod(slot * MINUTES_PER_SLOT, 60)
        return format_slot(hours, minutes)
