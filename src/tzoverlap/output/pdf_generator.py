"""PDF generation for slot grids.

This module creates printable PDF reports showing:
- Per-city timelines with working slots and local hour labels
- An overlap heatmap row
- A summary page with the overlap chart and the selected meeting
"""

from collections.abc import Sequence
from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from tzoverlap.domain.models import (
    MINUTES_PER_SLOT,
    SLOTS_PER_DAY,
    City,
    MeetingSelection,
    MeetingTime,
    SlotGrid,
)
from tzoverlap.output.formatting import format_date_label, format_duration, format_slot

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "working": (0.35, 0.65, 0.95),  # Blue
    "idle": (0.93, 0.93, 0.93),  # Light gray
    "meeting": (0.1, 0.2, 0.6),  # Dark blue outline
}

# Heatmap colors by SlotGrid.heatmap_level
HEATMAP_COLORS = {
    0: (0.85, 0.85, 0.85),  # Gray
    1: (0.75, 0.2, 0.2),  # Red
    2: (0.9, 0.5, 0.15),  # Orange
    3: (0.85, 0.75, 0.15),  # Yellow
    4: (0.55, 0.8, 0.2),  # Lime
    5: (0.2, 0.75, 0.35),  # Green
}


class PDFGenerator:
    """Generates printable PDF overlap reports.

    Example:
        >>> generator = PDFGenerator()
        >>> generator.generate(grid, cities, "overlap.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        grid: SlotGrid,
        cities: Sequence[City],
        output_path: Union[str, Path],
        selection: Optional[MeetingSelection] = None,
        meeting_times: Optional[Sequence[MeetingTime]] = None,
        include_summary: bool = True,
    ) -> None:
        """Generate PDF report and save to file.

        Args:
            grid: The slot grid to render.
            cities: Cities in display order.
            output_path: Path to save the PDF.
            selection: Meeting selection to outline on the grid, if any.
            meeting_times: Translated meeting listed on the summary page.
            include_summary: Whether to include the summary page.
        """
        canvas = self._import_canvas()
        c = canvas.Canvas(str(output_path), pagesize=(self.page_width, self.page_height))
        self._draw_report(c, grid, cities, selection, meeting_times, include_summary)
        c.save()

    def generate_to_buffer(
        self,
        grid: SlotGrid,
        cities: Sequence[City],
        selection: Optional[MeetingSelection] = None,
        meeting_times: Optional[Sequence[MeetingTime]] = None,
        include_summary: bool = True,
    ) -> BytesIO:
        """Generate PDF and return as bytes buffer."""
        canvas = self._import_canvas()
        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        self._draw_report(c, grid, cities, selection, meeting_times, include_summary)
        c.save()
        buffer.seek(0)
        return buffer

    def _import_canvas(self):
        try:
            from reportlab.pdfgen import canvas
        except ImportError:
            raise ImportError(
                "reportlab is required for PDF generation. "
                "Install with: pip install reportlab"
            )
        return canvas

    def _draw_report(
        self,
        c,
        grid: SlotGrid,
        cities: Sequence[City],
        selection: Optional[MeetingSelection],
        meeting_times: Optional[Sequence[MeetingTime]],
        include_summary: bool,
    ) -> None:
        self._draw_grid_pages(c, grid, cities, selection)
        if include_summary:
            self._draw_summary_page(c, grid, meeting_times)

    def _draw_grid_pages(
        self,
        c,
        grid: SlotGrid,
        cities: Sequence[City],
        selection: Optional[MeetingSelection],
    ) -> None:
        """Draw grid pages with one timeline row per city."""
        rows = [city for city in cities if city.id in grid.rows]

        row_height = 28
        header_height = 60
        footer_height = 60
        usable_height = self.page_height - 2 * self.margin - header_height - footer_height
        # Keep one row free for the overlap heatmap
        rows_per_page = max(1, int(usable_height / row_height) - 1)

        timeline_left = self.margin + 120  # Space for names
        timeline_right = self.page_width - self.margin - 10
        timeline_width = timeline_right - timeline_left

        total_pages = max(1, (len(rows) + rows_per_page - 1) // rows_per_page)

        for page_index in range(total_pages):
            page_rows = rows[page_index * rows_per_page : (page_index + 1) * rows_per_page]

            self._draw_header(c, grid)
            axis_y = self.page_height - self.margin - header_height
            self._draw_time_axis(c, timeline_left, axis_y, timeline_width)

            y = axis_y - 10
            for city in page_rows:
                y -= row_height
                self._draw_city_row(
                    c, city, grid, timeline_left, timeline_width, y, row_height - 6,
                )

            y -= row_height
            self._draw_overlap_row(c, grid, timeline_left, timeline_width, y, row_height - 6)

            if selection is not None:
                self._draw_meeting_outline(
                    c, selection, timeline_left, timeline_width,
                    y, axis_y - 10 - y,
                )

            self._draw_legend(c, self.margin, self.margin + 10)

            c.setFont("Helvetica", 9)
            c.drawCentredString(
                self.page_width / 2,
                self.margin - 10,
                f"Page {page_index + 1} of {total_pages}",
            )
            c.showPage()

    def _draw_header(self, c, grid: SlotGrid) -> None:
        """Draw page header with date and title."""
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Working Hours Overlap - {grid.reference_date.strftime('%A, %B %d, %Y')}",
        )

        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"Cities: {grid.city_count}",
        )

    def _draw_time_axis(self, c, x: float, y: float, width: float) -> None:
        """Draw time axis with a label every two hours."""
        slot_width = width / SLOTS_PER_DAY

        c.setFont("Helvetica", 8)
        c.setStrokeColorRGB(0.7, 0.7, 0.7)

        for slot in range(0, SLOTS_PER_DAY + 1, 4):
            slot_x = x + slot * slot_width
            c.line(slot_x, y, slot_x, y - 5)
            if slot < SLOTS_PER_DAY:
                hours, minutes = divmod(slot * MINUTES_PER_SLOT, 60)
                c.drawCentredString(slot_x, y + 5, format_slot(hours, minutes))

    def _draw_city_row(
        self,
        c,
        city: City,
        grid: SlotGrid,
        timeline_x: float,
        timeline_width: float,
        y: float,
        height: float,
    ) -> None:
        """Draw a single city's timeline row."""
        slot_width = timeline_width / SLOTS_PER_DAY
        records = grid.rows[city.id]

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 9)
        c.drawString(self.margin, y + height / 2, city.name[:20])
        c.setFont("Helvetica", 7)
        c.drawString(self.margin, y + height / 2 - 9, city.timezone[:28])

        for slot, record in enumerate(records):
            color = COLORS["working"] if record.is_working else COLORS["idle"]
            c.setFillColorRGB(*color)
            c.rect(timeline_x + slot * slot_width, y, slot_width - 0.5, height, fill=1, stroke=0)

            # Local hour label on the hour
            if record.minutes == 0 and slot % 2 == 0:
                c.setFillColorRGB(0.2, 0.2, 0.2)
                c.setFont("Helvetica", 5)
                c.drawCentredString(
                    timeline_x + (slot + 0.5) * slot_width,
                    y + height / 2 - 2,
                    str(record.hour),
                )

    def _draw_overlap_row(
        self,
        c,
        grid: SlotGrid,
        timeline_x: float,
        timeline_width: float,
        y: float,
        height: float,
    ) -> None:
        """Draw the overlap heatmap with per-slot scores."""
        slot_width = timeline_width / SLOTS_PER_DAY

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(self.margin, y + height / 2 - 3, "Overlap")

        for slot in range(SLOTS_PER_DAY):
            c.setFillColorRGB(*HEATMAP_COLORS[grid.heatmap_level(slot)])
            c.rect(timeline_x + slot * slot_width, y, slot_width - 0.5, height, fill=1, stroke=0)

            score = grid.score_at(slot)
            if score:
                c.setFillColorRGB(0, 0, 0)
                c.setFont("Helvetica", 6)
                c.drawCentredString(
                    timeline_x + (slot + 0.5) * slot_width,
                    y + height / 2 - 2,
                    str(score),
                )

    def _draw_meeting_outline(
        self,
        c,
        selection: MeetingSelection,
        timeline_x: float,
        timeline_width: float,
        y: float,
        height: float,
    ) -> None:
        """Outline the selected meeting across all rows."""
        slot_width = timeline_width / SLOTS_PER_DAY

        c.setStrokeColorRGB(*COLORS["meeting"])
        c.setLineWidth(1.5)
        c.rect(
            timeline_x + selection.first_slot * slot_width, y,
            selection.slot_count * slot_width, height,
            fill=0, stroke=1,
        )
        c.setLineWidth(1)

    def _draw_legend(self, c, x: float, y: float) -> None:
        """Draw legend for colors."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 8)
        c.drawString(x, y, "Legend:")

        items = [
            (COLORS["working"], "Working"),
            (COLORS["idle"], "Not working"),
            (HEATMAP_COLORS[1], "<25%"),
            (HEATMAP_COLORS[3], "50-75%"),
            (HEATMAP_COLORS[5], "All cities"),
        ]

        c.setFont("Helvetica", 7)
        current_x = x + 45

        for color, label in items:
            c.setFillColorRGB(*color)
            c.rect(current_x, y - 2, 12, 10, fill=1, stroke=1)
            c.setFillColorRGB(0, 0, 0)
            c.drawString(current_x + 15, y, label)
            current_x += 80

    def _draw_summary_page(
        self,
        c,
        grid: SlotGrid,
        meeting_times: Optional[Sequence[MeetingTime]],
    ) -> None:
        """Draw summary page with overlap chart and the selected meeting."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"Overlap Summary - {grid.reference_date.strftime('%A, %B %d, %Y')}",
        )

        y = self.page_height - self.margin - 60

        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Overview")
        y -= 20

        best = grid.best_slots()
        full = grid.full_overlap_slots()
        c.setFont("Helvetica", 10)
        stats = [
            f"Cities: {grid.city_count}",
            f"Best score: {max(grid.overlap, default=0)}/{grid.city_count} "
            f"in {len(best)} slot(s)",
            f"Time with everyone working: {format_duration(len(full) * MINUTES_PER_SLOT)}",
        ]
        for stat in stats:
            c.drawString(self.margin + 20, y, stat)
            y -= 15

        y -= 20
        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Overlap by Slot")
        y -= 10
        self._draw_overlap_chart(c, grid, self.margin, y - 150, 500, 140)
        y -= 190

        if meeting_times:
            c.setFont("Helvetica-Bold", 12)
            duration = format_duration(meeting_times[0].duration_minutes)
            c.drawString(self.margin, y, f"Selected Meeting ({duration})")
            y -= 18
            c.setFont("Helvetica", 9)
            for meeting in meeting_times:
                c.drawString(
                    self.margin + 20, y,
                    f"{meeting.city.name}: {meeting.start_label} - {meeting.end_label}, "
                    f"{meeting.date_label}",
                )
                y -= 13
                if y < self.margin:
                    break
        else:
            c.setFont("Helvetica", 9)
            c.drawString(self.margin, y, f"No meeting selected ({format_date_label(grid.reference_date)}).")

        c.showPage()

    def _draw_overlap_chart(
        self,
        c,
        grid: SlotGrid,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Draw a bar chart of the overlap score per slot."""
        max_score = max(grid.city_count, 1)
        bar_width = width / SLOTS_PER_DAY

        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(1)
        c.line(x, y, x, y + height)  # Y axis
        c.line(x, y, x + width, y)  # X axis

        for slot, score in enumerate(grid.overlap):
            c.setFillColorRGB(*HEATMAP_COLORS[grid.heatmap_level(slot)])
            bar_height = (score / max_score) * height
            c.rect(x + slot * bar_width, y, bar_width - 1, bar_height, fill=1, stroke=0)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 7)
        c.drawRightString(x - 5, y, "0")
        c.drawRightString(x - 5, y + height - 5, str(max_score))

        for slot in range(0, SLOTS_PER_DAY + 1, 4):
            hours = slot * MINUTES_PER_SLOT // 60
            c.drawCentredString(x + slot * bar_width, y - 12, f"{hours:02d}")
