"""Output generation for slot grids (text, PDF) and display labels."""

from tzoverlap.output.formatting import (
    day_abbreviation,
    format_date_label,
    format_decimal_time,
    format_duration,
    format_slot,
    get_time_options,
    timezone_offset_label,
)
from tzoverlap.output.pdf_generator import PDFGenerator
from tzoverlap.output.text_generator import TextReportGenerator

__all__ = [
    "PDFGenerator",
    "TextReportGenerator",
    # Labels
    "day_abbreviation",
    "format_date_label",
    "format_decimal_time",
    "format_duration",
    "format_slot",
    "get_time_options",
    "timezone_offset_label",
]
