"""Meeting time translation.

Projects a selected slot range onto every tracked city so that each
participant sees the meeting in their own wall-clock time and date.
"""

from collections.abc import Sequence
from dataclasses import replace
from datetime import timedelta
from typing import Optional

from tzoverlap.domain.models import (
    SLOTS_PER_DAY,
    City,
    MeetingSelection,
    MeetingTime,
    ResolvedSlot,
)
from tzoverlap.engine.resolver import DateLike, SlotResolver, reference_day
from tzoverlap.output.formatting import format_date_label, format_slot


class MeetingTranslator:
    """Translates a MeetingSelection into per-city local times.

    Example:
        >>> translator = MeetingTranslator(SlotResolver("UTC"))
        >>> times = translator.translate(MeetingSelection(38, 39), date(2025, 1, 7), cities)
        >>> times[0].start_label, times[0].end_label
        ('2PM', '3PM')
    """

    def __init__(self, resolver: Optional[SlotResolver] = None):
        self.resolver = resolver or SlotResolver()

    def translate(
        self,
        selection: MeetingSelection,
        reference_date: DateLike,
        cities: Sequence[City],
    ) -> list[MeetingTime]:
        """Translate a selection for every city, in city order."""
        return [self.translate_for_city(selection, reference_date, city) for city in cities]

    def translate_for_city(
        self,
        selection: MeetingSelection,
        reference_date: DateLike,
        city: City,
    ) -> MeetingTime:
        """Translate a selection into one city's local time."""
        start = self.resolver.resolve(reference_date, selection.first_slot, city.timezone)
        end = self.resolve_end(selection, reference_date, city.timezone)

        start_date = format_date_label(start.local_date)
        end_date = format_date_label(end.local_date)
        date_label = start_date if start_date == end_date else f"{start_date} - {end_date}"

        return MeetingTime(
            city=city,
            start=start,
            end=end,
            duration_minutes=selection.duration_minutes,
            start_label=format_slot(start.hour, start.minutes),
            end_label=format_slot(end.hour, end.minutes),
            date_label=date_label,
        )

    def resolve_end(
        self,
        selection: MeetingSelection,
        reference_date: DateLike,
        timezone: str,
    ) -> ResolvedSlot:
        """Resolve the exclusive end boundary of a selection.

        A selection running through slot 47 ends at slot 0 of the next
        reference day. That boundary is resolved against the next day and its
        day offset is shifted so it stays relative to ``reference_date``
        (it can reach 2 in zones far ahead of the reference timezone).
        """
        end = selection.end_exclusive
        if end < SLOTS_PER_DAY:
            return self.resolver.resolve(reference_date, end, timezone)

        next_day = reference_day(reference_date) + timedelta(days=1)
        resolved = self.resolver.resolve(next_day, end % SLOTS_PER_DAY, timezone)
        return replace(resolved, day_offset=resolved.day_offset + 1)
