"""Calendar interchange export."""

from syllabus_calendar.export.ics import events_to_ics

__all__ = ["events_to_ics"]
