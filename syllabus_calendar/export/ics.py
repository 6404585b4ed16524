"""iCalendar serialization of extracted events."""

import hashlib
import logging
from datetime import date, datetime, time, timezone

from icalendar import Calendar, Event

from syllabus_calendar.extraction.normalizer import DateNormalizer
from syllabus_calendar.extraction.schemas import ExtractedEvent

logger = logging.getLogger(__name__)

PRODID = "-//Syllabus Calendar//Syllabus Calendar//EN"
DEFAULT_CALENDAR_NAME = "Syllabus Calendar"
UID_DOMAIN = "syllabus-calendar"


def event_uid(event: ExtractedEvent) -> str:
    """Stable UID so re-exporting the same event updates it instead of duplicating."""
    base = "|".join(
        [
            event.title.lower().strip(),
            event.due_date or "",
            event.due_time or "",
            event.event_type,
        ]
    )
    digest = hashlib.sha1(base.encode("utf-8")).hexdigest()
    return f"{digest}@{UID_DOMAIN}"


def _start(due_date: str, due_time: str | None) -> date | datetime:
    day = date.fromisoformat(due_date)
    if due_time is None:
        return day
    hour, minute = (int(part) for part in due_time.split(":"))
    # Times carry no zone in syllabi; they are written out as UTC
    return datetime.combine(day, time(hour, minute), tzinfo=timezone.utc)


def events_to_ics(
    events: list[ExtractedEvent],
    calendar_name: str = DEFAULT_CALENDAR_NAME,
    now: datetime | None = None,
) -> bytes:
    """
    Serialize events into an iCalendar (RFC 5545) document.

    One VEVENT per event with SUMMARY = title, DESCRIPTION = description
    or title, CATEGORIES = event type, and DTSTART as a date or, when the
    event has a time, a UTC date-time. Events whose due date does not
    parse are skipped.

    Args:
        events: Events to export.
        calendar_name: Value for X-WR-CALNAME.
        now: Timestamp for DTSTAMP (defaults to the current UTC time).

    Returns:
        The encoded calendar.
    """
    normalizer = DateNormalizer()
    stamp = now or datetime.now(timezone.utc)

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("x-wr-calname", calendar_name)
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")

    skipped = 0
    for ev in events:
        due_date = normalizer.parse(ev.due_date)
        if due_date is None:
            skipped += 1
            continue

        e = Event()
        e.add("uid", event_uid(ev))
        e.add("dtstamp", stamp)
        e.add("dtstart", _start(due_date, normalizer.parse_time(ev.due_time)))
        e.add("summary", ev.title)
        e.add("description", ev.description or ev.title)
        e.add("categories", [ev.event_type])
        cal.add_component(e)

    if skipped:
        logger.debug("Skipped %d events without a usable due date", skipped)

    return cal.to_ical()
