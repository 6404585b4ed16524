"""Validation and deduplication of extracted events.

Both extraction paths hand their candidates here. Invalid candidates are
dropped silently (only the aggregate count changes); accepted ones come
back with a canonical due date and time.
"""

from __future__ import annotations

import dataclasses
import logging
import math

from syllabus_calendar.extraction.normalizer import DateNormalizer
from syllabus_calendar.extraction.schemas import VALID_EVENT_TYPES, ExtractedEvent

logger = logging.getLogger(__name__)


class EventValidator:
    """
    Filters and deduplicates candidate events.

    Args:
        normalizer: Parser used to check and canonicalize due dates.
    """

    def __init__(self, normalizer: DateNormalizer | None = None):
        self._normalizer = normalizer or DateNormalizer()

    def is_valid(self, event: ExtractedEvent, reference_year: int | None = None) -> bool:
        """
        Check a candidate against the event invariants.

        Rejects a missing title, missing or unparseable due date, missing
        or unrecognized event type, and a confidence score that is not a
        finite number in [0, 1]. Out-of-range scores are rejected, never
        clamped.
        """
        return self._canonical_date(event, reference_year) is not None

    def _canonical_date(
        self,
        event: ExtractedEvent,
        reference_year: int | None = None,
    ) -> str | None:
        if not isinstance(event.title, str) or not event.title.strip():
            return None
        if not event.due_date:
            return None
        if not event.event_type or event.event_type not in VALID_EVENT_TYPES:
            return None

        score = event.confidence_score
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return None
        if not math.isfinite(score) or score < 0.0 or score > 1.0:
            return None

        return self._normalizer.parse(event.due_date, reference_year)

    def validate(
        self,
        events: list[ExtractedEvent],
        reference_year: int | None = None,
    ) -> list[ExtractedEvent]:
        """
        Drop invalid events and canonicalize the survivors.

        Args:
            events: Candidates from either extractor.
            reference_year: Year for due dates written without one.
                Defaults to the normalizer's reference year.

        Returns:
            Valid events in input order, with ``due_date`` as
            ``YYYY-MM-DD`` and ``due_time`` as ``HH:MM`` or None.
        """
        valid: list[ExtractedEvent] = []
        for event in events:
            due_date = self._canonical_date(event, reference_year)
            if due_date is None:
                continue
            valid.append(
                dataclasses.replace(
                    event,
                    due_date=due_date,
                    due_time=self._normalizer.parse_time(event.due_time),
                )
            )

        rejected = len(events) - len(valid)
        if rejected:
            logger.debug("Validation rejected %d of %d events", rejected, len(events))
        return valid

    @staticmethod
    def deduplicate(events: list[ExtractedEvent]) -> list[ExtractedEvent]:
        """
        Keep the first event per lower-cased title and due date.

        Order is preserved (stable filter, not a re-sort). Two distinct
        events with the same title on the same day are merged.
        """
        seen: set[str] = set()
        unique: list[ExtractedEvent] = []
        for event in events:
            key = event.dedup_key()
            if key in seen:
                continue
            seen.add(key)
            unique.append(event)
        return unique
