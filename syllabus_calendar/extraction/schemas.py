"""Schema definitions for extracted calendar events.

Provides EventType literals and the ExtractedEvent dataclass produced by
both extraction paths (LLM and regex) and consumed by the persistence and
calendar-export collaborators.
"""

from dataclasses import dataclass
from typing import Any, Literal

EventType = Literal[
    "assignment",
    "exam",
    "quiz",
    "project",
    "reading",
    "deadline",
]

VALID_EVENT_TYPES: set[str] = {
    "assignment",
    "exam",
    "quiz",
    "project",
    "reading",
    "deadline",
}

DEFAULT_EVENT_TYPE = "deadline"

ExtractionMethod = Literal["llm", "regex"]


@dataclass
class ExtractedEvent:
    """
    A candidate calendar event extracted from syllabus text.

    Instances are transient: they carry no identity, owner or timestamps.
    Fields hold whatever the extractor produced and are only guaranteed to
    be well-formed after passing through EventValidator.

    Attributes:
        title: Human-readable event label.
        event_type: Category of the event (see VALID_EVENT_TYPES).
        due_date: Calendar date as ``YYYY-MM-DD`` (canonical after validation).
        description: Optional free text.
        due_time: Optional ``HH:MM`` 24-hour time of day.
        confidence_score: Extraction certainty in [0.0, 1.0].
        source_text: Substring of the input the event was derived from.
    """

    title: str
    event_type: str
    due_date: str | None
    description: str | None = None
    due_time: str | None = None
    confidence_score: float = 0.5
    source_text: str = ""

    def dedup_key(self) -> str:
        """Composite key used to collapse duplicate events."""
        return f"{self.title.lower()}-{self.due_date}"

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "description": self.description,
            "event_type": self.event_type,
            "due_date": self.due_date,
            "due_time": self.due_time,
            "confidence_score": self.confidence_score,
            "source_text": self.source_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtractedEvent":
        """
        Create ExtractedEvent from dictionary.

        Args:
            data: Dictionary with snake_case event fields.

        Returns:
            ExtractedEvent instance.
        """
        return cls(
            title=data["title"],
            event_type=data.get("event_type", DEFAULT_EVENT_TYPE),
            due_date=data.get("due_date"),
            description=data.get("description"),
            due_time=data.get("due_time"),
            confidence_score=data.get("confidence_score", 0.5),
            source_text=data.get("source_text") or "",
        )

    def to_record(
        self,
        class_id: str,
        user_id: str,
        syllabus_id: str | None = None,
        extraction_method: str = "llm",
    ) -> dict[str, Any]:
        """
        Build the insert payload for the calendar_events table.

        The persistence layer assigns ``id`` and the created/updated
        timestamps; export bookkeeping starts out unset.

        Args:
            class_id: Owning class.
            user_id: Owning user.
            syllabus_id: Source syllabus, if any.
            extraction_method: Which extractor produced the event.

        Returns:
            Row dict ready for insertion.
        """
        return {
            "syllabus_id": syllabus_id,
            "class_id": class_id,
            "user_id": user_id,
            "title": self.title,
            "description": self.description,
            "event_type": self.event_type,
            "due_date": self.due_date,
            "due_time": self.due_time,
            "confidence_score": self.confidence_score,
            "source_text": self.source_text,
            "extraction_method": extraction_method,
            "is_exported": False,
            "exported_at": None,
            "ics_uid": None,
        }
