"""Keyword-based event classification.

Assigns an event type from the words surrounding an extracted date. Buckets
are checked in order and the first bucket with a matching keyword wins, so
"Midterm exam: homework review" is an exam, not an assignment.
"""

from __future__ import annotations

from collections.abc import Sequence

from syllabus_calendar.extraction.schemas import DEFAULT_EVENT_TYPE

KeywordBuckets = Sequence[tuple[str, frozenset[str]]]

# Title/description buckets, checked exam > assignment > reading
DEFAULT_BUCKETS: KeywordBuckets = (
    ("exam", frozenset({"exam", "test", "quiz", "midterm", "final", "assessment"})),
    ("assignment", frozenset({"assignment", "homework", "project", "paper", "essay", "due"})),
    ("reading", frozenset({"reading", "chapter", "textbook", "article", "book"})),
)

# Finer buckets for the short keyword captured by a regex template
KEYWORD_BUCKETS: KeywordBuckets = (
    ("exam", frozenset({"exam", "final", "midterm", "test"})),
    ("quiz", frozenset({"quiz"})),
    ("project", frozenset({"project"})),
    ("assignment", frozenset({"assignment", "homework", "paper", "essay", "problem set"})),
    ("reading", frozenset({"reading", "chapter"})),
)


class EventClassifier:
    """
    Deterministic keyword classifier.

    Args:
        buckets: Ordered (event_type, keywords) pairs. Defaults to the
            exam > assignment > reading title buckets.
        default: Event type returned when no keyword matches.
    """

    def __init__(
        self,
        buckets: KeywordBuckets = DEFAULT_BUCKETS,
        default: str = DEFAULT_EVENT_TYPE,
    ):
        self._buckets = tuple(buckets)
        self._default = default

    @property
    def default(self) -> str:
        """Event type used when nothing matches."""
        return self._default

    def classify(self, title: str | None, description: str | None = None) -> str:
        """
        Classify an event from its title and description.

        Args:
            title: Event title.
            description: Optional description.

        Returns:
            The event type of the first bucket with a keyword contained in
            the lower-cased text, or the default.
        """
        text = f"{title or ''} {description or ''}".lower()
        for event_type, keywords in self._buckets:
            if any(keyword in text for keyword in keywords):
                return event_type
        return self._default
