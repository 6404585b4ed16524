"""Pattern-based event extraction for syllabus text.

Deterministic fallback for when the LLM extractor is unavailable. Uses
compiled regex templates with named capture groups, each tuned for one
phrasing idiom found in syllabi:

- "Assignment 2 due: September 15, 2024"
- "Homework 3 - 9/22/2024"
- "Midterm Exam - Oct 10"
"""

from __future__ import annotations

import logging
import re

from syllabus_calendar.extraction.classifier import KEYWORD_BUCKETS, EventClassifier
from syllabus_calendar.extraction.config import ExtractionConfig
from syllabus_calendar.extraction.normalizer import DateNormalizer, month_number
from syllabus_calendar.extraction.schemas import ExtractedEvent

logger = logging.getLogger(__name__)

REGEX_DESCRIPTION = "Extracted from syllabus text"

# Reusable pattern fragments
_KEYWORD = r"(?P<keyword>final\s+exam|midterm(?:\s+exam)?|assignment|homework|exam|quiz|test|project|paper|essay|reading|deadline|due)"
_KEYWORD_ISH = r"(?P<keyword>final\s+exam|midterm(?:\s+exam)?|exam|quiz|assignment|homework|project|paper|essay)"
# A period only inside short capitalized abbreviations ("Ch. 3") or tokens like "v1.2"
_ABBREV = r"(?-i:\b[A-Z][a-z]{0,2})\."
_TITLE = rf"(?P<title>(?:[^:.\n]|{_ABBREV}|\.(?=\S)){{0,80}}?)"
_LEAD = r"(?:\s+due\b)?[\s:\-–]*"
_SEP = r"[\s:\-–,]+(?:due\s+(?:on\s+|by\s+)?)?"
_MONTH_FULL = r"(?P<month>january|february|march|april|may|june|july|august|september|october|november|december)"
# Abbreviated or spelled out
_MONTHS = r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|sept(?:ember)?|sep|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
_MONTH_ABBR = rf"(?P<month>{_MONTHS})"
_DAY = r"(?P<day>\d{1,2})(?:st|nd|rd|th)?"

# Years written as part of a date or a term name, never a bare number ("Room 2010")
_YEAR_IN_TEXT = re.compile(
    r"\b(?:fall|spring|summer|winter|autumn)\s+(?:term\s+|semester\s+|quarter\s+)?((?:19|20)\d{2})\b"
    rf"|\b(?:{_MONTHS})\b\.?\s+(?:\d{{1,2}}(?:st|nd|rd|th)?,?\s+)?((?:19|20)\d{{2}})\b"
    r"|\b\d{1,2}/\d{1,2}/((?:19|20)\d{2})\b",
    re.IGNORECASE,
)
_TRAILING_DUE = re.compile(r"\s*\b(?:(?:is|are)\s+)?due(?:\s+(?:on|by))?$", re.IGNORECASE)
_BARE_NUMBER = re.compile(r"^#?\d+[a-z]?$", re.IGNORECASE)


def _build_patterns() -> list[re.Pattern[str]]:
    """
    Build and compile the ordered regex templates.

    Returns:
        Compiled patterns, most specific first.
    """
    patterns = [
        # "Assignment due: September 15, 2024"
        rf"\b{_KEYWORD}\b{_LEAD}{_TITLE}{_SEP}{_MONTH_FULL}\s+{_DAY},?\s+(?P<year>\d{{4}})\b",
        # "Due: 9/15/2024"
        rf"\b{_KEYWORD}\b{_LEAD}{_TITLE}{_SEP}(?P<month_num>\d{{1,2}})/{_DAY}/(?P<year>\d{{4}})\b",
        # "Final Exam - Dec 10"
        rf"\b{_KEYWORD_ISH}\b{_LEAD}{_TITLE}{_SEP}{_MONTH_ABBR}\.?\s+{_DAY}\b(?:,?\s+(?P<year>\d{{4}})\b)?",
    ]
    return [re.compile(p, re.IGNORECASE) for p in patterns]


class RegexExtractor:
    """
    Regex-based event extractor for syllabus text.

    Lazily compiles patterns on first use. Never raises: a match that
    cannot be turned into a valid event is skipped.

    Usage:
        extractor = RegexExtractor()
        events = extractor.extract(text, reference_year=2024)
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        normalizer: DateNormalizer | None = None,
        classifier: EventClassifier | None = None,
    ):
        self._config = config or ExtractionConfig()
        self._normalizer = normalizer or DateNormalizer()
        self._classifier = classifier or EventClassifier()
        self._keyword_classifier = EventClassifier(buckets=KEYWORD_BUCKETS)
        self._patterns: list[re.Pattern[str]] | None = None

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Lazy-compile patterns on first access."""
        if self._patterns is None:
            self._patterns = _build_patterns()
        return self._patterns

    def extract(self, text: str, reference_year: int | None = None) -> list[ExtractedEvent]:
        """
        Extract events from syllabus text.

        Args:
            text: Raw syllabus text.
            reference_year: Year for dates written without one. When
                omitted, the last term or date year written before the
                match is used, then the normalizer's reference year.

        Returns:
            ExtractedEvent list in text order.
        """
        if not text or not isinstance(text, str):
            return []

        found: list[tuple[int, ExtractedEvent]] = []
        seen_spans: set[tuple[int, int]] = set()

        for pattern in self.patterns:
            for match in pattern.finditer(text):
                span = (match.start(), match.end())

                # Skip overlapping matches
                if self._overlaps(span, seen_spans):
                    continue

                try:
                    event = self._match_to_event(match, text, reference_year)
                except Exception as e:
                    logger.debug("Skipping regex match %r: %s", match.group(0), e)
                    continue

                if event is None:
                    continue

                found.append((match.start(), event))
                seen_spans.add(span)

                if len(found) >= self._config.max_events:
                    break

            if len(found) >= self._config.max_events:
                break

        found.sort(key=lambda item: item[0])
        return [event for _, event in found]

    def _match_to_event(
        self,
        match: re.Match,
        full_text: str,
        reference_year: int | None,
    ) -> ExtractedEvent | None:
        """Convert a regex match to an ExtractedEvent, or None if the date is invalid."""
        groups = match.groupdict()

        keyword = " ".join(groups["keyword"].lower().split())
        event_type = self._keyword_classifier.classify(keyword)

        title = self._clean_title(groups.get("title"), keyword)
        if event_type == self._keyword_classifier.default:
            event_type = self._classifier.classify(title)
        if not title:
            title = f"{event_type} due"

        if groups.get("month_num"):
            month = int(groups["month_num"])
        else:
            month = month_number(groups["month"])
        if month is None:
            return None

        day = int(groups["day"])
        if groups.get("year"):
            year = int(groups["year"])
        elif reference_year is not None:
            year = reference_year
        else:
            year = self._infer_year(full_text, match.start())

        composed = f"{year:04d}-{month:02d}-{day:02d}"
        due_date = self._normalizer.parse(composed)
        if due_date is None:
            logger.debug("Discarding invalid date %s from %r", composed, match.group(0))
            return None

        return ExtractedEvent(
            title=title,
            description=REGEX_DESCRIPTION,
            event_type=event_type,
            due_date=due_date,
            due_time=None,
            confidence_score=self._config.regex_confidence,
            source_text=match.group(0),
        )

    def _infer_year(self, text: str, start: int) -> int:
        """Use the last term or date year written before the match, else the normalizer's year."""
        last = None
        for last in _YEAR_IN_TEXT.finditer(text, 0, start):
            pass
        if last is None:
            return self._normalizer.reference_year
        return int(next(group for group in last.groups() if group))

    @staticmethod
    def _clean_title(value: str | None, keyword: str) -> str:
        """Trim a captured title, dropping 'is due on' connectors."""
        if not value:
            return ""
        cleaned = value.strip().strip(",;-–").strip()
        cleaned = _TRAILING_DUE.sub("", cleaned).strip()
        if _BARE_NUMBER.match(cleaned):
            # "Homework 3" reads better than "3"
            cleaned = f"{keyword.title()} {cleaned}"
        return cleaned

    @staticmethod
    def _overlaps(
        span: tuple[int, int],
        seen: set[tuple[int, int]],
    ) -> bool:
        """Check if a span overlaps with any previously seen span."""
        s, e = span
        for ss, se in seen:
            if s < se and e > ss:
                return True
        return False
