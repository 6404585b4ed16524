"""Date normalizer for syllabus extraction.

Converts the heterogeneous date strings found in syllabi ("9/15/2024",
"Sept 15", "15 September 2024", "2024-09-15") into canonical ``YYYY-MM-DD``
strings. Impossible dates are rejected instead of rolled over.
"""

from __future__ import annotations

import re
from datetime import date


# Month name → number mapping
_MONTH_MAP: dict[str, int] = {
    "january": 1, "february": 2, "march": 3, "april": 4,
    "may": 5, "june": 6, "july": 7, "august": 8,
    "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4,
    "jun": 6, "jul": 7, "aug": 8, "sep": 9,
    "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

_ORDINAL = r"(?:st|nd|rd|th)?"

_SLASH_FULL = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_SLASH_SHORT = re.compile(r"^(\d{1,2})/(\d{1,2})$")
_MONTH_FIRST = re.compile(rf"^([a-z]+)\.?\s+(\d{{1,2}}){_ORDINAL}(?:,?\s+(\d{{4}}))?$")
_DAY_FIRST = re.compile(rf"^(\d{{1,2}}){_ORDINAL}\s+([a-z]+)\.?(?:,?\s+(\d{{4}}))?$")
_ISO = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")

_TIME_24H = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")
_TIME_12H = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s*m\.?$")


def month_number(name: str) -> int | None:
    """Look up a full or abbreviated month name (case-insensitive)."""
    return _MONTH_MAP.get(name.strip().rstrip(".").lower())


def compose_date(year: int, month: int, day: int) -> str | None:
    """
    Build a canonical date string, rejecting impossible calendar days.

    ``datetime.date`` refuses out-of-range fields, so February 30 fails
    here instead of silently becoming March 1.
    """
    try:
        candidate = date(year, month, day)
    except (ValueError, OverflowError):
        return None
    if (candidate.year, candidate.month, candidate.day) != (year, month, day):
        return None
    return candidate.isoformat()


class DateNormalizer:
    """
    Stateless normalizer for syllabus date strings.

    Args:
        reference_date: Supplies the default year for year-less inputs.
            Defaults to today.
    """

    def __init__(self, reference_date: date | None = None):
        self._ref = reference_date or date.today()

    @property
    def reference_year(self) -> int:
        """Year substituted when the input omits one."""
        return self._ref.year

    def parse(self, date_string: str | None, reference_year: int | None = None) -> str | None:
        """
        Parse a date string into canonical ``YYYY-MM-DD`` form.

        Args:
            date_string: Raw date text.
            reference_year: Year to use when the text has none.
                Defaults to the normalizer's reference year.

        Returns:
            Canonical date string, or None if the text is not a
            recognized, real calendar date.
        """
        if not isinstance(date_string, str):
            return None

        text = date_string.strip().lower()
        if not text:
            return None

        year = reference_year if reference_year is not None else self._ref.year

        # Try each shape in priority order
        for fn in (
            self._try_slash_full,
            self._try_slash_short,
            self._try_month_first,
            self._try_day_first,
            self._try_iso,
        ):
            fields = fn(text, year)
            if fields is not None:
                return compose_date(*fields)

        return None

    def parse_time(self, value: str | None) -> str | None:
        """
        Normalize a time of day to ``HH:MM`` 24-hour form.

        Accepts "14:30", "14:30:00", "2:30 PM", "11am".

        Returns:
            Normalized time, or None if unrecognized or out of range.
        """
        if not isinstance(value, str):
            return None
        text = value.strip().lower()
        if not text:
            return None

        m = _TIME_24H.match(text)
        if m:
            hour, minute = int(m.group(1)), int(m.group(2))
            if hour > 23 or minute > 59:
                return None
            return f"{hour:02d}:{minute:02d}"

        m = _TIME_12H.match(text)
        if m:
            hour = int(m.group(1))
            minute = int(m.group(2) or 0)
            if not 1 <= hour <= 12 or minute > 59:
                return None
            hour %= 12
            if m.group(3) == "p":
                hour += 12
            return f"{hour:02d}:{minute:02d}"

        return None

    def _try_slash_full(self, text: str, year: int) -> tuple[int, int, int] | None:
        """Match 'MM/DD/YYYY'."""
        m = _SLASH_FULL.match(text)
        if not m:
            return None
        return int(m.group(3)), int(m.group(1)), int(m.group(2))

    def _try_slash_short(self, text: str, year: int) -> tuple[int, int, int] | None:
        """Match 'MM/DD' and substitute the reference year."""
        m = _SLASH_SHORT.match(text)
        if not m:
            return None
        return year, int(m.group(1)), int(m.group(2))

    def _try_month_first(self, text: str, year: int) -> tuple[int, int, int] | None:
        """Match 'September 15, 2024', 'Sept. 15', 'oct 3rd 2025'."""
        m = _MONTH_FIRST.match(text)
        if not m:
            return None
        month = month_number(m.group(1))
        if month is None:
            return None
        resolved_year = int(m.group(3)) if m.group(3) else year
        return resolved_year, month, int(m.group(2))

    def _try_day_first(self, text: str, year: int) -> tuple[int, int, int] | None:
        """Match '15 September 2024', '3rd Oct'."""
        m = _DAY_FIRST.match(text)
        if not m:
            return None
        month = month_number(m.group(2))
        if month is None:
            return None
        resolved_year = int(m.group(3)) if m.group(3) else year
        return resolved_year, month, int(m.group(1))

    def _try_iso(self, text: str, year: int) -> tuple[int, int, int] | None:
        """Match already-canonical 'YYYY-MM-DD'."""
        m = _ISO.match(text)
        if not m:
            return None
        return int(m.group(1)), int(m.group(2)), int(m.group(3))
