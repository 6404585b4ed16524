"""LLM-backed event extraction.

Sends the syllabus to the generative backend with a structured-output
prompt, then treats the reply as untrusted text: the first ``[...]`` span
is parsed and every element is coerced field by field. A partially
well-formed reply still yields (low-trust) events; a reply with no array
at all is an LLMError so the pipeline can fall back.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import date
from typing import Any

from syllabus_calendar.extraction.config import ExtractionConfig
from syllabus_calendar.extraction.llm_client import LLMClient, LLMError
from syllabus_calendar.extraction.prompts import EXTRACTION_PROMPT
from syllabus_calendar.extraction.schemas import (
    DEFAULT_EVENT_TYPE,
    VALID_EVENT_TYPES,
    ExtractedEvent,
)

logger = logging.getLogger(__name__)

UNKNOWN_TITLE = "Unknown Event"
DEFAULT_CONFIDENCE = 0.5

_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)


def _field(item: dict[str, Any], *names: str) -> Any:
    """Return the first present, non-null value among camelCase/snake_case aliases."""
    for name in names:
        value = item.get(name)
        if value is not None:
            return value
    return None


def _coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_event_type(value: Any) -> str:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in VALID_EVENT_TYPES:
            return lowered
    return DEFAULT_EVENT_TYPE


def _coerce_confidence(value: Any) -> float:
    # Out-of-range numbers pass through; validation rejects them
    if isinstance(value, bool) or value is None:
        return DEFAULT_CONFIDENCE
    try:
        score = float(value)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    if not math.isfinite(score):
        return DEFAULT_CONFIDENCE
    return score


def coerce_event(item: dict[str, Any]) -> ExtractedEvent:
    """
    Build an ExtractedEvent from one untrusted JSON object.

    Missing title → "Unknown Event", missing description/time → None,
    missing or unknown type → "deadline", missing or non-numeric
    confidence → 0.5, missing source → "". The due date is kept as text
    and checked later by the validator.
    """
    due_time = _coerce_text(_field(item, "dueTime", "due_time"))
    return ExtractedEvent(
        title=_coerce_text(item.get("title")) or UNKNOWN_TITLE,
        description=_coerce_text(item.get("description")),
        event_type=_coerce_event_type(_field(item, "eventType", "event_type")),
        due_date=_coerce_text(_field(item, "dueDate", "due_date")),
        due_time=due_time,
        confidence_score=_coerce_confidence(_field(item, "confidenceScore", "confidence_score")),
        source_text=_coerce_text(_field(item, "sourceText", "source_text")) or "",
    )


def parse_events_response(raw: str) -> list[ExtractedEvent]:
    """
    Parse a backend reply into coerced events.

    Args:
        raw: Reply text, possibly wrapped in prose or markdown fences.

    Returns:
        One ExtractedEvent per JSON object in the first array.

    Raises:
        LLMError: If no array span exists, it is not valid JSON, or the
            top level is not an array.
    """
    match = _JSON_ARRAY.search(raw or "")
    if not match:
        raise LLMError("No JSON array found in backend reply")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise LLMError(f"Backend reply is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise LLMError("Top-level JSON must be an array")

    events: list[ExtractedEvent] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.debug("Dropping non-object array element %d", index)
            continue
        try:
            events.append(coerce_event(item))
        except Exception as e:
            logger.debug("Dropping malformed array element %d: %s", index, e)
    return events


class LLMExtractor:
    """
    Structured extraction through a generative-language backend.

    Args:
        config: Extraction configuration (key, endpoint, model, limits).
        client: Transport to use instead of one built from config.
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        client: LLMClient | None = None,
    ):
        self._config = config or ExtractionConfig()
        self._client = client

    def _get_client(self) -> LLMClient:
        """Lazy-initialize the LLM client."""
        if self._client is None:
            self._client = LLMClient(self._config)
        return self._client

    def build_prompt(self, text: str, reference_year: int | None = None) -> str:
        """Format the extraction prompt with the syllabus appended verbatim."""
        year = reference_year if reference_year is not None else date.today().year
        return EXTRACTION_PROMPT.format(reference_year=year, text=text)

    async def extract(self, text: str, reference_year: int | None = None) -> list[ExtractedEvent]:
        """
        Extract events with the backend.

        Args:
            text: Raw syllabus text.
            reference_year: Year the backend should assume for year-less dates.

        Returns:
            Coerced (not yet validated) events.

        Raises:
            LLMError: If the backend is unreachable, errors, or its reply
                contains no parseable JSON array.
        """
        prompt = self.build_prompt(text, reference_year)
        raw = await self._get_client().complete(prompt)
        events = parse_events_response(raw)
        logger.info("LLM extraction returned %d candidate events", len(events))
        return events

    async def close(self) -> None:
        """Clean up the transport."""
        if self._client is not None:
            await self._client.close()
            self._client = None
