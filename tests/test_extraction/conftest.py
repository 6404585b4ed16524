"""Shared fixtures for extraction tests."""

import json
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from syllabus_calendar.extraction.llm_client import LLMClient
from syllabus_calendar.extraction.normalizer import DateNormalizer
from syllabus_calendar.extraction.patterns import RegexExtractor
from syllabus_calendar.extraction.schemas import ExtractedEvent


def make_event(**overrides) -> ExtractedEvent:
    """Build a valid event, overriding selected fields."""
    fields = {
        "title": "Homework 1",
        "event_type": "assignment",
        "due_date": "2024-09-15",
        "description": None,
        "due_time": None,
        "confidence_score": 0.9,
        "source_text": "Homework 1 due September 15, 2024",
    }
    fields.update(overrides)
    return ExtractedEvent(**fields)


@pytest.fixture
def normalizer():
    """Normalizer pinned to a 2024 reference date."""
    return DateNormalizer(reference_date=date(2024, 8, 26))


@pytest.fixture
def regex_extractor(regex_only_config, normalizer):
    """RegexExtractor with a deterministic reference year."""
    return RegexExtractor(config=regex_only_config, normalizer=normalizer)


@pytest.fixture
def llm_reply():
    """A well-formed backend reply wrapped in prose, as models often do."""
    payload = [
        {
            "title": "Problem Set 1",
            "description": "Chapters 1-2",
            "eventType": "assignment",
            "dueDate": "2024-09-12",
            "dueTime": "23:59",
            "confidenceScore": 0.95,
            "sourceText": "Problem Set 1 due Sept 12 at 11:59pm",
        },
        {
            "title": "Midterm",
            "description": None,
            "eventType": "exam",
            "dueDate": "2024-10-17",
            "dueTime": None,
            "confidenceScore": 0.9,
            "sourceText": "Midterm: October 17",
        },
    ]
    return "Here are the events:\n```json\n" + json.dumps(payload) + "\n```"


@pytest.fixture
def mock_llm_client(llm_reply):
    """LLMClient double returning llm_reply."""
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(return_value=llm_reply)
    client.close = AsyncMock()
    return client
