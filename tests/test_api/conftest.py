"""Shared fixtures for API tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from syllabus_calendar.api.app import create_app
from syllabus_calendar.api.dependencies import get_extraction_config, get_extraction_pipeline
from syllabus_calendar.extraction.pipeline import ExtractionPipeline, ExtractionResult
from syllabus_calendar.extraction.schemas import ExtractedEvent


def _make_event(**overrides) -> ExtractedEvent:
    """Helper to create a validated ExtractedEvent with sensible defaults."""
    fields = {
        "title": "Homework 1",
        "event_type": "assignment",
        "due_date": "2024-09-15",
        "description": "Extracted from syllabus text",
        "due_time": None,
        "confidence_score": 0.7,
        "source_text": "Homework 1 due: September 15, 2024",
    }
    fields.update(overrides)
    return ExtractedEvent(**fields)


@pytest.fixture
def mock_pipeline():
    """ExtractionPipeline double returning one regex event."""
    pipeline = MagicMock(spec=ExtractionPipeline)
    pipeline.process = AsyncMock(
        return_value=ExtractionResult(
            events=[_make_event()],
            method="regex",
            candidate_count=1,
            valid_count=1,
        )
    )
    pipeline.close = AsyncMock()
    return pipeline


@pytest.fixture
def client(mock_pipeline, regex_only_config):
    """Test client with a mocked pipeline."""
    app = create_app()
    app.dependency_overrides[get_extraction_pipeline] = lambda: mock_pipeline
    app.dependency_overrides[get_extraction_config] = lambda: regex_only_config

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def regex_client(regex_only_config):
    """Test client backed by a real regex-only pipeline."""
    app = create_app()
    pipeline = ExtractionPipeline(config=regex_only_config)
    app.dependency_overrides[get_extraction_pipeline] = lambda: pipeline
    app.dependency_overrides[get_extraction_config] = lambda: regex_only_config

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
