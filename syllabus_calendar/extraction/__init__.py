"""
Calendar event extraction for syllabus text.

This module turns raw syllabus text into validated, deduplicated calendar
events. An LLM extractor is tried first; any failure falls back to the
deterministic regex extractor.

Components:
- ExtractionConfig: Configuration for the extraction pipeline
- ExtractedEvent: Dataclass representing a candidate calendar event
- EventType: Literal type for event categories
- DateNormalizer: Parser for the date shapes found in syllabi
- EventClassifier: Keyword-bucket event type classifier
- RegexExtractor: Regex-based event extractor
- LLMExtractor: Structured extraction through a generative backend
- EventValidator: Validation and deduplication of candidates
- ExtractionPipeline: LLM-then-regex pipeline that never raises
"""

from syllabus_calendar.extraction.classifier import EventClassifier
from syllabus_calendar.extraction.config import ExtractionConfig
from syllabus_calendar.extraction.llm_client import LLMError
from syllabus_calendar.extraction.llm_extractor import LLMExtractor
from syllabus_calendar.extraction.normalizer import DateNormalizer
from syllabus_calendar.extraction.patterns import RegexExtractor
from syllabus_calendar.extraction.pipeline import (
    ExtractionPipeline,
    ExtractionResult,
    FallbackStrategy,
)
from syllabus_calendar.extraction.schemas import EventType, ExtractedEvent
from syllabus_calendar.extraction.validation import EventValidator

__all__ = [
    "DateNormalizer",
    "EventClassifier",
    "EventType",
    "EventValidator",
    "ExtractedEvent",
    "ExtractionConfig",
    "ExtractionPipeline",
    "ExtractionResult",
    "FallbackStrategy",
    "LLMError",
    "LLMExtractor",
    "RegexExtractor",
]
