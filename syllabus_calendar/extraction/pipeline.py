"""Extraction pipeline: LLM first, regex fallback, then validate and dedup.

The fallback decision lives in FallbackStrategy so it can be tested with
plain fakes; ExtractionPipeline wires the strategy to the validator and
guarantees that a call never raises (cancellation aside).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from syllabus_calendar.extraction.config import DEFAULT_EXTRACTOR_VERSION, ExtractionConfig
from syllabus_calendar.extraction.llm_extractor import LLMExtractor
from syllabus_calendar.extraction.patterns import RegexExtractor
from syllabus_calendar.extraction.schemas import ExtractedEvent, ExtractionMethod
from syllabus_calendar.extraction.validation import EventValidator

logger = logging.getLogger(__name__)


class PrimaryExtractor(Protocol):
    async def extract(self, text: str, reference_year: int | None = None) -> list[ExtractedEvent]: ...


class FallbackExtractor(Protocol):
    def extract(self, text: str, reference_year: int | None = None) -> list[ExtractedEvent]: ...


@dataclass
class StrategyOutcome:
    """Raw candidates and the extractor that produced them."""

    events: list[ExtractedEvent]
    method: ExtractionMethod


@dataclass
class ExtractionResult:
    """
    Result of one pipeline invocation.

    Attributes:
        events: Validated, deduplicated events in extraction order.
        method: Extractor whose candidates were used.
        candidate_count: Candidates before validation.
        valid_count: Candidates that passed validation (before dedup).
        extractor_version: Configured extractor version, for provenance.
    """

    events: list[ExtractedEvent] = field(default_factory=list)
    method: ExtractionMethod = "regex"
    candidate_count: int = 0
    valid_count: int = 0
    extractor_version: str = DEFAULT_EXTRACTOR_VERSION


class FallbackStrategy:
    """
    Two-stage extraction: try the primary, fall back on any failure.

    A failed primary is never retried. A primary that succeeds with zero
    candidates is a success, not a failure.

    Args:
        primary: Async extractor tried first (None to go straight to fallback).
        fallback: Sync extractor used when the primary is absent or fails.
    """

    def __init__(
        self,
        primary: PrimaryExtractor | None,
        fallback: FallbackExtractor,
    ):
        self._primary = primary
        self._fallback = fallback

    @property
    def has_primary(self) -> bool:
        return self._primary is not None

    async def extract(self, text: str, reference_year: int | None = None) -> StrategyOutcome:
        if self._primary is not None:
            try:
                events = await self._primary.extract(text, reference_year)
                return StrategyOutcome(events=events, method="llm")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning("LLM extraction failed, falling back to regex: %s", e)

        events = self._fallback.extract(text, reference_year)
        return StrategyOutcome(events=events, method="regex")


class ExtractionPipeline:
    """
    Syllabus text in, validated and deduplicated events out.

    Holds no per-call state, so one instance can serve concurrent
    requests. The LLM stage is only wired in when the config enables it
    and carries an API key.

    Usage:
        pipeline = ExtractionPipeline(ExtractionConfig(llm_enabled=False))
        events = await pipeline.run(text, reference_year=2024)
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        llm_extractor: PrimaryExtractor | None = None,
        regex_extractor: FallbackExtractor | None = None,
        validator: EventValidator | None = None,
    ):
        self._config = config or ExtractionConfig()
        self._validator = validator or EventValidator()

        if llm_extractor is None and self._config.llm_configured:
            llm_extractor = LLMExtractor(self._config)
        self._llm_extractor = llm_extractor

        self._strategy = FallbackStrategy(
            primary=llm_extractor,
            fallback=regex_extractor or RegexExtractor(self._config),
        )

    @property
    def config(self) -> ExtractionConfig:
        return self._config

    @property
    def llm_enabled(self) -> bool:
        """Whether the LLM stage is wired in."""
        return self._strategy.has_primary

    async def process(self, text: str, reference_year: int | None = None) -> ExtractionResult:
        """
        Run extraction and return events with bookkeeping counts.

        Args:
            text: Raw syllabus text. Empty or non-string input yields an
                empty result.
            reference_year: Year assumed for dates written without one.

        Returns:
            ExtractionResult; never raises except on cancellation.
        """
        if not isinstance(text, str) or not text.strip():
            return ExtractionResult(extractor_version=self._config.extractor_version)

        try:
            outcome = await self._strategy.extract(text, reference_year)
            valid = self._validator.validate(outcome.events, reference_year)
            events = self._validator.deduplicate(valid)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Extraction pipeline failed: %s", e, exc_info=True)
            return ExtractionResult(extractor_version=self._config.extractor_version)

        logger.info(
            "Extracted %d events via %s (%d candidates, %d valid)",
            len(events),
            outcome.method,
            len(outcome.events),
            len(valid),
        )
        return ExtractionResult(
            events=events,
            method=outcome.method,
            candidate_count=len(outcome.events),
            valid_count=len(valid),
            extractor_version=self._config.extractor_version,
        )

    async def run(self, text: str, reference_year: int | None = None) -> list[ExtractedEvent]:
        """Extract events from syllabus text. Always returns a list."""
        result = await self.process(text, reference_year)
        return result.events

    async def close(self) -> None:
        """Release the LLM transport, if one was created."""
        close = getattr(self._llm_extractor, "close", None)
        if close is not None:
            await close()
