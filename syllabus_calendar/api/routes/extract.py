"""Syllabus event extraction endpoint."""

import time

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from syllabus_calendar.api.auth import require_calendar_client
from syllabus_calendar.api.dependencies import get_extraction_pipeline
from syllabus_calendar.api.models import (
    ErrorResponse,
    EventItem,
    ExtractEventsRequest,
    ExtractEventsResponse,
)
from syllabus_calendar.config.settings import get_settings
from syllabus_calendar.extraction.pipeline import ExtractionPipeline
from syllabus_calendar.observability.logging import bind_context, get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post(
    "/calendar/extract-events",
    response_model=ExtractEventsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing syllabus text"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        422: {"model": ErrorResponse, "description": "Validation error"},
        503: {"model": ErrorResponse, "description": "Extraction service disabled"},
    },
    summary="Extract calendar events from syllabus text",
    description=(
        "Extract assignments, exams, quizzes, projects, readings and deadlines "
        "from syllabus text. Uses the LLM extractor when configured and falls "
        "back to regex patterns on any LLM failure."
    ),
)
async def extract_events(
    body: ExtractEventsRequest,
    api_key: str = Depends(require_calendar_client),
    pipeline: ExtractionPipeline = Depends(get_extraction_pipeline),
) -> ExtractEventsResponse:
    settings = get_settings()
    if not settings.extraction_enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction service is disabled. Set EXTRACTION_ENABLED=true to enable.",
        )

    if body.pdf_context is None or not body.pdf_context.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                detail="Missing required field: pdf_context",
                error_type="input",
            ).model_dump(),
        )

    bind_context(reference_year=body.reference_year, text_chars=len(body.pdf_context))

    start_time = time.perf_counter()
    result = await pipeline.process(body.pdf_context, body.reference_year)
    latency_ms = (time.perf_counter() - start_time) * 1000

    bind_context(extraction_method=result.method, extractor_version=result.extractor_version)
    logger.info(
        "Syllabus extraction complete",
        candidates=result.candidate_count,
        valid=result.valid_count,
        returned=len(result.events),
        latency_ms=round(latency_ms, 2),
    )

    events = [EventItem.from_event(event) for event in result.events]
    return ExtractEventsResponse(
        message=f"Successfully extracted {len(events)} events",
        events=events,
        count=len(events),
        extraction_method=result.method,
        latency_ms=round(latency_ms, 2),
        extractor_version=result.extractor_version,
    )
