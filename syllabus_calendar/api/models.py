"""
Request and response models for the syllabus-calendar API.
"""

from pydantic import BaseModel, Field

from syllabus_calendar.extraction.schemas import ExtractedEvent, ExtractionMethod


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(
        ...,
        description="Overall service status: healthy or degraded",
    )
    version: str = Field(..., description="Service version")
    extraction_enabled: bool = Field(
        default=True,
        description="Whether the extraction endpoint is enabled",
    )
    llm_configured: bool = Field(
        default=False,
        description="Whether the LLM extractor is wired in (otherwise regex only)",
    )
    llm_provider: str | None = Field(
        default=None,
        description="Backend provider used by the LLM extractor",
    )
    extractor_version: str = Field(
        ...,
        description="Extractor version stamped on extraction results",
    )


class ErrorResponse(BaseModel):
    """Response model for errors."""

    detail: str = Field(
        ...,
        description="Error message",
    )
    error_type: str = Field(
        default="error",
        description="Error type",
    )


# Extraction models


class ExtractEventsRequest(BaseModel):
    """Request model for syllabus event extraction."""

    # Optional at the schema level so a missing field is a 400 input error, not a 422
    pdf_context: str | None = Field(
        default=None,
        max_length=500_000,
        description="Plain text extracted from the syllabus document",
    )
    reference_year: int | None = Field(
        default=None,
        ge=1900,
        le=2100,
        description="Year assumed for dates written without one (defaults to the current year)",
    )


class EventItem(BaseModel):
    """A single calendar event."""

    title: str = Field(..., min_length=1, description="Event title")
    description: str | None = Field(default=None, description="Optional free text")
    event_type: str = Field(
        ...,
        description="assignment, exam, quiz, project, reading, or deadline",
    )
    due_date: str = Field(..., description="Due date as YYYY-MM-DD")
    due_time: str | None = Field(default=None, description="Due time as HH:MM (24-hour)")
    confidence_score: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Extraction confidence",
    )
    source_text: str = Field(default="", description="Text the event was extracted from")

    @classmethod
    def from_event(cls, event: ExtractedEvent) -> "EventItem":
        return cls(**event.to_dict())

    def to_event(self) -> ExtractedEvent:
        return ExtractedEvent.from_dict(self.model_dump())


class ExtractEventsResponse(BaseModel):
    """Response model for syllabus event extraction."""

    message: str = Field(..., description="Human-readable summary")
    events: list[EventItem] = Field(default_factory=list, description="Extracted events")
    count: int = Field(..., description="Number of events returned")
    extraction_method: ExtractionMethod = Field(
        ...,
        description="Extractor whose results were used: llm or regex",
    )
    latency_ms: float = Field(..., description="Processing time in milliseconds")
    extractor_version: str = Field(..., description="Version of the extractor that produced the events")


class ExportRequest(BaseModel):
    """Request model for iCalendar export."""

    events: list[EventItem] = Field(
        ...,
        max_length=1000,
        description="Events to include in the calendar",
    )
    calendar_name: str = Field(
        default="Syllabus Calendar",
        min_length=1,
        max_length=200,
        description="Calendar display name (X-WR-CALNAME)",
    )
