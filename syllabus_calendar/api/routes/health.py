"""
Health check endpoint.
"""

from fastapi import APIRouter, Depends

from syllabus_calendar import __version__
from syllabus_calendar.api.dependencies import get_extraction_config
from syllabus_calendar.api.models import HealthResponse
from syllabus_calendar.config.settings import get_settings
from syllabus_calendar.extraction.config import ExtractionConfig

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Report service status and which extraction path is active.",
)
async def health_check(
    config: ExtractionConfig = Depends(get_extraction_config),
) -> HealthResponse:
    """
    Status logic:
    - degraded: extraction disabled, or LLM enabled but missing its API key
    - healthy: otherwise (regex-only by choice is healthy)
    """
    settings = get_settings()

    llm_configured = config.llm_configured
    if not settings.extraction_enabled or (config.llm_enabled and not llm_configured):
        status = "degraded"
    else:
        status = "healthy"

    return HealthResponse(
        status=status,
        version=__version__,
        extraction_enabled=settings.extraction_enabled,
        llm_configured=llm_configured,
        llm_provider=config.llm_provider if llm_configured else None,
        extractor_version=config.extractor_version,
    )
