"""
Dependency injection for FastAPI endpoints.
"""

from syllabus_calendar.extraction.config import ExtractionConfig
from syllabus_calendar.extraction.pipeline import ExtractionPipeline

# Global instances (initialized on first request)
_extraction_config: ExtractionConfig | None = None
_extraction_pipeline: ExtractionPipeline | None = None


def get_extraction_config() -> ExtractionConfig:
    """
    Get extraction config instance.

    The environment is read here, once; the pipeline and extractors only
    see the injected config.
    """
    global _extraction_config

    if _extraction_config is None:
        _extraction_config = ExtractionConfig()

    return _extraction_config


async def get_extraction_pipeline() -> ExtractionPipeline:
    """
    Get extraction pipeline instance.

    The pipeline is stateless between calls, so one instance serves all
    requests.
    """
    global _extraction_pipeline

    if _extraction_pipeline is None:
        _extraction_pipeline = ExtractionPipeline(config=get_extraction_config())

    return _extraction_pipeline


async def cleanup_dependencies() -> None:
    """Clean up global dependencies on shutdown."""
    global _extraction_config, _extraction_pipeline

    if _extraction_pipeline is not None:
        await _extraction_pipeline.close()
        _extraction_pipeline = None

    _extraction_config = None
