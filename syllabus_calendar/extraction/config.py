"""Configuration for the syllabus extraction pipeline.

Uses Pydantic settings for environment-based configuration. The API layer
builds one ExtractionConfig and injects it into the extractors; nothing
below that layer reads the process environment.
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXTRACTOR_VERSION = "1.0.0"


class ExtractionConfig(BaseSettings):
    """
    Configuration for the syllabus date-extraction pipeline.

    All settings can be overridden via environment variables with EXTRACTION_ prefix.
    Example: EXTRACTION_LLM_API_KEY=sk-...

    Attributes:
        llm_enabled: Try the LLM extractor before the regex fallback.
        llm_provider: SDK used to reach the generative backend.
        llm_api_key: Backend API key.
        llm_base_url: Backend endpoint override (OpenAI-compatible gateways).
        llm_model: Model name sent to the backend.
        llm_temperature: Sampling temperature, kept low.
        llm_max_output_tokens: Upper bound on reply length.
        llm_timeout: Seconds to wait for the backend before falling back.
        regex_confidence: Confidence assigned to regex matches.
        max_events: Maximum events kept from a single regex pass.
        extractor_version: Reported with every extraction result and by
            the health check.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    llm_enabled: bool = Field(
        default=True,
        description="Try the LLM extractor before falling back to regex.",
    )
    llm_provider: Literal["openai", "anthropic"] = Field(
        default="openai",
        description="SDK used to call the generative backend.",
    )
    llm_api_key: SecretStr | None = Field(
        default=None,
        description="API key for the generative backend.",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Endpoint override, e.g. an OpenAI-compatible Gemini gateway.",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for structured extraction.",
    )
    llm_temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=1.0,
        description="Sampling temperature for the extraction call.",
    )
    llm_max_output_tokens: int = Field(
        default=4096,
        ge=256,
        le=32768,
        description="Maximum tokens in the backend reply.",
    )
    llm_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=120.0,
        description="Timeout in seconds for the backend call.",
    )
    regex_confidence: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Confidence score assigned to regex matches.",
    )
    max_events: int = Field(
        default=200,
        ge=1,
        le=1000,
        description="Maximum events to extract from a single syllabus.",
    )
    extractor_version: str = Field(
        default=DEFAULT_EXTRACTOR_VERSION,
        description="Version string for extractor provenance tracking.",
    )

    @property
    def llm_configured(self) -> bool:
        """Check if the LLM path is enabled and has credentials."""
        return self.llm_enabled and self.llm_api_key is not None
