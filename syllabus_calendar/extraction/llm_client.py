"""LLM API abstraction for syllabus extraction.

Provides a single ``complete(prompt)`` call over OpenAI-compatible
endpoints (OpenAI, Gemini's OpenAI gateway, local servers) and Anthropic,
with lazy SDK initialization and a hard timeout.

SDK imports are deferred to method calls (lazy loading) to avoid import-time
failures when API keys are not configured.
"""

import asyncio
import logging
from typing import Any

from syllabus_calendar.extraction.config import ExtractionConfig
from syllabus_calendar.extraction.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when the extraction backend cannot produce a usable reply."""


class LLMClient:
    """Text-completion client for the extraction backend.

    Features:
    - Lazy SDK initialization (import on first use)
    - Provider selection from config (openai or anthropic)
    - SDK retries disabled; one failed attempt means fallback
    - Every failure surfaces as LLMError

    Args:
        config: Extraction configuration with key, endpoint and model.
    """

    def __init__(self, config: ExtractionConfig) -> None:
        self._config = config
        self._openai_client: Any = None
        self._anthropic_client: Any = None

    @property
    def provider(self) -> str:
        """Configured backend provider."""
        return self._config.llm_provider

    def _api_key(self) -> str:
        api_key = self._config.llm_api_key
        if api_key is None:
            raise LLMError("No API key configured for the extraction backend")
        return api_key.get_secret_value()

    def _get_openai_client(self) -> Any:
        """Lazy-initialize OpenAI async client."""
        if self._openai_client is None:
            import openai

            self._openai_client = openai.AsyncOpenAI(
                api_key=self._api_key(),
                base_url=self._config.llm_base_url,
                timeout=self._config.llm_timeout,
                max_retries=0,
            )
        return self._openai_client

    def _get_anthropic_client(self) -> Any:
        """Lazy-initialize Anthropic async client."""
        if self._anthropic_client is None:
            import anthropic

            self._anthropic_client = anthropic.AsyncAnthropic(
                api_key=self._api_key(),
                base_url=self._config.llm_base_url,
                timeout=self._config.llm_timeout,
                max_retries=0,
            )
        return self._anthropic_client

    async def complete(self, prompt: str) -> str:
        """Send a prompt to the backend and return the reply text.

        Args:
            prompt: Fully formatted user prompt.

        Returns:
            Raw reply text (not guaranteed to be JSON).

        Raises:
            LLMError: On timeout, transport failure, error status or an
                empty reply.
        """
        if self._config.llm_provider == "anthropic":
            call = self._complete_with_anthropic(prompt)
        else:
            call = self._complete_with_openai(prompt)

        try:
            raw = await asyncio.wait_for(call, timeout=self._config.llm_timeout)
        except LLMError:
            raise
        except asyncio.TimeoutError as e:
            raise LLMError(
                f"{self.provider} backend timed out after {self._config.llm_timeout}s"
            ) from e
        except Exception as e:
            raise LLMError(f"{self.provider} backend call failed: {e}") from e

        if not raw or not raw.strip():
            raise LLMError(f"{self.provider} backend returned an empty reply")
        return raw

    async def _complete_with_openai(self, prompt: str) -> str | None:
        client = self._get_openai_client()
        response = await client.chat.completions.create(
            model=self._config.llm_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self._config.llm_temperature,
            max_tokens=self._config.llm_max_output_tokens,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def _complete_with_anthropic(self, prompt: str) -> str | None:
        client = self._get_anthropic_client()
        response = await client.messages.create(
            model=self._config.llm_model,
            max_tokens=self._config.llm_max_output_tokens,
            temperature=self._config.llm_temperature,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        parts = [block.text for block in response.content if block.type == "text"]
        if not parts:
            logger.warning("Anthropic response contained no text block")
            return None
        return "".join(parts)

    async def close(self) -> None:
        """Clean up SDK clients."""
        if self._openai_client is not None:
            await self._openai_client.close()
            self._openai_client = None
        if self._anthropic_client is not None:
            await self._anthropic_client.close()
            self._anthropic_client = None
