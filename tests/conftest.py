"""Pytest fixtures for syllabus-calendar tests."""

import pytest

from syllabus_calendar.config.settings import Settings, get_settings
from syllabus_calendar.extraction.config import ExtractionConfig


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep developer .env files and API keys out of the tests."""
    for name in (
        "API_HOST",
        "API_PORT",
        "API_KEYS",
        "DEBUG",
        "ENVIRONMENT",
        "EXTRACTION_ENABLED",
        "EXTRACTION_LLM_API_KEY",
        "EXTRACTION_LLM_ENABLED",
        "EXTRACTION_LLM_PROVIDER",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(
        environment="development",
        log_level="DEBUG",
    )


@pytest.fixture
def regex_only_config() -> ExtractionConfig:
    """Extraction config with the LLM path switched off."""
    return ExtractionConfig(_env_file=None, llm_enabled=False)


@pytest.fixture
def llm_config() -> ExtractionConfig:
    """Extraction config with a (fake) LLM backend configured."""
    return ExtractionConfig(
        _env_file=None,
        llm_enabled=True,
        llm_api_key="sk-test",
        llm_model="test-model",
        llm_timeout=5.0,
    )


@pytest.fixture
def sample_syllabus() -> str:
    """A short syllabus schedule with several date idioms."""
    return (
        "CS 101 Fall 2024\n"
        "Assignment 1 due: September 15, 2024.\n"
        "Homework 2 - 9/22/2024\n"
        "Quiz 1 - Sept 29\n"
        "Midterm Exam - Oct 10.\n"
        "Final project due: December 6, 2024\n"
    )
