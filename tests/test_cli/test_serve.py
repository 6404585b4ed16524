"""Tests for the serve CLI command."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from syllabus_calendar.cli import main


@pytest.fixture
def runner(monkeypatch):
    # --debug writes DEBUG; monkeypatch restores it afterwards
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    return CliRunner()


class TestServe:
    """Test the `serve` CLI command."""

    def test_defaults_from_settings(self, runner: CliRunner) -> None:
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(main, ["serve"])

        assert result.exit_code == 0, result.output
        assert "Starting API server on 0.0.0.0:8001" in result.output
        args, kwargs = mock_run.call_args
        assert args == ("syllabus_calendar.api.app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 8001
        assert kwargs["reload"] is False

    def test_options_override(self, runner: CliRunner) -> None:
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(main, ["serve", "--host", "127.0.0.1", "--port", "9000", "--reload"])

        assert result.exit_code == 0, result.output
        kwargs = mock_run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9000
        assert kwargs["reload"] is True

    def test_debug_flag(self, runner: CliRunner) -> None:
        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(main, ["--debug", "serve"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.kwargs["log_level"] == "debug"

    def test_debug_setting_overrides_log_level(self, runner: CliRunner, monkeypatch) -> None:
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        with patch("uvicorn.run") as mock_run:
            result = runner.invoke(main, ["serve"])

        assert result.exit_code == 0, result.output
        assert mock_run.call_args.kwargs["log_level"] == "debug"
