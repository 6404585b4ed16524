"""
Command-line interface for syllabus-calendar.

Usage:
    syllabus-calendar serve            # Run the HTTP API
    syllabus-calendar --debug serve    # Same, with debug logging
"""

import click

from syllabus_calendar.config.settings import get_settings
from syllabus_calendar.observability.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """Syllabus Calendar - extract dated events from course syllabi."""
    if debug:
        import os
        # Read back by Settings.debug, also in the uvicorn app factory
        os.environ["DEBUG"] = "true"
        get_settings.cache_clear()

    setup_logging()


@main.command()
@click.option("--host", default=None, help="API server host")
@click.option("--port", default=None, type=int, help="API server port")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev only)")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the extraction API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting API server on {host}:{port}")
    click.echo(f"API docs available on http://localhost:{port}/docs")

    uvicorn.run(
        "syllabus_calendar.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.effective_log_level.lower(),
    )


if __name__ == "__main__":
    main()
