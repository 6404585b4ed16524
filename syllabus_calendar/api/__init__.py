"""
FastAPI syllabus-calendar service.

Provides REST API for syllabus event extraction with:
- POST /calendar/extract-events - Extract events from syllabus text
- POST /calendar/export - Export events as an iCalendar file
- GET /health - Service health check
"""

from syllabus_calendar.api.app import create_app

__all__ = ["create_app"]
