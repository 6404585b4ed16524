"""iCalendar export endpoint."""

import re

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from syllabus_calendar.api.auth import require_calendar_client
from syllabus_calendar.api.models import ErrorResponse, ExportRequest
from syllabus_calendar.export.ics import events_to_ics

router = APIRouter()

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")


def _filename(calendar_name: str) -> str:
    stem = _UNSAFE_FILENAME.sub("_", calendar_name).strip("_") or "calendar"
    return f"{stem}.ics"


@router.post(
    "/calendar/export",
    response_class=Response,
    responses={
        200: {"content": {"text/calendar": {}}, "description": "iCalendar file"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
        422: {"model": ErrorResponse, "description": "Validation error"},
    },
    summary="Export events as an iCalendar file",
    description="Serialize events into an .ics file with one VEVENT per event.",
)
async def export_calendar(
    body: ExportRequest,
    api_key: str = Depends(require_calendar_client),
) -> Response:
    events = [item.to_event() for item in body.events]
    content = events_to_ics(events, calendar_name=body.calendar_name)
    return Response(
        content=content,
        media_type="text/calendar",
        headers={
            "Content-Disposition": f'attachment; filename="{_filename(body.calendar_name)}"',
        },
    )
