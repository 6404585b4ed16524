"""
X-API-KEY check for the calendar endpoints.

``/health`` stays open. Extraction and export require one of the keys in
``API_KEYS``; with no keys configured every client is let through.
"""

import hmac

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from syllabus_calendar.config.settings import get_settings
from syllabus_calendar.observability.logging import get_logger

API_KEY_HEADER = "X-API-KEY"
DEV_MODE_CLIENT = "dev-mode"

logger = get_logger(__name__)

_api_key_header = APIKeyHeader(
    name=API_KEY_HEADER,
    auto_error=False,
    description="Key issued to a calendar client",
)


def key_accepted(candidate: str, accepted: frozenset[str]) -> bool:
    """Constant-time membership check against the configured keys."""
    encoded = candidate.encode()
    return any(hmac.compare_digest(encoded, key.encode()) for key in accepted)


def _rejected(detail: str, reason: str) -> HTTPException:
    logger.warning("Rejected calendar client", reason=reason)
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def require_calendar_client(api_key: str | None = Security(_api_key_header)) -> str:
    """
    Resolve the calling client from its API key.

    Returns:
        The presented key, or ``DEV_MODE_CLIENT`` when no keys are configured.

    Raises:
        HTTPException: 401 when the key is missing or not accepted.
    """
    accepted = get_settings().accepted_api_keys
    if not accepted:
        return DEV_MODE_CLIENT

    if not api_key:
        raise _rejected(f"Missing API key. Provide {API_KEY_HEADER} header.", "missing_key")
    if not key_accepted(api_key, accepted):
        raise _rejected("Invalid API key", "unknown_key")

    return api_key
