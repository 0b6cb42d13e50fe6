"""
Centralized error handling for greeting/chat/store failures.
Exception taxonomy plus one mapping helper so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

MSG_AI_NOT_CONFIGURED = "OpenAI API key not configured"
MSG_INTERNAL_ERROR = "Internal server error"

# HTTP status codes for known error categories
STATUS_BAD_REQUEST = 400
STATUS_INTERNAL_ERROR = 500


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------

class BillboardError(Exception):
    """Base error. `detail` is the static client-facing message."""

    status_code = STATUS_INTERNAL_ERROR

    def __init__(self, detail: str = MSG_INTERNAL_ERROR):
        super().__init__(detail)
        self.detail = detail


class InvalidInput(BillboardError):
    """Malformed or missing request fields."""

    status_code = STATUS_BAD_REQUEST


class InvalidLocation(InvalidInput):
    def __init__(self, detail: str = "Missing latitude or longitude"):
        super().__init__(detail)


class UpstreamFailure(BillboardError):
    """A third-party call failed or returned a non-success status. Detail is logged, not returned."""


class GenerationFailed(UpstreamFailure):
    def __init__(self, detail: str = "Failed to generate message"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# HTTP mapping
# ---------------------------------------------------------------------------

def error_to_http(exc: Exception) -> HTTPException:
    """
    Map an exception from a greeting/chat/store call into an HTTPException.
    BillboardErrors keep their status and static detail; anything else is a 500 with a generic
    message. Upstream causes (provider bodies, quota errors) only go to the log.
    """
    if isinstance(exc, BillboardError):
        return HTTPException(status_code=exc.status_code, detail=exc.detail)
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=MSG_INTERNAL_ERROR)
