"""
API error hierarchy.

Every error maps to an HTTP status and renders as the standard envelope
`{"success": false, "message": ..., "errors": [...]}` (see `error_handlers`).
"""

from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, errors: list[str] | None = None) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_response(self) -> dict:
        body: dict = {"success": False, "message": self.message}
        if self.errors:
            body["errors"] = list(self.errors)
        return body


class ValidationFailed(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class BadIdentifier(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "ID must be a valid number"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class StorageFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


MAX_ID = 2_147_483_647


def parse_id(raw: str) -> int:
    """
    Parse a path identifier; non-numeric input is a client error, not a 404.

    Ids are SERIAL (int4) columns, so anything above MAX_ID is rejected here
    rather than failing inside the driver.
    """
    value = (raw or "").strip()
    if not (value.isascii() and value.isdigit()):
        raise BadIdentifier()
    parsed = int(value)
    if parsed > MAX_ID:
        raise BadIdentifier("ID is out of range")
    return parsed
