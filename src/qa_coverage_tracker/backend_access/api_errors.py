"""Backend access errors and their user-facing messages."""

from __future__ import annotations

from typing import Any

_STATUS_MESSAGES = {
    0: "Cannot connect to server. Please ensure the backend is running on the correct port.",
    404: "API endpoint not found. Please check the server configuration.",
    500: "Internal server error. Please check the server logs.",
    503: "Service temporarily unavailable. Please try again later.",
}


class ApiError(Exception):
    """Raised when a backend call fails.

    ``status`` is 0 when no HTTP response was received.
    """

    def __init__(self, message: str, *, status: int, url: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.url = url


class SessionExpiredError(ApiError):
    """Raised when the backend rejects the session; the cached login is already cleared."""


def describe_failure(status: int, body: Any, reason: str = "") -> str:
    """Build the banner message shown for a failed backend call."""
    if status in _STATUS_MESSAGES:
        return _STATUS_MESSAGES[status]
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    suffix = f"\nMessage: {reason}" if reason else ""
    return f"Error Code: {status}{suffix}"


def is_unauthorized(status: int, body: Any) -> bool:
    """Whether a failed response means the session is no longer valid."""
    if status == 401:
        return True
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict):
            return bool(error.get("error"))
        if isinstance(error, str):
            return error.strip().lower() == "unauthorized"
    return False
