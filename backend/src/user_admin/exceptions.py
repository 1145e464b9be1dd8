"""Error categories for the user administration API.

Every failure a handler can report belongs to one of a small, closed set
of categories. Each category is an exception class carrying the HTTP
status code it maps to; the router turns a raised category into a
response envelope.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base exception for application errors.

    Attributes:
        message: Human-readable message returned to the caller. An empty
            message means the response carries no body.
        status_code: HTTP status code (500 unless a subclass narrows it).
    """

    status_code = 500
    default_message = "internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is None:
            message = self.default_message
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    """Raised for malformed input.

    Use for a missing or unreadable token, a missing body field, or a
    missing query parameter.
    """

    status_code = 400
    default_message = "bad request"


class UnauthorizedError(AppError):
    """Raised when the caller lacks the elevated profile, or when the
    directory service rejects the supplied credential."""

    status_code = 401
    default_message = "unauthorized request"


class NotFoundError(AppError):
    """Raised when the target user does not exist in the directory."""

    status_code = 404
    default_message = "not found"


class InternalServerError(AppError):
    """Raised for any other directory failure or serialization problem."""

    status_code = 500
    default_message = "internal server error"


class ClaimError(BadRequestError):
    """Raised when the profile claim cannot be read from a bearer token.

    The reason is for logs only; the authorization gate collapses every
    claim error into a plain bad request before it reaches the caller.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


_STATUS_CODES: dict[type[AppError], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
    InternalServerError: 500,
}


def status_code_for(error: Optional[BaseException]) -> int:
    """Map an error category to its HTTP status code.

    Anything outside the known categories, including ``None``, maps to 500.
    """
    for category, code in _STATUS_CODES.items():
        if isinstance(error, category):
            return code
    return 500
