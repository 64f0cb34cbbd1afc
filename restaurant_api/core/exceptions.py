"""
API Error Taxonomy

Every expected failure a handler can report is an ``APIError`` subclass.
The application renders them as the standard envelope::

    {"success": false, "message": "...", **extra}
"""

from typing import Any, Optional


class APIError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, **self.extra}


class MissingInput(APIError):
    status_code = 400
    default_message = "Required input is missing"


class Conflict(APIError):
    status_code = 400
    default_message = "Resource already exists"


class NotFound(APIError):
    status_code = 404
    default_message = "Not found"


class Unauthenticated(APIError):
    status_code = 401
    default_message = "User not authenticated"


class InvalidToken(APIError):
    status_code = 401
    default_message = "Invalid token"


class InvalidStatusTransition(APIError):
    status_code = 400
    default_message = "Order status transition is not allowed"


class InternalError(APIError):
    status_code = 500
    default_message = "Internal server error"


class ImageUploadError(Exception):
    """Raised by an image gateway when an upload does not yield a URL."""
