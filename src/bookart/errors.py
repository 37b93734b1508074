"""Error taxonomy shared by the managers and the web layer.

Each error carries the HTTP status it renders as. Messages are safe to show
to clients; internal failures use a generic message and are logged instead.
"""

from typing import Optional


class BookArtError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(BookArtError, ValueError):
    """Missing or invalid input.

    Also a ValueError, so callers outside the web layer (the CLI) can catch
    it alongside pydantic validation errors.
    """

    status_code = 400
    default_message = "Bad request"


class Unauthorized(BookArtError):
    """Missing, malformed, invalid or expired credential."""

    status_code = 401
    default_message = "Unauthorized"


class Forbidden(BookArtError):
    """Valid credential without the required role."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(BookArtError):
    """No row for the requested id."""

    status_code = 404
    default_message = "Not found"


class InternalError(BookArtError):
    """Unexpected storage or driver failure."""

    status_code = 500
