"""
Error taxonomy shared by the access core, the service layer and the HTTP layer.

Every error carries the HTTP status it is reported with; the API turns them
into ``{"code": status, "message": text}`` responses.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from music_commerce.access.schemas import Reason


class ApiError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    """Malformed or missing input; the operation is never attempted."""

    status_code = 400


class UnauthorizedError(ApiError):
    """
    Caller is not authenticated, or the access decision denied the operation.

    ``reason`` keeps the decision reason code for logs and diagnostics. It is
    not part of the response body so ownership information does not leak.
    """

    status_code = 401

    def __init__(self, message: str = "Please authenticate", reason: Optional["Reason"] = None):
        super().__init__(message)
        self.reason = reason


class ForbiddenError(ApiError):
    """Authenticated caller's role lacks the right required by the endpoint."""

    status_code = 403


class NotFoundError(ApiError):
    """Referenced or targeted entity does not exist."""

    status_code = 404


class ConflictError(ApiError):
    """A unique key is already taken by another record."""

    status_code = 409


class InternalError(ApiError):
    """Persistence failed after every check passed."""

    status_code = 500
