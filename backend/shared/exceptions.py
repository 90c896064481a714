"""
Error taxonomy for the to-do API.

Modules raise subclasses of the kinds below; api/errors.py turns the kind
into an HTTP status and the message/code pair into the response body:

    ValidationError      400  bad input the schema could not catch
    AuthenticationError  401  missing, expired or rejected credentials
    AuthorizationError   403  the todo exists but the caller lacks the right
    NotFoundError        404  todo, share or user does not exist
    ConflictError        409  uniqueness violated (e.g. email taken)
    ExternalServiceError 500  Supabase failed; details are logged, not returned
"""

from typing import Optional, Any


class TodoApiError(Exception):
    """Root of every error the API knows how to render."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        # Machine-readable; clients branch on this, not on the message
        self.code = code or type(self).__name__
        self.details = dict(details) if details else {}

    def to_dict(self) -> dict[str, Any]:
        """Log-friendly view including details never sent to clients."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TodoApiError):
    pass


class AuthenticationError(TodoApiError):
    pass


class AuthorizationError(TodoApiError):
    pass


class NotFoundError(TodoApiError):
    pass


class ConflictError(TodoApiError):
    pass


class ExternalServiceError(TodoApiError):
    """A call to Supabase (database or auth) failed unexpectedly."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, {**(details or {}), "service": service})
        self.service = service
