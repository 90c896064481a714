"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password sign-in is rejected."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token is rejected or yields no session."""

    def __init__(self, message: str = "Invalid or expired refresh token"):
        super().__init__(message, code="INVALID_REFRESH_TOKEN")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "Email is already in use",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class SignUpRejectedError(ValidationError):
    """Raised when Supabase Auth rejects a sign-up for any other reason."""

    def __init__(self, reason: str):
        super().__init__(reason, code="SIGN_UP_REJECTED")


class SignOutFailedError(ValidationError):
    """Raised when Supabase Auth refuses to revoke the session."""

    def __init__(self, reason: str):
        super().__init__(reason, code="SIGN_OUT_FAILED")
