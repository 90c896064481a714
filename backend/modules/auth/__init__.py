"""
Authentication module.

Handles JWT validation, Supabase Auth session lifecycle and profile lookups.

Public API:
- IAuthService: Interface for auth operations
- AuthenticatedUser: Minimal user info from JWT
- UserProfile: Full user profile
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import AuthenticatedUser, UserProfile, JWTPayload, SessionInfo
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    EmailAlreadyRegisteredError,
    SignUpRejectedError,
    SignOutFailedError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "AuthenticatedUser",
    "UserProfile",
    "JWTPayload",
    "SessionInfo",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "InvalidRefreshTokenError",
    "EmailAlreadyRegisteredError",
    "SignUpRejectedError",
    "SignOutFailedError",
]
