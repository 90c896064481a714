"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    AuthenticatedUser,
    SessionInfo,
    SignInRequest,
    SignUpRequest,
    UserProfile,
    UserSummary,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and to other modules.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def sign_up(self, request: SignUpRequest) -> UserSummary:
        """
        Register a new user with email and password.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account
            SignUpRejectedError: If Supabase rejects the sign-up otherwise
        """
        ...

    async def sign_in(self, request: SignInRequest) -> tuple[UserSummary, SessionInfo]:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
        """
        ...

    async def sign_out(self, user: AuthenticatedUser) -> None:
        """Revoke the session the user's access token belongs to."""
        ...

    async def refresh_session(self, refresh_token: str) -> SessionInfo:
        """
        Exchange a refresh token for a new session.

        Raises:
            InvalidRefreshTokenError: If the token is rejected
        """
        ...

    async def get_profile(self, user: AuthenticatedUser) -> UserProfile:
        """
        Get the profile of an authenticated user.

        Falls back to the token identity when no profile row exists.
        """
        ...

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        """
        Get a user's profile by their email.

        Args:
            email: User's email address

        Returns:
            UserProfile if found, None otherwise
        """
        ...
