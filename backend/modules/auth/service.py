"""
Authentication service implementation.

Validates Supabase JWT tokens locally and delegates account and session
lifecycle (sign-up, sign-in, sign-out, refresh) to Supabase Auth.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Any
import jwt
import pydantic

from supabase import AuthError, Client

from shared.config import get_settings
from shared.database import get_supabase_client, get_supabase_anon_client
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    JWTPayload,
    SessionInfo,
    SignInRequest,
    SignUpRequest,
    UserProfile,
    UserSummary,
)
from .exceptions import (
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    MissingTokenError,
    SignOutFailedError,
    SignUpRejectedError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the Supabase
    profiles table for user profile lookups.

    Supabase clients are created lazily so that token validation
    works without any database configuration.
    """

    def __init__(
        self,
        service_client: Optional[Client] = None,
        anon_client_factory: Any = None,
    ):
        self._settings = get_settings()
        self._service_client = service_client
        self._anon_client_factory = anon_client_factory or get_supabase_anon_client

    @property
    def _db(self) -> Client:
        if self._service_client is None:
            self._service_client = get_supabase_client()
        return self._service_client

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            jwt_payload = JWTPayload(**payload)
        except pydantic.ValidationError:
            raise InvalidTokenError("Invalid token: malformed claims")

        return AuthenticatedUser(
            id=jwt_payload.sub,
            email=jwt_payload.email or "",
            email_verified=jwt_payload.email_confirmed_at is not None,
            last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
            name=_metadata_name(jwt_payload.user_metadata),
            role=jwt_payload.role if jwt_payload.role != "authenticated" else "user",
            access_token=token,
        )

    async def sign_up(self, request: SignUpRequest) -> UserSummary:
        """Register a user; the profiles row is created by a database trigger."""
        client = self._anon_client_factory()
        try:
            response = client.auth.sign_up({
                "email": request.email,
                "password": request.password,
                "options": {"data": {"name": request.name}},
            })
        except AuthError as e:
            if _is_already_registered(e):
                raise EmailAlreadyRegisteredError(request.email)
            logger.info("Sign-up rejected: %s", e.message)
            raise SignUpRejectedError(e.message)

        user = response.user
        logger.info("User signed up: %s", user.id if user else None)
        return UserSummary(
            id=user.id if user else "",
            email=user.email if user else request.email,
        )

    async def sign_in(self, request: SignInRequest) -> tuple[UserSummary, SessionInfo]:
        client = self._anon_client_factory()
        try:
            response = client.auth.sign_in_with_password({
                "email": request.email,
                "password": request.password,
            })
        except AuthError:
            raise InvalidCredentialsError()

        if response.user is None or response.session is None:
            raise InvalidCredentialsError()

        return (
            UserSummary(id=response.user.id, email=response.user.email),
            _to_session_info(response.session),
        )

    async def sign_out(self, user: AuthenticatedUser) -> None:
        """Revoke all refresh tokens of the session via the admin API."""
        try:
            self._db.auth.admin.sign_out(user.access_token)
        except AuthError as e:
            logger.warning("Sign-out failed for user %s: %s", user.id, e.message)
            raise SignOutFailedError(e.message)
        logger.info("User signed out: %s", user.id)

    async def refresh_session(self, refresh_token: str) -> SessionInfo:
        client = self._anon_client_factory()
        try:
            response = client.auth.refresh_session(refresh_token)
        except AuthError:
            raise InvalidRefreshTokenError()

        if response.session is None:
            raise InvalidRefreshTokenError("Could not refresh the session")

        return _to_session_info(response.session)

    async def get_profile(self, user: AuthenticatedUser) -> UserProfile:
        result = self._db.table("profiles").select("*").eq("id", user.id).execute()

        if not result.data:
            return self._profile_from_account(user)

        return _map_to_profile(result.data[0])

    def _profile_from_account(self, user: AuthenticatedUser) -> UserProfile:
        """Profile built from Supabase Auth when the profiles row is missing."""
        name, created_at = user.name, None
        try:
            account = self._db.auth.admin.get_user_by_id(user.id).user
        except AuthError as e:
            logger.warning("Account lookup failed for user %s: %s", user.id, e.message)
            account = None

        if account is not None:
            name = _metadata_name(account.user_metadata or {}) or name
            created_at = account.created_at

        return UserProfile(id=user.id, email=user.email, name=name, created_at=created_at)

    async def get_user_by_email(self, email: str) -> Optional[UserProfile]:
        result = self._db.table("profiles").select("*").eq("email", email).execute()

        if not result.data:
            return None

        return _map_to_profile(result.data[0])


def _is_already_registered(error: AuthError) -> bool:
    code = getattr(error, "code", None)
    return code in ("user_already_exists", "email_exists") or (
        "already registered" in (error.message or "").lower()
    )


def _metadata_name(metadata: dict) -> Optional[str]:
    name = metadata.get("name")
    return name if isinstance(name, str) else None


def _to_session_info(session: Any) -> SessionInfo:
    return SessionInfo(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
    )


def _map_to_profile(data: dict[str, Any]) -> UserProfile:
    return UserProfile(
        id=str(data["id"]),
        email=data.get("email"),
        name=data.get("name"),
        avatar_url=data.get("avatar_url"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )

