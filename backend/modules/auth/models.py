"""
Authentication module data models.

These models define the request/response bodies of the auth endpoints
and the structures exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, model_serializer

from shared.models import AuthenticatedUser, MessageResponse


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class SignUpRequest(BaseModel):
    """Request body for POST /api/auth/signup."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, max_length=72, description="Password")
    name: Optional[str] = Field(None, min_length=2, description="Display name")


class SignInRequest(BaseModel):
    """Request body for POST /api/auth/signin."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class RefreshRequest(BaseModel):
    """Request body for POST /api/auth/refresh."""

    refresh_token: Optional[str] = Field(None, description="Refresh token from sign-in")


class UserSummary(BaseModel):
    """Minimal user identity returned by sign-up and sign-in."""

    id: str
    email: Optional[str] = None


class SessionInfo(BaseModel):
    """Session tokens issued by Supabase Auth."""

    access_token: str
    refresh_token: str
    expires_at: Optional[int] = Field(None, description="Unix timestamp of expiry")


class UserProfile(BaseModel):
    """
    Full user profile from the profiles table.

    Falls back to the Supabase Auth user when no profile row exists:
    name from user_metadata, created_at from the account, no avatar.
    updated_at is left out of the JSON when there is none to report.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: Optional[str] = Field(None, description="Email address")
    name: Optional[str] = Field(None, description="Display name")
    avatar_url: Optional[str] = Field(None, description="Avatar URL")
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    @model_serializer(mode="wrap")
    def _omit_unknown_update_time(self, handler):
        data = handler(self)
        if data.get("updated_at") is None:
            data.pop("updated_at", None)
        return data


class SignUpResponse(BaseModel):
    message: str
    user: UserSummary


class SignInResponse(BaseModel):
    message: str
    user: UserSummary
    session: SessionInfo


class RefreshResponse(BaseModel):
    message: str
    session: SessionInfo


class MeResponse(BaseModel):
    user: UserProfile


__all__ = [
    "AuthenticatedUser",
    "JWTPayload",
    "SignUpRequest",
    "SignInRequest",
    "RefreshRequest",
    "UserSummary",
    "SessionInfo",
    "UserProfile",
    "SignUpResponse",
    "SignInResponse",
    "RefreshResponse",
    "MessageResponse",
    "MeResponse",
]
