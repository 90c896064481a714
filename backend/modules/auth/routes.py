"""
Auth API endpoints.

Thin wrappers over IAuthService: sign-up, sign-in, sign-out,
session refresh and the current user's profile.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_auth_service
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    MeResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)

router = APIRouter()


@router.post("/signup", response_model=SignUpResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignUpResponse:
    """
    Register a new user.

    Returns 409 if the email is already registered.
    """
    user = await service.sign_up(request)
    return SignUpResponse(message="User created successfully", user=user)


@router.post("/signin", response_model=SignInResponse)
async def sign_in(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SignInResponse:
    """Sign in with email and password and receive session tokens."""
    user, session = await service.sign_in(request)
    return SignInResponse(message="Signed in successfully", user=user, session=session)


@router.post("/signout", response_model=MessageResponse)
async def sign_out(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the caller's session."""
    await service.sign_out(user)
    return MessageResponse(message="Signed out successfully")


@router.get("/me", response_model=MeResponse)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MeResponse:
    """Get the current user's profile."""
    profile = await service.get_profile(user)
    return MeResponse(user=profile)


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    request: RefreshRequest,
    service: IAuthService = Depends(get_auth_service),
) -> RefreshResponse:
    """Exchange a refresh token for a new session."""
    if not request.refresh_token or not request.refresh_token.strip():
        raise ValidationError("Refresh token is required", code="MISSING_REFRESH_TOKEN")

    session = await service.refresh_session(request.refresh_token)
    return RefreshResponse(message="Session refreshed successfully", session=session)
