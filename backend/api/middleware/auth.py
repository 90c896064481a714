"""
Bearer-token authentication for route handlers.

Every /api/todos and /api/auth/{signout,me} handler depends on
get_current_user. The dependency only extracts the token; verification is
the auth service's job, and its AuthenticationError subclasses reach the
client as 401 through api/errors.py.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser

from ..dependencies import get_auth_service

# auto_error=False: a missing header is reported by get_current_user
bearer_scheme = HTTPBearer(auto_error=False, description="Supabase access token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """The caller, resolved from `Authorization: Bearer <token>`."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    return await auth.validate_token(credentials.credentials)
