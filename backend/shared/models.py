"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

import math
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    last_sign_in: Optional[datetime] = Field(None, description="Token issue time")
    name: Optional[str] = Field(None, description="Display name from user_metadata")
    role: str = Field(default="user", description="User role")

    # Raw bearer token, needed to revoke the session on sign-out
    access_token: str = Field(default="", repr=False, exclude=True)

    model_config = ConfigDict(frozen=True, extra="ignore")


class Pagination(BaseModel):
    """Pagination block returned alongside every paginated list."""

    page: int = Field(..., ge=1, description="Current page (1-indexed)")
    limit: int = Field(..., ge=1, le=MAX_PAGE_SIZE, description="Items per page")
    total: int = Field(..., ge=0, description="Total matching items")
    total_pages: int = Field(..., ge=0, serialization_alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """Create a pagination block, deriving totalPages from total and limit."""
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        )


def page_range(page: int, limit: int) -> tuple[int, int]:
    """
    Translate a 1-based page and limit to an inclusive row range.

    PostgREST's range() takes inclusive bounds, so page 1 with limit 10
    becomes (0, 9).
    """
    start = (page - 1) * limit
    return start, start + limit - 1


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
