"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import patch
import jwt  # PyJWT

from api.dependencies import reset_container


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

OWNER_ID = "11111111-1111-1111-1111-111111111111"
OWNER_EMAIL = "owner@example.com"
SHAREE_ID = "22222222-2222-2222-2222-222222222222"
SHAREE_EMAIL = "sharee@example.com"


def create_test_token(
    user_id: str = OWNER_ID,
    email: str = OWNER_EMAIL,
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def jwt_settings():
    """Point token validation at the test secret."""
    with patch("modules.auth.service.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        yield mock_settings


@pytest.fixture
def owner_headers() -> dict[str, str]:
    """Authorization headers for the todo owner."""
    return bearer(create_test_token(OWNER_ID, OWNER_EMAIL))


@pytest.fixture
def sharee_headers() -> dict[str, str]:
    """Authorization headers for the second user."""
    return bearer(create_test_token(SHAREE_ID, SHAREE_EMAIL))
