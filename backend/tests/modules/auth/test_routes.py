"""Tests for the auth HTTP endpoints."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service
from modules.auth.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
)
from modules.auth.models import SessionInfo, UserProfile, UserSummary
from shared.models import AuthenticatedUser

USER = AuthenticatedUser(id="user-123", email="test@example.com", access_token="tok")
SESSION = SessionInfo(access_token="access-1", refresh_token="refresh-1", expires_at=1_900_000_000)


@pytest.fixture
def auth_service():
    service = MagicMock()
    service.validate_token = AsyncMock(return_value=USER)
    service.sign_up = AsyncMock(return_value=UserSummary(id="user-123", email="test@example.com"))
    service.sign_in = AsyncMock(
        return_value=(UserSummary(id="user-123", email="test@example.com"), SESSION)
    )
    service.sign_out = AsyncMock(return_value=None)
    service.refresh_session = AsyncMock(return_value=SESSION)
    service.get_profile = AsyncMock(
        return_value=UserProfile(id="user-123", email="test@example.com", name="Test")
    )
    return service


@pytest.fixture
def client(auth_service):
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    with TestClient(app) as test_client:
        yield test_client


AUTH = {"Authorization": "Bearer tok"}


class TestSignUp:
    def test_created(self, client, auth_service):
        response = client.post(
            "/api/auth/signup",
            json={"email": "test@example.com", "password": "secret1", "name": "Test"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["user"]["id"] == "user-123"
        auth_service.sign_up.assert_awaited_once()

    def test_email_taken(self, client, auth_service):
        auth_service.sign_up.side_effect = EmailAlreadyRegisteredError("test@example.com")

        response = client.post(
            "/api/auth/signup", json={"email": "test@example.com", "password": "secret1"}
        )

        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_ALREADY_REGISTERED"

    def test_short_password(self, client, auth_service):
        response = client.post(
            "/api/auth/signup", json={"email": "test@example.com", "password": "123"}
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "password"
        auth_service.sign_up.assert_not_awaited()


class TestSignIn:
    def test_tokens_returned(self, client):
        response = client.post(
            "/api/auth/signin", json={"email": "test@example.com", "password": "secret1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["session"]["access_token"] == "access-1"
        assert body["session"]["refresh_token"] == "refresh-1"

    def test_bad_credentials(self, client, auth_service):
        auth_service.sign_in.side_effect = InvalidCredentialsError()

        response = client.post(
            "/api/auth/signin", json={"email": "test@example.com", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"


class TestSignOut:
    def test_requires_token(self, client):
        assert client.post("/api/auth/signout").status_code == 401

    def test_signs_out_caller(self, client, auth_service):
        response = client.post("/api/auth/signout", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"message": "Signed out successfully"}
        auth_service.sign_out.assert_awaited_once_with(USER)


class TestMe:
    def test_profile(self, client, auth_service):
        auth_service.get_profile.return_value = UserProfile(
            id="user-123",
            email="test@example.com",
            name="Test",
            avatar_url="https://example.com/a.png",
            created_at="2024-01-01T00:00:00Z",
            updated_at="2024-01-02T00:00:00Z",
        )

        response = client.get("/api/auth/me", headers=AUTH)

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == "user-123"
        assert user["name"] == "Test"
        assert user["avatar_url"] == "https://example.com/a.png"
        assert user["updated_at"].startswith("2024-01-02")

    def test_null_fields_are_kept(self, client, auth_service):
        """name and avatar_url are always present; updated_at only when known."""
        auth_service.get_profile.return_value = UserProfile(
            id="user-123",
            email="test@example.com",
            name=None,
            avatar_url=None,
            created_at="2024-01-01T00:00:00Z",
        )

        response = client.get("/api/auth/me", headers=AUTH)

        user = response.json()["user"]
        assert user["name"] is None
        assert user["avatar_url"] is None
        assert user["created_at"].startswith("2024-01-01")
        assert "updated_at" not in user

    def test_invalid_token(self, client, auth_service):
        auth_service.validate_token.side_effect = InvalidTokenError()

        response = client.get("/api/auth/me", headers=AUTH)

        assert response.status_code == 401


class TestRefresh:
    def test_refresh(self, client, auth_service):
        response = client.post("/api/auth/refresh", json={"refresh_token": "refresh-1"})

        assert response.status_code == 200
        assert response.json()["message"] == "Session refreshed successfully"
        auth_service.refresh_session.assert_awaited_once_with("refresh-1")

    @pytest.mark.parametrize("body", [{}, {"refresh_token": ""}, {"refresh_token": "  "}])
    def test_missing_token(self, client, auth_service, body):
        response = client.post("/api/auth/refresh", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "error": "Refresh token is required",
            "code": "MISSING_REFRESH_TOKEN",
        }
        auth_service.refresh_session.assert_not_awaited()

    def test_rejected_token(self, client, auth_service):
        auth_service.refresh_session.side_effect = InvalidRefreshTokenError()

        response = client.post("/api/auth/refresh", json={"refresh_token": "stale"})

        assert response.status_code == 401
