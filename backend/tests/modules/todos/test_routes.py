"""Tests for the todo HTTP endpoints."""

import time

import jwt
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_todo_service
from modules.todos.service import TodoService

from tests.conftest import (
    OWNER_EMAIL,
    OWNER_ID,
    SHAREE_EMAIL,
    SHAREE_ID,
    TEST_JWT_SECRET,
    bearer,
    create_test_token,
)
from .fakes import FakeDirectory, InMemoryTodoRepository


@pytest.fixture
def repo():
    directory = FakeDirectory({OWNER_EMAIL: OWNER_ID, SHAREE_EMAIL: SHAREE_ID})
    return InMemoryTodoRepository(directory)


@pytest.fixture
def client(jwt_settings, repo):
    """Test client with real token validation and an in-memory todo store."""
    app = create_app()
    service = TodoService(repo, auth=repo._directory)
    app.dependency_overrides[get_todo_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def todo_id(client, owner_headers):
    response = client.post("/api/todos", json={"title": "Buy milk"}, headers=owner_headers)
    return response.json()["data"]["id"]


class TestAuthentication:
    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/todos"),
            ("post", "/api/todos"),
            ("get", "/api/todos/shared"),
            ("get", "/api/todos/some-id"),
            ("put", "/api/todos/some-id"),
            ("delete", "/api/todos/some-id"),
            ("get", "/api/todos/some-id/share"),
            ("post", "/api/todos/some-id/share"),
            ("patch", "/api/todos/some-id/share/share-id"),
            ("delete", "/api/todos/some-id/share/share-id"),
        ],
    )
    def test_requires_token(self, client, method, path):
        response = client.request(method.upper(), path)

        assert response.status_code == 401
        assert response.json()["error"] == "Not authenticated"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_token(self, client):
        headers = bearer(create_test_token(expired=True))
        response = client.get("/api/todos", headers=headers)

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"

    def test_token_with_wrong_secret(self, client):
        headers = bearer(create_test_token(secret="someone-elses-secret"))
        response = client.get("/api/todos", headers=headers)

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    @pytest.mark.parametrize("claim", ["exp", "iat", "sub"])
    def test_token_missing_required_claim(self, client, claim):
        now = int(time.time())
        payload = {"sub": OWNER_ID, "aud": "authenticated", "exp": now + 3600, "iat": now}
        del payload[claim]
        headers = bearer(jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256"))

        response = client.get("/api/todos", headers=headers)

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_auth_checked_before_body(self, client):
        response = client.post("/api/todos", json={"title": ""})
        assert response.status_code == 401


class TestTodoEndpoints:
    def test_create(self, client, owner_headers):
        response = client.post(
            "/api/todos",
            json={"title": "Buy milk", "priority": "high", "due_date": "2024-06-01T12:00:00Z"},
            headers=owner_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["title"] == "Buy milk"
        assert data["user_id"] == OWNER_ID
        assert data["priority"] == "high"
        assert data["completed"] is False

    def test_create_empty_title(self, client, owner_headers):
        response = client.post("/api/todos", json={"title": ""}, headers=owner_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request data"
        assert body["details"][0]["field"] == "title"
        assert body["details"][0]["message"]

    def test_create_bad_priority(self, client, owner_headers):
        response = client.post(
            "/api/todos", json={"title": "Buy milk", "priority": "urgent"}, headers=owner_headers
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "priority"

    def test_list_pagination_block(self, client, owner_headers):
        for i in range(3):
            client.post("/api/todos", json={"title": f"Todo {i}"}, headers=owner_headers)

        response = client.get("/api/todos?page=2&limit=2", headers=owner_headers)

        assert response.status_code == 200
        body = response.json()
        assert [t["title"] for t in body["data"]] == ["Todo 0"]
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2}

    def test_list_filter_by_completed(self, client, owner_headers, todo_id):
        client.post("/api/todos", json={"title": "Other"}, headers=owner_headers)
        client.put(f"/api/todos/{todo_id}", json={"completed": True}, headers=owner_headers)

        response = client.get("/api/todos?completed=true", headers=owner_headers)

        assert [t["id"] for t in response.json()["data"]] == [todo_id]

    @pytest.mark.parametrize("query", ["limit=0", "limit=101", "page=0", "priority=urgent"])
    def test_list_bad_query(self, client, owner_headers, query):
        response = client.get(f"/api/todos?{query}", headers=owner_headers)
        assert response.status_code == 400

    def test_get(self, client, owner_headers, todo_id):
        response = client.get(f"/api/todos/{todo_id}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["data"]["id"] == todo_id

    def test_get_missing(self, client, owner_headers):
        response = client.get("/api/todos/does-not-exist", headers=owner_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Todo not found", "code": "TODO_NOT_FOUND"}

    def test_get_without_access(self, client, sharee_headers, todo_id):
        response = client.get(f"/api/todos/{todo_id}", headers=sharee_headers)

        assert response.status_code == 403
        assert response.json()["code"] == "TODO_ACCESS_DENIED"

    def test_update_partial(self, client, owner_headers, todo_id):
        response = client.put(
            f"/api/todos/{todo_id}", json={"completed": True}, headers=owner_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["completed"] is True
        assert data["title"] == "Buy milk"

    def test_update_null_title(self, client, owner_headers, todo_id):
        response = client.put(f"/api/todos/{todo_id}", json={"title": None}, headers=owner_headers)
        assert response.status_code == 400

    def test_delete(self, client, owner_headers, todo_id):
        response = client.delete(f"/api/todos/{todo_id}", headers=owner_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Todo deleted successfully"}
        assert client.get(f"/api/todos/{todo_id}", headers=owner_headers).status_code == 404


class TestShareEndpoints:
    def share(self, client, headers, todo_id, email=SHAREE_EMAIL, permission="view"):
        return client.post(
            f"/api/todos/{todo_id}/share",
            json={"email": email, "permission": permission},
            headers=headers,
        )

    def test_share(self, client, owner_headers, todo_id):
        response = self.share(client, owner_headers, todo_id, permission="edit")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Todo shared successfully"
        assert body["data"]["permission"] == "edit"
        assert body["data"]["shared_with"]["email"] == SHAREE_EMAIL

    def test_duplicate_share_is_400(self, client, owner_headers, todo_id):
        self.share(client, owner_headers, todo_id)
        response = self.share(client, owner_headers, todo_id, permission="edit")

        assert response.status_code == 400
        assert response.json()["code"] == "SHARE_ALREADY_EXISTS"

    def test_share_unknown_user(self, client, owner_headers, todo_id):
        response = self.share(client, owner_headers, todo_id, email="nobody@example.com")

        assert response.status_code == 404
        assert response.json()["error"] == "User not found"

    def test_share_with_self(self, client, owner_headers, todo_id):
        response = self.share(client, owner_headers, todo_id, email=OWNER_EMAIL)
        assert response.status_code == 400

    def test_share_invalid_email(self, client, owner_headers, todo_id):
        response = self.share(client, owner_headers, todo_id, email="not-an-email")

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "email"

    def test_sharee_cannot_list_shares(self, client, owner_headers, sharee_headers, todo_id):
        self.share(client, owner_headers, todo_id, permission="edit")

        response = client.get(f"/api/todos/{todo_id}/share", headers=sharee_headers)
        assert response.status_code == 403

    def test_list_shares(self, client, owner_headers, todo_id):
        self.share(client, owner_headers, todo_id)

        response = client.get(f"/api/todos/{todo_id}/share", headers=owner_headers)

        assert response.status_code == 200
        shares = response.json()["data"]
        assert len(shares) == 1
        assert shares[0]["shared_with"]["id"] == SHAREE_ID

    def test_update_share(self, client, owner_headers, todo_id):
        share_id = self.share(client, owner_headers, todo_id).json()["data"]["id"]

        response = client.patch(
            f"/api/todos/{todo_id}/share/{share_id}",
            json={"permission": "edit"},
            headers=owner_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["permission"] == "edit"

    def test_update_share_bad_permission(self, client, owner_headers, todo_id):
        share_id = self.share(client, owner_headers, todo_id).json()["data"]["id"]

        response = client.patch(
            f"/api/todos/{todo_id}/share/{share_id}",
            json={"permission": "admin"},
            headers=owner_headers,
        )
        assert response.status_code == 400

    def test_remove_share_by_sharee(self, client, owner_headers, sharee_headers, todo_id):
        share_id = self.share(client, owner_headers, todo_id).json()["data"]["id"]

        response = client.delete(f"/api/todos/{todo_id}/share/{share_id}", headers=sharee_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Share removed successfully"}

    def test_remove_missing_share(self, client, owner_headers, todo_id):
        response = client.delete(f"/api/todos/{todo_id}/share/missing", headers=owner_headers)
        assert response.status_code == 404

    def test_shared_with_me(self, client, owner_headers, sharee_headers, todo_id):
        share_id = self.share(client, owner_headers, todo_id).json()["data"]["id"]

        response = client.get("/api/todos/shared", headers=sharee_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["total"] == 1
        item = body["data"][0]
        assert item["id"] == todo_id
        assert item["share_id"] == share_id
        assert item["permission"] == "view"
        assert item["owner"]["email"] == OWNER_EMAIL
        assert "shared_at" in item
