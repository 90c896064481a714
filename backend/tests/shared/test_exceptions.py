"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    TodoApiError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
)


class TestTodoApiError:
    def test_message(self):
        """TodoApiError should store message."""
        error = TodoApiError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """TodoApiError should default code to class name."""
        error = TodoApiError("Test error")
        assert error.code == "TodoApiError"

    def test_custom_code(self):
        error = TodoApiError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_default_details(self):
        error = TodoApiError("Test error")
        assert error.details == {}

    def test_to_dict(self):
        """TodoApiError should convert to dict."""
        error = TodoApiError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [
            NotFoundError,
            ValidationError,
            AuthenticationError,
            AuthorizationError,
            ConflictError,
        ],
    )
    def test_subclasses_base(self, exc_class):
        """All taxonomy errors should be catchable as TodoApiError."""
        error = exc_class("boom")
        assert isinstance(error, TodoApiError)
        assert error.code == exc_class.__name__


class TestExternalServiceError:
    def test_records_service(self):
        """ExternalServiceError should record the service in details."""
        error = ExternalServiceError("Database request failed", service="supabase")
        assert error.service == "supabase"
        assert error.details["service"] == "supabase"

    def test_keeps_other_details(self):
        error = ExternalServiceError(
            "Database request failed",
            service="supabase",
            details={"code": "XX000"},
        )
        assert error.details == {"code": "XX000", "service": "supabase"}
