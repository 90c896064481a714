"""
Todos module data models.

Records mirror the todos, todo_shares and profiles tables; request
models carry the validation rules for each mutating endpoint.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import Pagination


class Priority(str, Enum):
    """Todo priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Permission(str, Enum):
    """Access level granted by a share."""

    VIEW = "view"  # Read only
    EDIT = "edit"  # Read and update, never delete


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------


class Todo(BaseModel):
    """A to-do item. user_id is the owner and never changes."""

    id: str = Field(..., description="Todo ID (UUID)")
    user_id: str = Field(..., description="Owner user ID")
    title: str = Field(..., description="Title")
    description: Optional[str] = Field(None, description="Description")
    completed: bool = Field(default=False, description="Completion flag")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority")
    due_date: Optional[datetime] = Field(None, description="Due date")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")


class TodoShare(BaseModel):
    """A grant of access on one todo to one user."""

    id: str = Field(..., description="Share ID (UUID)")
    todo_id: str = Field(..., description="Shared todo ID")
    owner_id: str = Field(..., description="Todo owner at share time")
    shared_with_id: str = Field(..., description="Sharee user ID")
    permission: Permission = Field(default=Permission.VIEW)
    created_at: datetime = Field(..., description="When the share was created")


class ProfileSummary(BaseModel):
    """Public profile fields joined onto shares."""

    id: str
    email: str
    name: Optional[str] = None


class ShareWithProfile(BaseModel):
    """A share as seen by the todo owner, with the sharee's profile."""

    id: str
    permission: Permission
    created_at: datetime
    shared_with: Optional[ProfileSummary] = None


class SharedTodo(BaseModel):
    """A todo shared with the caller, annotated with owner and share info."""

    id: str
    title: str
    description: Optional[str] = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    owner: Optional[ProfileSummary] = None
    permission: Permission
    share_id: str
    shared_at: datetime


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CreateTodoRequest(BaseModel):
    """Request to create a todo."""

    title: str = Field(..., min_length=1, max_length=255, description="Title")
    description: Optional[str] = Field(None, max_length=1000, description="Description")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority")
    due_date: Optional[datetime] = Field(None, description="Due date (ISO 8601)")


class UpdateTodoRequest(BaseModel):
    """
    Partial update of a todo.

    Only fields present in the body are written. description and
    due_date may be set to null to clear them; the others may not.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None

    @field_validator("title", "completed", "priority", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    def to_update_data(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, JSON-ready."""
        return self.model_dump(mode="json", exclude_unset=True)


class ShareTodoRequest(BaseModel):
    """Request to share a todo with another user by email."""

    email: EmailStr = Field(..., description="Email of the user to share with")
    permission: Permission = Field(default=Permission.VIEW)


class UpdateShareRequest(BaseModel):
    """Request to change a share's permission."""

    permission: Permission = Field(..., description="New permission: view or edit")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class TodoResponse(BaseModel):
    data: Todo


class TodoListResponse(BaseModel):
    data: list[Todo]
    pagination: Pagination


class SharedTodoListResponse(BaseModel):
    data: list[SharedTodo]
    pagination: Pagination


class ShareListResponse(BaseModel):
    data: list[ShareWithProfile]


class ShareCreatedResponse(BaseModel):
    message: str
    data: ShareWithProfile


class ShareResponse(BaseModel):
    data: TodoShare
