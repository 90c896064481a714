"""
Todos module interface.

The API layer depends on ITodoService for all todo and sharing operations.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    CreateTodoRequest,
    Permission,
    Priority,
    SharedTodoListResponse,
    ShareTodoRequest,
    ShareWithProfile,
    Todo,
    TodoListResponse,
    TodoShare,
    UpdateTodoRequest,
)


@runtime_checkable
class ITodoService(Protocol):
    """
    Interface for todo operations.

    Every method that takes a todo_id checks existence before permission:
    a missing todo raises NotFoundError, an existing one the caller may
    not touch raises AuthorizationError.
    """

    async def list_todos(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        completed: Optional[bool] = None,
        priority: Optional[Priority] = None,
    ) -> TodoListResponse:
        """
        List todos owned by the user, newest first.

        Args:
            user_id: Owner ID
            page: Page number (1-indexed)
            limit: Items per page (at most 100)
            completed: Optional completion filter
            priority: Optional priority filter
        """
        ...

    async def create_todo(self, user_id: str, request: CreateTodoRequest) -> Todo:
        """Create a todo owned by the user."""
        ...

    async def get_todo(self, todo_id: str, user_id: str) -> Todo:
        """Get a todo the user owns or has been shared."""
        ...

    async def update_todo(
        self,
        todo_id: str,
        user_id: str,
        request: UpdateTodoRequest,
    ) -> Todo:
        """Update a todo the user owns or holds an edit share on."""
        ...

    async def delete_todo(self, todo_id: str, user_id: str) -> None:
        """Delete a todo (owner only). Its shares go with it."""
        ...

    async def list_shares(self, todo_id: str, user_id: str) -> list[ShareWithProfile]:
        """List shares of a todo (owner only)."""
        ...

    async def share_todo(
        self,
        todo_id: str,
        user_id: str,
        request: ShareTodoRequest,
    ) -> ShareWithProfile:
        """
        Share a todo with another user by email (owner only).

        Raises:
            ShareTargetNotFoundError: If no user has that email
            CannotShareWithSelfError: If the target is the caller
            ShareAlreadyExistsError: If the todo is already shared with the target
        """
        ...

    async def update_share(
        self,
        todo_id: str,
        share_id: str,
        user_id: str,
        permission: Permission,
    ) -> TodoShare:
        """Change the permission of a share (owner only)."""
        ...

    async def remove_share(self, todo_id: str, share_id: str, user_id: str) -> None:
        """Remove a share (owner, or the sharee themselves)."""
        ...

    async def list_shared_with_me(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> SharedTodoListResponse:
        """List todos shared with the user, most recently shared first."""
        ...
