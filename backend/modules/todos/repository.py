"""
Todo repository for database access.

Encapsulates all Supabase queries and data mapping for the tables:
- todos
- todo_shares (joined with profiles)
"""

from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.models import page_range
from shared.repository import BaseRepository, FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION
from .exceptions import ShareAlreadyExistsError, TodoNotFoundError
from .models import (
    Permission,
    Priority,
    ProfileSummary,
    SharedTodo,
    ShareWithProfile,
    Todo,
    TodoShare,
)

# Embedded select of a share with the sharee's profile
SHARE_WITH_PROFILE_COLUMNS = (
    "id, permission, created_at, "
    "shared_with:profiles!todo_shares_shared_with_id_fkey (id, email, name)"
)

# Inner join: shares whose todo is gone are neither returned nor counted
SHARED_TODO_COLUMNS = (
    "id, permission, created_at, "
    "todo:todos!inner (id, title, description, completed, priority, due_date, created_at, updated_at), "
    "owner:profiles!todo_shares_owner_id_fkey (id, email, name)"
)


# Constraint name in 23503 messages when the referenced todo no longer exists
TODO_FOREIGN_KEY = "todo_shares_todo_id_fkey"


class TodoRepository(BaseRepository[Todo]):
    """
    Repository for todo and share data access.

    All methods return Pydantic models with proper mapping from database rows.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership and shares.
    """

    # -------------------------------------------------------------------------
    # Todo operations
    # -------------------------------------------------------------------------

    def create_todo(self, data: dict[str, Any]) -> Todo:
        """
        Create a new todo record.

        Args:
            data: Dictionary with todo fields (user_id, title, priority, ...)

        Returns:
            Created Todo with generated ID and timestamps.
        """
        result = self._execute(self._db.table("todos").insert(data))
        return self._map_to_todo(result.data[0])

    def get_todo_by_id(self, todo_id: str) -> Optional[Todo]:
        """
        Get a todo by ID.

        Returns:
            Todo if found, None otherwise (including malformed IDs).
        """
        result = self._execute(
            self._db.table("todos").select("*").eq("id", todo_id),
            not_found_on_bad_id=True,
        )
        if result is None or not result.data:
            return None
        return self._map_to_todo(result.data[0])

    def list_todos(
        self,
        user_id: str,
        page: int,
        limit: int,
        completed: Optional[bool] = None,
        priority: Optional[Priority] = None,
    ) -> tuple[list[Todo], int]:
        """
        List todos owned by a user, newest first.

        Returns:
            Tuple of (todos on the requested page, total matching count).
        """
        start, end = page_range(page, limit)

        query = (
            self._db.table("todos")
            .select("*", count="exact")
            .eq("user_id", user_id)
        )
        if completed is not None:
            query = query.eq("completed", completed)
        if priority is not None:
            query = query.eq("priority", priority.value)

        result = self._execute(
            query.order("created_at", desc=True).range(start, end)
        )
        todos = [self._map_to_todo(row) for row in result.data]
        return todos, result.count or 0

    def update_todo(self, todo_id: str, data: dict[str, Any]) -> Optional[Todo]:
        """
        Update a todo.

        Returns:
            The updated Todo, or None if the row no longer exists.
        """
        result = self._execute(
            self._db.table("todos").update(data).eq("id", todo_id)
        )
        if not result.data:
            return None
        return self._map_to_todo(result.data[0])

    def delete_todo(self, todo_id: str) -> None:
        """
        Delete a todo.

        Note: Shares are deleted via ON DELETE CASCADE.
        """
        self._execute(self._db.table("todos").delete().eq("id", todo_id))

    # -------------------------------------------------------------------------
    # Share operations
    # -------------------------------------------------------------------------

    def get_share_for_user(self, todo_id: str, user_id: str) -> Optional[TodoShare]:
        """Get the share of a todo held by a given user, if any."""
        result = self._execute(
            self._db.table("todo_shares")
            .select("*")
            .eq("todo_id", todo_id)
            .eq("shared_with_id", user_id),
            not_found_on_bad_id=True,
        )
        if result is None or not result.data:
            return None
        return self._map_to_share(result.data[0])

    def get_share(self, share_id: str, todo_id: str) -> Optional[TodoShare]:
        """Get a share by ID, scoped to the todo it must belong to."""
        result = self._execute(
            self._db.table("todo_shares")
            .select("*")
            .eq("id", share_id)
            .eq("todo_id", todo_id),
            not_found_on_bad_id=True,
        )
        if result is None or not result.data:
            return None
        return self._map_to_share(result.data[0])

    def list_shares(self, todo_id: str) -> list[ShareWithProfile]:
        """List all shares of a todo with the sharee's profile."""
        result = self._execute(
            self._db.table("todo_shares")
            .select(SHARE_WITH_PROFILE_COLUMNS)
            .eq("todo_id", todo_id)
        )
        return [self._map_to_share_with_profile(row) for row in result.data]

    def create_share(
        self,
        todo_id: str,
        owner_id: str,
        shared_with_id: str,
        permission: Permission,
    ) -> ShareWithProfile:
        """
        Create a share and return it with the sharee's profile.

        Raises:
            ShareAlreadyExistsError: If (todo_id, shared_with_id) already exists,
                including when a concurrent request inserted it first.
            TodoNotFoundError: If the todo was deleted before the insert landed.
        """
        data = {
            "todo_id": todo_id,
            "owner_id": owner_id,
            "shared_with_id": shared_with_id,
            "permission": permission.value,
        }
        try:
            result = self._execute(
                self._db.table("todo_shares").insert(data),
                reraise=(UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION),
            )
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ShareAlreadyExistsError(todo_id, shared_with_id) from e
            # The todo was deleted after the ownership check
            if TODO_FOREIGN_KEY in (e.message or ""):
                raise TodoNotFoundError(todo_id) from e
            raise self._provider_error(e) from e

        share_id = str(result.data[0]["id"])
        joined = self._execute(
            self._db.table("todo_shares")
            .select(SHARE_WITH_PROFILE_COLUMNS)
            .eq("id", share_id)
        )
        return self._map_to_share_with_profile(joined.data[0])

    def update_share_permission(
        self,
        share_id: str,
        todo_id: str,
        permission: Permission,
    ) -> Optional[TodoShare]:
        """
        Change a share's permission.

        Returns:
            The updated share, or None if no share with that ID exists on the todo.
        """
        result = self._execute(
            self._db.table("todo_shares")
            .update({"permission": permission.value})
            .eq("id", share_id)
            .eq("todo_id", todo_id),
            not_found_on_bad_id=True,
        )
        if result is None or not result.data:
            return None
        return self._map_to_share(result.data[0])

    def delete_share(self, share_id: str) -> None:
        """Delete a share."""
        self._execute(self._db.table("todo_shares").delete().eq("id", share_id))

    def list_shared_with(
        self,
        user_id: str,
        page: int,
        limit: int,
    ) -> tuple[list[SharedTodo], int]:
        """
        List todos shared with a user, most recently shared first.

        Returns:
            Tuple of (shared todos on the requested page, total share count).
        """
        start, end = page_range(page, limit)

        result = self._execute(
            self._db.table("todo_shares")
            .select(SHARED_TODO_COLUMNS, count="exact")
            .eq("shared_with_id", user_id)
            .order("created_at", desc=True)
            .range(start, end)
        )
        items = [self._map_to_shared_todo(row) for row in result.data]
        return items, result.count or 0

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _map_to_todo(self, data: dict[str, Any]) -> Todo:
        """Map database row to Todo model."""
        return Todo(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            title=data["title"],
            description=data.get("description"),
            completed=data.get("completed", False),
            priority=Priority(data.get("priority") or Priority.MEDIUM.value),
            due_date=data.get("due_date"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    def _map_to_share(self, data: dict[str, Any]) -> TodoShare:
        """Map database row to TodoShare model."""
        return TodoShare(
            id=str(data["id"]),
            todo_id=str(data["todo_id"]),
            owner_id=str(data["owner_id"]),
            shared_with_id=str(data["shared_with_id"]),
            permission=Permission(data["permission"]),
            created_at=data["created_at"],
        )

    def _map_to_profile(self, data: Optional[dict[str, Any]]) -> Optional[ProfileSummary]:
        if not data:
            return None
        return ProfileSummary(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name"),
        )

    def _map_to_share_with_profile(self, data: dict[str, Any]) -> ShareWithProfile:
        """Map a share row with embedded sharee profile."""
        return ShareWithProfile(
            id=str(data["id"]),
            permission=Permission(data["permission"]),
            created_at=data["created_at"],
            shared_with=self._map_to_profile(data.get("shared_with")),
        )

    def _map_to_shared_todo(self, data: dict[str, Any]) -> SharedTodo:
        """Flatten a share row with embedded todo and owner into a SharedTodo."""
        todo = data["todo"]
        return SharedTodo(
            id=str(todo["id"]),
            title=todo["title"],
            description=todo.get("description"),
            completed=todo.get("completed", False),
            priority=Priority(todo.get("priority") or Priority.MEDIUM.value),
            due_date=todo.get("due_date"),
            created_at=todo["created_at"],
            updated_at=todo["updated_at"],
            owner=self._map_to_profile(data.get("owner")),
            permission=Permission(data["permission"]),
            share_id=str(data["id"]),
            shared_at=data["created_at"],
        )
