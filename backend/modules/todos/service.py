"""
Todos service implementation.

Orchestrates the repository, the auth module (for share target lookup)
and the permission rules. Authorization is always decided here, after
the todo is known to exist.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Any

from shared.models import Pagination

from . import permissions
from .interfaces import ITodoService
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
from .exceptions import (
    CannotShareWithSelfError,
    ShareNotFoundError,
    ShareTargetNotFoundError,
    TodoNotFoundError,
)
from .repository import TodoRepository

logger = logging.getLogger(__name__)


class TodoService(ITodoService):
    """
    Todo service with Supabase backend.

    Implements ITodoService on top of TodoRepository.
    """

    def __init__(
        self,
        repository: TodoRepository,
        auth: Any = None,  # IAuthService - injected
    ):
        self._repo = repository
        self._auth = auth

    # -------------------------------------------------------------------------
    # Todos
    # -------------------------------------------------------------------------

    async def list_todos(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
        completed: Optional[bool] = None,
        priority: Optional[Priority] = None,
    ) -> TodoListResponse:
        todos, total = self._repo.list_todos(user_id, page, limit, completed, priority)
        return TodoListResponse(
            data=todos,
            pagination=Pagination.build(page, limit, total),
        )

    async def create_todo(self, user_id: str, request: CreateTodoRequest) -> Todo:
        data = request.model_dump(mode="json", exclude_none=True)
        data["user_id"] = user_id
        todo = self._repo.create_todo(data)
        logger.info("Todo %s created by %s", todo.id, user_id)
        return todo

    async def get_todo(self, todo_id: str, user_id: str) -> Todo:
        todo = self._get_existing(todo_id)
        permissions.require_read(todo, user_id, self._share_of(todo, user_id))
        return todo

    async def update_todo(
        self,
        todo_id: str,
        user_id: str,
        request: UpdateTodoRequest,
    ) -> Todo:
        todo = self._get_existing(todo_id)
        permissions.require_edit(todo, user_id, self._share_of(todo, user_id))

        data = request.to_update_data()
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        updated = self._repo.update_todo(todo_id, data)
        if updated is None:
            # Deleted between the lookup and the update
            raise TodoNotFoundError(todo_id)

        logger.info("Todo %s updated by %s", todo_id, user_id)
        return updated

    async def delete_todo(self, todo_id: str, user_id: str) -> None:
        todo = self._get_existing(todo_id)
        permissions.require_delete(todo, user_id)

        self._repo.delete_todo(todo_id)
        logger.info("Todo %s deleted by %s", todo_id, user_id)

    # -------------------------------------------------------------------------
    # Shares
    # -------------------------------------------------------------------------

    async def list_shares(self, todo_id: str, user_id: str) -> list[ShareWithProfile]:
        todo = self._get_existing(todo_id)
        permissions.require_manage_shares(todo, user_id)
        return self._repo.list_shares(todo_id)

    async def share_todo(
        self,
        todo_id: str,
        user_id: str,
        request: ShareTodoRequest,
    ) -> ShareWithProfile:
        todo = self._get_existing(todo_id)
        permissions.require_manage_shares(todo, user_id)

        target = await self._auth.get_user_by_email(request.email)
        if target is None:
            raise ShareTargetNotFoundError(request.email)

        if target.id == user_id:
            raise CannotShareWithSelfError()

        share = self._repo.create_share(
            todo_id=todo_id,
            owner_id=todo.user_id,
            shared_with_id=target.id,
            permission=request.permission,
        )
        logger.info(
            "Todo %s shared with %s (%s)", todo_id, target.id, request.permission.value
        )
        return share

    async def update_share(
        self,
        todo_id: str,
        share_id: str,
        user_id: str,
        permission: Permission,
    ) -> TodoShare:
        todo = self._get_existing(todo_id)
        permissions.require_manage_shares(todo, user_id)

        share = self._repo.update_share_permission(share_id, todo_id, permission)
        if share is None:
            raise ShareNotFoundError(share_id)

        logger.info("Share %s on todo %s set to %s", share_id, todo_id, permission.value)
        return share

    async def remove_share(self, todo_id: str, share_id: str, user_id: str) -> None:
        todo = self._get_existing(todo_id)

        share = self._repo.get_share(share_id, todo_id)
        if share is None:
            raise ShareNotFoundError(share_id)

        permissions.require_remove_share(todo, share, user_id)

        self._repo.delete_share(share_id)
        logger.info("Share %s on todo %s removed by %s", share_id, todo_id, user_id)

    async def list_shared_with_me(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> SharedTodoListResponse:
        items, total = self._repo.list_shared_with(user_id, page, limit)
        return SharedTodoListResponse(
            data=items,
            pagination=Pagination.build(page, limit, total),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_existing(self, todo_id: str) -> Todo:
        todo = self._repo.get_todo_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError(todo_id)
        return todo

    def _share_of(self, todo: Todo, user_id: str) -> Optional[TodoShare]:
        """The caller's share on the todo; owners skip the lookup."""
        if permissions.is_owner(todo, user_id):
            return None
        return self._repo.get_share_for_user(todo.id, user_id)
