"""
Todo API endpoints.

Provides REST endpoints for todo CRUD, sharing, and the
shared-with-me listing.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_todo_service
from shared.models import AuthenticatedUser, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MessageResponse

from .interfaces import ITodoService
from .models import (
    CreateTodoRequest,
    Priority,
    ShareCreatedResponse,
    SharedTodoListResponse,
    ShareListResponse,
    ShareResponse,
    ShareTodoRequest,
    TodoListResponse,
    TodoResponse,
    UpdateShareRequest,
    UpdateTodoRequest,
)

router = APIRouter()


@router.get("", response_model=TodoListResponse)
async def list_todos(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    completed: Optional[bool] = Query(default=None, description="Filter by completion"),
    priority: Optional[Priority] = Query(default=None, description="Filter by priority"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> TodoListResponse:
    """
    List the current user's todos.

    Returns paginated results, most recent first.
    """
    return await service.list_todos(user.id, page, limit, completed, priority)


@router.post("", response_model=TodoResponse, status_code=201)
async def create_todo(
    request: CreateTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Create a new todo owned by the current user."""
    todo = await service.create_todo(user.id, request)
    return TodoResponse(data=todo)


@router.get("/shared", response_model=SharedTodoListResponse)
async def list_shared_with_me(
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> SharedTodoListResponse:
    """
    List todos other users have shared with the current user.

    Each item carries the owner, the granted permission, and the share's
    id and creation time.
    """
    return await service.list_shared_with_me(user.id, page, limit)


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_todo(
    todo_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Get a todo the current user owns or has been shared."""
    todo = await service.get_todo(todo_id, user.id)
    return TodoResponse(data=todo)


@router.put("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    request: UpdateTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> TodoResponse:
    """
    Update a todo.

    Allowed for the owner and for users holding an edit share.
    """
    todo = await service.update_todo(todo_id, user.id, request)
    return TodoResponse(data=todo)


@router.delete("/{todo_id}", response_model=MessageResponse)
async def delete_todo(
    todo_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> MessageResponse:
    """
    Delete a todo and all of its shares.

    Only the owner may delete.
    """
    await service.delete_todo(todo_id, user.id)
    return MessageResponse(message="Todo deleted successfully")


@router.get("/{todo_id}/share", response_model=ShareListResponse)
async def list_shares(
    todo_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ShareListResponse:
    """List the shares of a todo (owner only)."""
    shares = await service.list_shares(todo_id, user.id)
    return ShareListResponse(data=shares)


@router.post("/{todo_id}/share", response_model=ShareCreatedResponse, status_code=201)
async def share_todo(
    todo_id: str,
    request: ShareTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ShareCreatedResponse:
    """
    Share a todo with another user by email (owner only).

    Sharing twice with the same user returns 400.
    """
    share = await service.share_todo(todo_id, user.id, request)
    return ShareCreatedResponse(message="Todo shared successfully", data=share)


@router.patch("/{todo_id}/share/{share_id}", response_model=ShareResponse)
async def update_share(
    todo_id: str,
    share_id: str,
    request: UpdateShareRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> ShareResponse:
    """Change a share's permission (owner only)."""
    share = await service.update_share(todo_id, share_id, user.id, request.permission)
    return ShareResponse(data=share)


@router.delete("/{todo_id}/share/{share_id}", response_model=MessageResponse)
async def remove_share(
    todo_id: str,
    share_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> MessageResponse:
    """
    Remove a share.

    The owner may remove any share; a sharee may remove their own.
    """
    await service.remove_share(todo_id, share_id, user.id)
    return MessageResponse(message="Share removed successfully")
