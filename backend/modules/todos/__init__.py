"""
Todos module.

Handles todo CRUD, per-item sharing and the ownership/sharing
authorization rules.

Public API:
- ITodoService: Interface for todo operations
- Todo, TodoShare, SharedTodo: Records
- permissions: Pure authorization decisions
"""

from .interfaces import ITodoService
from .models import (
    Todo,
    TodoShare,
    SharedTodo,
    ShareWithProfile,
    ProfileSummary,
    Priority,
    Permission,
    CreateTodoRequest,
    UpdateTodoRequest,
    ShareTodoRequest,
    UpdateShareRequest,
)
from .exceptions import (
    TodoNotFoundError,
    ShareNotFoundError,
    ShareTargetNotFoundError,
    TodoAccessDeniedError,
    CannotShareWithSelfError,
    ShareAlreadyExistsError,
)

__all__ = [
    # Interface
    "ITodoService",
    # Models
    "Todo",
    "TodoShare",
    "SharedTodo",
    "ShareWithProfile",
    "ProfileSummary",
    "Priority",
    "Permission",
    "CreateTodoRequest",
    "UpdateTodoRequest",
    "ShareTodoRequest",
    "UpdateShareRequest",
    # Exceptions
    "TodoNotFoundError",
    "ShareNotFoundError",
    "ShareTargetNotFoundError",
    "TodoAccessDeniedError",
    "CannotShareWithSelfError",
    "ShareAlreadyExistsError",
]
