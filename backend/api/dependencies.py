"""
Service wiring for route handlers.

Routes depend on get_auth_service / get_todo_service; both resolve through
one process-wide ServiceContainer that builds the concrete Supabase-backed
implementations on first use. Tests either reset the container or replace
the dependency with app.dependency_overrides.
"""

from typing import TYPE_CHECKING, Optional

# Imported for annotations only; the concrete modules import this one
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.todos.interfaces import ITodoService
    from modules.todos.repository import TodoRepository


class ServiceContainer:
    """Lazily built, cached service graph: auth -> todo repository -> todos."""

    def __init__(self) -> None:
        self._auth: Optional["IAuthService"] = None
        self._todo_repository: Optional["TodoRepository"] = None
        self._todos: Optional["ITodoService"] = None

    @property
    def auth(self) -> "IAuthService":
        if self._auth is None:
            from modules.auth.service import AuthService
            self._auth = AuthService()
        return self._auth

    @property
    def todo_repository(self) -> "TodoRepository":
        if self._todo_repository is None:
            from modules.todos.repository import TodoRepository
            from shared.database import get_supabase_client
            self._todo_repository = TodoRepository(get_supabase_client())
        return self._todo_repository

    @property
    def todos(self) -> "ITodoService":
        # Share targets are resolved by email through the auth service
        if self._todos is None:
            from modules.todos.service import TodoService
            self._todos = TodoService(repository=self.todo_repository, auth=self.auth)
        return self._todos

    def reset(self) -> None:
        self._auth = None
        self._todo_repository = None
        self._todos = None


_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """Forget every built service; the next request rebuilds them."""
    global _container
    _container = None


def get_auth_service() -> "IAuthService":
    return get_container().auth


def get_todo_service() -> "ITodoService":
    return get_container().todos
