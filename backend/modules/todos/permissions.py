"""
Authorization rules for todos and their shares.

Pure decision functions over plain records: the todo, the requester's id
and, where relevant, the requester's own share on that todo. Nothing here
touches the database; the service looks the records up and calls in.

The service-role Supabase client bypasses row-level security, so these
functions are the only thing standing between a caller and another
user's todo.
"""

from typing import Optional

from .exceptions import TodoAccessDeniedError
from .models import Permission, Todo, TodoShare


def is_owner(todo: Todo, requester_id: str) -> bool:
    return todo.user_id == requester_id


def _grants(todo: Todo, requester_id: str, share: Optional[TodoShare]) -> bool:
    """Whether the share is the requester's share on this very todo."""
    return (
        share is not None
        and share.todo_id == todo.id
        and share.shared_with_id == requester_id
    )


def can_read(todo: Todo, requester_id: str, share: Optional[TodoShare] = None) -> bool:
    """Owner, or any share on the todo held by the requester."""
    return is_owner(todo, requester_id) or _grants(todo, requester_id, share)


def can_edit(todo: Todo, requester_id: str, share: Optional[TodoShare] = None) -> bool:
    """Owner, or an edit share held by the requester."""
    if is_owner(todo, requester_id):
        return True
    return _grants(todo, requester_id, share) and share.permission == Permission.EDIT


def can_delete(todo: Todo, requester_id: str) -> bool:
    """Owner only. No share level grants delete."""
    return is_owner(todo, requester_id)


def can_manage_shares(todo: Todo, requester_id: str) -> bool:
    """Owner only: list shares, create them, change their permission."""
    return is_owner(todo, requester_id)


def can_remove_share(todo: Todo, share: TodoShare, requester_id: str) -> bool:
    """The owner, or the sharee removing their own access."""
    if share.todo_id != todo.id:
        return False
    return is_owner(todo, requester_id) or share.shared_with_id == requester_id


# -----------------------------------------------------------------------------
# Enforcing variants
# -----------------------------------------------------------------------------


def require_read(todo: Todo, requester_id: str, share: Optional[TodoShare] = None) -> None:
    if not can_read(todo, requester_id, share):
        raise TodoAccessDeniedError(todo.id, requester_id, "read")


def require_edit(todo: Todo, requester_id: str, share: Optional[TodoShare] = None) -> None:
    if not can_edit(todo, requester_id, share):
        raise TodoAccessDeniedError(todo.id, requester_id, "edit")


def require_delete(todo: Todo, requester_id: str) -> None:
    if not can_delete(todo, requester_id):
        raise TodoAccessDeniedError(todo.id, requester_id, "delete")


def require_manage_shares(todo: Todo, requester_id: str) -> None:
    if not can_manage_shares(todo, requester_id):
        raise TodoAccessDeniedError(todo.id, requester_id, "manage_shares")


def require_remove_share(todo: Todo, share: TodoShare, requester_id: str) -> None:
    if not can_remove_share(todo, share, requester_id):
        raise TodoAccessDeniedError(todo.id, requester_id, "remove_share")
