"""
Todos module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class TodoNotFoundError(NotFoundError):
    """Raised when a todo does not exist."""

    def __init__(self, todo_id: str):
        super().__init__(
            "Todo not found",
            code="TODO_NOT_FOUND",
            details={"todo_id": todo_id},
        )


class ShareNotFoundError(NotFoundError):
    """Raised when a share does not exist on the given todo."""

    def __init__(self, share_id: str):
        super().__init__(
            "Share not found",
            code="SHARE_NOT_FOUND",
            details={"share_id": share_id},
        )


class ShareTargetNotFoundError(NotFoundError):
    """Raised when no user has the email a todo is being shared with."""

    def __init__(self, email: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"email": email},
        )


_DENIED_MESSAGES = {
    "read": "You do not have permission to access this todo",
    "edit": "You do not have permission to edit this todo",
    "delete": "Only the owner can delete this todo",
    "manage_shares": "Only the owner can manage shares of this todo",
    "remove_share": "You do not have permission to remove this share",
}


class TodoAccessDeniedError(AuthorizationError):
    """Raised when a user exists but lacks the right for an action on a todo."""

    def __init__(self, todo_id: str, user_id: str, action: str):
        super().__init__(
            _DENIED_MESSAGES.get(action, "Access denied"),
            code="TODO_ACCESS_DENIED",
            details={"todo_id": todo_id, "user_id": user_id, "action": action},
        )
        self.action = action


class CannotShareWithSelfError(ValidationError):
    """Raised when the owner tries to share a todo with themselves."""

    def __init__(self):
        super().__init__(
            "You cannot share a todo with yourself",
            code="CANNOT_SHARE_WITH_SELF",
        )


class ShareAlreadyExistsError(ConflictError):
    """Raised when the todo is already shared with the target user."""

    def __init__(self, todo_id: str, shared_with_id: str):
        super().__init__(
            "Todo is already shared with this user",
            code="SHARE_ALREADY_EXISTS",
            details={"todo_id": todo_id, "shared_with_id": shared_with_id},
        )
