"""Exceptions raised by the role and permission services."""

from collections.abc import Iterable


class AuthorizationError(Exception):
    """Base class for all role-management errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RoleNotFoundError(AuthorizationError):
    """Raised when a role or assignment does not exist in the given scope."""


class RoleValidationError(AuthorizationError):
    """Raised when role input is invalid (unknown actions, empty name...)."""

    def __init__(self, message: str, invalid_actions: Iterable[str] = ()) -> None:
        self.invalid_actions = list(invalid_actions)
        super().__init__(message)


class RoleConflictError(AuthorizationError):
    """Raised when a role name or assignment already exists in the scope."""


class RoleInvariantError(AuthorizationError):
    """Raised when an operation would break a role invariant."""

    def __init__(self, message: str, assigned_count: int = 0) -> None:
        self.assigned_count = assigned_count
        super().__init__(message)
