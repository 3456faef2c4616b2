"""Persistence repositories for database operations."""

from parlor.infrastructure.persistence.repositories.resource_repository import (
    MessageContainer,
    ResourceRepository,
)
from parlor.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from parlor.infrastructure.persistence.repositories.user_role_repository import (
    UserRoleRepository,
)

__all__ = [
    "MessageContainer",
    "ResourceRepository",
    "RoleRepository",
    "UserRoleRepository",
]
