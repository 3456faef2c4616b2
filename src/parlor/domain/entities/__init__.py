"""Domain entities for Parlor.

Entities are pure Python dataclasses and enums that represent core
authorization concepts. They have no dependencies on infrastructure.
"""

from parlor.domain.entities.action import Action, split_known_actions
from parlor.domain.entities.role import Role, UserRoleAssignment, UserRoles
from parlor.domain.entities.scope import (
    INSTANCE_SCOPE,
    DirectMessageScope,
    ResourceKind,
    RoleScope,
)

__all__ = [
    "Action",
    "DirectMessageScope",
    "INSTANCE_SCOPE",
    "ResourceKind",
    "Role",
    "RoleScope",
    "UserRoleAssignment",
    "UserRoles",
    "split_known_actions",
]
