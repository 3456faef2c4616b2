"""Role and assignment entities for authorization.

A role is a named, scoped bundle of actions. Default roles are created from
the built-in catalog; their actions may change but their name may not.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from parlor.domain.entities.action import Action
from parlor.domain.entities.scope import ResourceKind, RoleScope


@dataclass
class Role:
    """Role entity.

    Attributes:
        id: Unique identifier (UUID string).
        name: Role name, unique within its scope.
        actions: Actions granted by the role.
        scope: Community or instance scope. Immutable after creation.
        is_default: Whether the role was created from the default catalog.
        created_at: Timestamp when the role was created.
    """

    id: str
    name: str
    actions: frozenset[Action]
    scope: RoleScope
    is_default: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate role data after initialization."""
        if not self.id:
            raise ValueError("Role ID is required")
        if not self.name:
            raise ValueError("Role name is required")
        self.actions = frozenset(Action(a) for a in self.actions)


@dataclass
class UserRoleAssignment:
    """The fact that a user holds a role within a scope.

    Attributes:
        id: Unique identifier (UUID string).
        user_id: User holding the role.
        role_id: Role held.
        scope: Scope of the assignment, equal to the role's scope.
        role: The assigned role, when loaded together with the assignment.
    """

    id: str
    user_id: str
    role_id: str
    scope: RoleScope
    role: Role | None = None


@dataclass
class UserRoles:
    """Roles a user holds for a given resource."""

    user_id: str
    resource_id: str | None
    resource_kind: ResourceKind
    roles: list[Role] = field(default_factory=list)

    @property
    def actions(self) -> frozenset[Action]:
        """Union of the actions granted by every role."""
        granted: set[Action] = set()
        for role in self.roles:
            granted |= role.actions
        return frozenset(granted)
