"""Authorization scopes and resource kinds.

A role or an assignment lives either in one community or in the instance.
Direct-message groups are a third kind of boundary: they carry no roles,
membership alone grants access.
"""

from dataclasses import dataclass
from enum import Enum

INSTANCE_SCOPE_KEY = "instance"
COMMUNITY_SCOPE_PREFIX = "community:"


class ResourceKind(str, Enum):
    """Kind of entity a resource id refers to."""

    INSTANCE = "INSTANCE"
    COMMUNITY = "COMMUNITY"
    CHANNEL = "CHANNEL"
    MESSAGE = "MESSAGE"
    DM_GROUP = "DM_GROUP"

    @classmethod
    def parse(cls, value: "ResourceKind | str | None") -> "ResourceKind | None":
        """Convert a loosely typed kind to a member, or None if unknown."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class RoleScope:
    """Scope of a role or assignment.

    ``community_id`` is None for the instance scope.
    """

    community_id: str | None = None

    @classmethod
    def instance(cls) -> "RoleScope":
        return cls(None)

    @classmethod
    def community(cls, community_id: str) -> "RoleScope":
        if not community_id:
            raise ValueError("Community ID is required for a community scope")
        return cls(community_id)

    @classmethod
    def from_key(cls, key: str) -> "RoleScope":
        """Rebuild a scope from its stored key."""
        if key == INSTANCE_SCOPE_KEY:
            return cls.instance()
        if key.startswith(COMMUNITY_SCOPE_PREFIX):
            return cls.community(key[len(COMMUNITY_SCOPE_PREFIX):])
        raise ValueError(f"Invalid scope key: {key!r}")

    @property
    def is_instance(self) -> bool:
        return self.community_id is None

    @property
    def key(self) -> str:
        """Stable key used for composite uniqueness in storage."""
        if self.community_id is None:
            return INSTANCE_SCOPE_KEY
        return f"{COMMUNITY_SCOPE_PREFIX}{self.community_id}"

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class DirectMessageScope:
    """Resolution result for resources governed by DM-group membership."""

    group_id: str


INSTANCE_SCOPE = RoleScope.instance()
