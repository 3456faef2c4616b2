"""SQLAlchemy model for the roles table.

Roles live either in a single community or in the instance. Names are unique
per scope through the ``(scope_key, name)`` composite constraint.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parlor.domain.entities import Action, Role, RoleScope
from parlor.infrastructure.persistence.database import Base


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: UUID primary key.
        name: Role name, unique within its scope.
        actions: JSON list of action names.
        community_id: Owning community, None for instance roles.
        is_instance_role: Whether the role is instance-scoped.
        scope_key: ``"instance"`` or ``"community:<id>"``.
        is_default: Whether the role was created from the default catalog.
        created_at: Timestamp when the role was created.
    """

    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("scope_key", "name", name="uq_roles_scope_key_name"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Role name (unique within scope)",
    )
    actions: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Granted action names",
    )
    community_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        index=True,
        comment="Owning community (NULL for instance roles)",
    )
    is_instance_role: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    scope_key: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Composite scope key used for uniqueness",
    )
    is_default: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    assignments: Mapped[list["UserRoleModel"]] = relationship(  # noqa: F821
        "UserRoleModel",
        back_populates="role",
        passive_deletes="all",
    )

    @classmethod
    def for_scope(
        cls,
        scope: RoleScope,
        name: str,
        actions: list[str],
        is_default: bool = False,
    ) -> "RoleModel":
        """Build a role row with the scope columns filled consistently."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            actions=actions,
            community_id=scope.community_id,
            is_instance_role=scope.is_instance,
            scope_key=scope.key,
            is_default=is_default,
        )

    @property
    def scope(self) -> RoleScope:
        return RoleScope.from_key(self.scope_key)

    def to_entity(self) -> Role:
        """Convert the row to a domain entity, skipping unknown action names."""
        known = [a for a in self.actions if a in Action.__members__]
        return Role(
            id=self.id,
            name=self.name,
            actions=frozenset(Action(a) for a in known),
            scope=self.scope,
            is_default=self.is_default,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name}, scope={self.scope_key})>"
