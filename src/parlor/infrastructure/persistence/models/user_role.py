"""SQLAlchemy model for the user_roles table.

An assignment row records that a user holds a role within a scope. The
``(user_id, role_id, scope_key)`` tuple is unique. Roles cannot be deleted
while assignments reference them.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from parlor.domain.entities import RoleScope, UserRoleAssignment
from parlor.infrastructure.persistence.database import Base


class UserRoleModel(Base):
    """SQLAlchemy model for the user_roles table.

    Attributes:
        id: UUID primary key.
        user_id: User holding the role.
        role_id: Foreign key to roles table (RESTRICT on delete).
        community_id: Community of the assignment, None for instance scope.
        is_instance_role: Whether the assignment is instance-scoped.
        scope_key: ``"instance"`` or ``"community:<id>"``.
        created_at: Timestamp when the assignment was created.
    """

    __tablename__ = "user_roles"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "role_id", "scope_key", name="uq_user_roles_user_role_scope"
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )
    role_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Foreign key to roles table",
    )
    community_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        index=True,
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
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    role: Mapped["RoleModel"] = relationship(  # noqa: F821
        "RoleModel",
        back_populates="assignments",
    )

    @classmethod
    def for_scope(cls, user_id: str, role_id: str, scope: RoleScope) -> "UserRoleModel":
        """Build an assignment row with the scope columns filled consistently."""
        return cls(
            id=str(uuid.uuid4()),
            user_id=user_id,
            role_id=role_id,
            community_id=scope.community_id,
            is_instance_role=scope.is_instance,
            scope_key=scope.key,
        )

    def to_entity(self, with_role: bool = False) -> UserRoleAssignment:
        """Convert the row to a domain entity.

        Args:
            with_role: Also convert the joined role. Only pass True when the
                relationship was eagerly loaded.
        """
        return UserRoleAssignment(
            id=self.id,
            user_id=self.user_id,
            role_id=self.role_id,
            scope=RoleScope.from_key(self.scope_key),
            role=self.role.to_entity() if with_role else None,
        )

    def __repr__(self) -> str:
        return (
            f"<UserRole(user_id={self.user_id}, role_id={self.role_id}, "
            f"scope={self.scope_key})>"
        )
