"""Role repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parlor.domain.entities import RoleScope
from parlor.infrastructure.persistence.models import RoleModel


class RoleRepository:
    """Repository for role database operations.

    Writes only flush; the surrounding unit of work commits.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, role: RoleModel) -> RoleModel:
        """Create a new role.

        Args:
            role: Role model to create.

        Returns:
            Created role model.
        """
        self.session.add(role)
        await self.session.flush()
        return role

    async def get_by_id(self, role_id: str) -> RoleModel | None:
        """Get a role by ID.

        Args:
            role_id: Role ID.

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel).where(RoleModel.id == role_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str, scope: RoleScope) -> RoleModel | None:
        """Get a role by name within a scope.

        Args:
            name: Role name.
            scope: Community or instance scope.

        Returns:
            Role model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RoleModel).where(
                (RoleModel.scope_key == scope.key) & (RoleModel.name == name)
            )
        )
        return result.scalar_one_or_none()

    async def name_exists(
        self, name: str, scope: RoleScope, exclude_id: str | None = None
    ) -> bool:
        """Check whether another role in the scope already uses a name.

        Args:
            name: Role name.
            scope: Community or instance scope.
            exclude_id: Role ID to ignore, used when renaming.

        Returns:
            True if the name is taken.
        """
        query = select(RoleModel.id).where(
            (RoleModel.scope_key == scope.key) & (RoleModel.name == name)
        )
        if exclude_id is not None:
            query = query.where(RoleModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.first() is not None

    async def list_by_scope(self, scope: RoleScope) -> list[RoleModel]:
        """List every role of a scope, default roles first."""
        result = await self.session.execute(
            select(RoleModel)
            .where(RoleModel.scope_key == scope.key)
            .order_by(RoleModel.is_default.desc(), RoleModel.created_at, RoleModel.name)
        )
        return list(result.scalars().all())

    async def update(self, role: RoleModel) -> RoleModel:
        """Persist changes made to a role."""
        if role not in self.session:
            self.session.add(role)
        await self.session.flush()
        return role

    async def delete(self, role: RoleModel) -> None:
        """Delete a role. Assignments are never removed implicitly."""
        await self.session.delete(role)
        await self.session.flush()
