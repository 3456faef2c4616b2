"""Repository for user role assignments."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from parlor.domain.entities import RoleScope
from parlor.infrastructure.persistence.models import UserRoleModel


class UserRoleRepository:
    """Repository for user role assignment database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, assignment: UserRoleModel) -> UserRoleModel:
        """Create a new assignment.

        Args:
            assignment: Assignment model to create.

        Returns:
            Created assignment model.
        """
        self.session.add(assignment)
        await self.session.flush()
        return assignment

    async def find(
        self, user_id: str, role_id: str, scope: RoleScope
    ) -> UserRoleModel | None:
        """Find the assignment of a role to a user within a scope."""
        result = await self.session.execute(
            select(UserRoleModel).where(
                (UserRoleModel.user_id == user_id)
                & (UserRoleModel.role_id == role_id)
                & (UserRoleModel.scope_key == scope.key)
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: str, scope: RoleScope) -> list[UserRoleModel]:
        """List a user's assignments in a scope with their roles loaded.

        Args:
            user_id: User ID.
            scope: Community or instance scope.

        Returns:
            Assignment models with ``role`` eagerly loaded.
        """
        result = await self.session.execute(
            select(UserRoleModel)
            .options(selectinload(UserRoleModel.role))
            .where(
                (UserRoleModel.user_id == user_id)
                & (UserRoleModel.scope_key == scope.key)
            )
        )
        return list(result.scalars().all())

    async def list_user_ids_for_role(self, role_id: str, scope: RoleScope) -> list[str]:
        """List the IDs of users holding a role within a scope."""
        result = await self.session.execute(
            select(UserRoleModel.user_id)
            .where(
                (UserRoleModel.role_id == role_id)
                & (UserRoleModel.scope_key == scope.key)
            )
            .order_by(UserRoleModel.created_at, UserRoleModel.user_id)
        )
        return list(result.scalars().all())

    async def count_for_role(self, role_id: str) -> int:
        """Count every assignment referencing a role."""
        result = await self.session.execute(
            select(func.count())
            .select_from(UserRoleModel)
            .where(UserRoleModel.role_id == role_id)
        )
        return result.scalar_one()

    async def delete(self, assignment: UserRoleModel) -> None:
        """Delete an assignment."""
        await self.session.delete(assignment)
        await self.session.flush()
