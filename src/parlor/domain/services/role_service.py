"""Role lifecycle service.

Creates the default roles of communities and of the instance, manages
custom roles and user assignments, and enforces the role invariants:

- names are unique within a scope;
- default roles can have their actions changed but are never renamed or
  deleted;
- a role still assigned to a user cannot be deleted;
- a user holds a given role at most once per scope.

Single-role writes only flush, so the caller decides when to commit.
Community bootstrap and reset take an explicit UnitOfWork. The instance
bootstrap writes inside a savepoint of the caller's session.
"""

from collections.abc import Iterable

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from parlor.core.exceptions import (
    RoleConflictError,
    RoleInvariantError,
    RoleNotFoundError,
    RoleValidationError,
)
from parlor.core.logging import get_logger
from parlor.domain.entities import (
    INSTANCE_SCOPE,
    Action,
    ResourceKind,
    Role,
    RoleScope,
    UserRoleAssignment,
    UserRoles,
    split_known_actions,
)
from parlor.domain.schemas import CreateRoleRequest, UpdateRoleRequest
from parlor.domain.services.default_roles import (
    COMMUNITY_ADMIN_ROLE,
    MEMBER_ROLE,
    MODERATOR_ROLE,
    DefaultRoleTemplate,
    get_default_community_roles,
    get_default_instance_roles,
    get_template,
)
from parlor.infrastructure.persistence.database import UnitOfWork
from parlor.infrastructure.persistence.models import RoleModel, UserRoleModel
from parlor.infrastructure.persistence.repositories import (
    ResourceRepository,
    RoleRepository,
    UserRoleRepository,
)

logger = get_logger(__name__)


def _sorted_values(actions: Iterable[Action]) -> list[str]:
    return sorted(a.value for a in actions)


def _action_name(action: Action | str) -> str:
    return action.value if isinstance(action, Action) else str(action)


def _validation_message(error: ValidationError) -> str:
    return "; ".join(err["msg"] for err in error.errors())


class RoleService:
    """Service for role and assignment management."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the role service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.role_repo = RoleRepository(session)
        self.user_role_repo = UserRoleRepository(session)
        self.resource_repo = ResourceRepository(session)

    # Default roles

    async def bootstrap_community_roles(self, community_id: str, uow: UnitOfWork) -> str:
        """Create the default roles of a new community.

        Must be called exactly once per community, inside the unit of work
        that creates the community. A second call fails on name uniqueness.

        Args:
            community_id: ID of the community being created.
            uow: Unit of work of the community creation.

        Returns:
            ID of the Community Admin role, for assigning the creator.
        """
        scope = RoleScope.community(community_id)
        role_repo = RoleRepository(uow.session)

        created: dict[str, RoleModel] = {}
        for template in get_default_community_roles():
            created[template.name] = await role_repo.create(
                RoleModel.for_scope(
                    scope,
                    template.name,
                    _sorted_values(template.actions),
                    is_default=True,
                )
            )

        logger.info(
            "Default community roles created",
            community_id=community_id,
            roles=list(created),
        )
        return created[COMMUNITY_ADMIN_ROLE.name].id

    async def ensure_default_instance_roles_exist(self) -> list[str]:
        """Create any missing default instance role.

        Idempotent. The roles are written inside a savepoint: either all
        missing roles are flushed or none are, and other pending work in the
        session is left alone. The caller commits. Store failures are logged
        and swallowed so that process startup never fails because of this
        step.

        Returns:
            Names of the roles created by this call.
        """
        created: list[str] = []
        try:
            async with self.session.begin_nested():
                for template in get_default_instance_roles():
                    if await self.role_repo.get_by_name(template.name, INSTANCE_SCOPE):
                        continue
                    await self.role_repo.create(
                        RoleModel.for_scope(
                            INSTANCE_SCOPE,
                            template.name,
                            _sorted_values(template.actions),
                            is_default=True,
                        )
                    )
                    created.append(template.name)
        except Exception as e:
            logger.error(
                "Failed to ensure default instance roles",
                error=str(e),
                exc_info=True,
            )
            return []

        if created:
            logger.info("Default instance roles created", roles=created)
        else:
            logger.debug("Default instance roles already present")
        return created

    async def reset_default_community_roles(
        self, community_id: str, uow: UnitOfWork
    ) -> list[Role]:
        """Restore the default roles of a community to the catalog actions.

        Missing default roles are recreated. Custom roles and assignments
        are left untouched.

        Args:
            community_id: Community ID.
            uow: Unit of work for the multi-role write.

        Returns:
            Every role of the community after the reset.
        """
        scope = RoleScope.community(community_id)
        role_repo = RoleRepository(uow.session)

        for template in get_default_community_roles():
            role = await role_repo.get_by_name(template.name, scope)
            if role is None:
                await role_repo.create(
                    RoleModel.for_scope(
                        scope,
                        template.name,
                        _sorted_values(template.actions),
                        is_default=True,
                    )
                )
                continue
            role.actions = _sorted_values(template.actions)
            role.is_default = True
            await role_repo.update(role)

        logger.info("Default community roles reset", community_id=community_id)
        return [r.to_entity() for r in await role_repo.list_by_scope(scope)]

    # Role CRUD

    async def create_custom_role(
        self, scope: RoleScope, name: str, actions: Iterable[Action | str]
    ) -> Role:
        """Create a non-default role.

        Args:
            scope: Community or instance scope of the role.
            name: Role name.
            actions: Actions granted by the role.

        Returns:
            The created role.

        Raises:
            RoleValidationError: If the name is empty, no action is given or
                some actions are unknown.
            RoleConflictError: If the scope already has a role with that name.
        """
        try:
            request = CreateRoleRequest(
                name=name, actions=[_action_name(a) for a in actions]
            )
        except ValidationError as e:
            raise RoleValidationError(_validation_message(e)) from e

        valid_actions = self._validate_actions(request.actions)

        if await self.role_repo.name_exists(request.name, scope):
            raise RoleConflictError(
                f"Role '{request.name}' already exists in scope '{scope.key}'"
            )

        role = RoleModel.for_scope(scope, request.name, _sorted_values(valid_actions))
        try:
            await self.role_repo.create(role)
        except IntegrityError as e:
            await self.session.rollback()
            raise RoleConflictError(
                f"Role '{request.name}' already exists in scope '{scope.key}'"
            ) from e

        logger.info("Role created", role_id=role.id, name=role.name, scope=scope.key)
        return role.to_entity()

    async def get_role(self, role_id: str, scope: RoleScope) -> Role:
        """Get a role of a scope.

        Raises:
            RoleNotFoundError: If the role does not exist in the scope.
        """
        return (await self._get_role_in_scope(role_id, scope)).to_entity()

    async def get_roles(self, scope: RoleScope) -> list[Role]:
        """List every role of a community or of the instance."""
        return [r.to_entity() for r in await self.role_repo.list_by_scope(scope)]

    async def update_role(
        self,
        role_id: str,
        scope: RoleScope,
        patch: UpdateRoleRequest,
    ) -> Role:
        """Apply a partial update to a role.

        Args:
            role_id: Role ID.
            scope: Scope the role must belong to.
            patch: Fields to change. Unset fields are left untouched.

        Returns:
            The updated role.

        Raises:
            RoleNotFoundError: If the role does not exist in the scope.
            RoleValidationError: If some actions are unknown.
            RoleInvariantError: If the patch names a default role, even with
                its current name.
            RoleConflictError: If the new name is taken in the scope.
        """
        role = await self._get_role_in_scope(role_id, scope)
        changes = patch.changes()

        new_actions = None
        if "actions" in changes:
            new_actions = _sorted_values(self._validate_actions(patch.actions or []))

        if "name" in changes and role.is_default:
            raise RoleInvariantError(f"Default role '{role.name}' cannot be renamed")

        rename = "name" in changes and patch.name != role.name
        if rename and await self.role_repo.name_exists(patch.name, scope, exclude_id=role.id):
            raise RoleConflictError(
                f"Role '{patch.name}' already exists in scope '{scope.key}'"
            )

        # Nothing is touched until every check has passed
        if new_actions is not None:
            role.actions = new_actions
        if rename:
            role.name = patch.name

        try:
            await self.role_repo.update(role)
        except IntegrityError as e:
            await self.session.rollback()
            raise RoleConflictError(
                f"Role '{patch.name}' already exists in scope '{scope.key}'"
            ) from e

        logger.info(
            "Role updated",
            role_id=role.id,
            scope=scope.key,
            fields=sorted(changes),
        )
        return role.to_entity()

    async def delete_role(self, role_id: str, scope: RoleScope) -> None:
        """Delete a custom role that nobody holds.

        Raises:
            RoleNotFoundError: If the role does not exist in the scope.
            RoleInvariantError: If the role is a default role or still
                assigned to users.
        """
        role = await self._get_role_in_scope(role_id, scope)

        if role.is_default:
            raise RoleInvariantError(f"Default role '{role.name}' cannot be deleted")

        assigned = await self.user_role_repo.count_for_role(role.id)
        if assigned > 0:
            raise RoleInvariantError(
                f"Role '{role.name}' is assigned to {assigned} user(s); "
                "remove the assignments first",
                assigned_count=assigned,
            )

        await self.role_repo.delete(role)
        logger.info("Role deleted", role_id=role_id, scope=scope.key)

    # Assignments

    async def assign_user_to_role(
        self, user_id: str, role_id: str, scope: RoleScope
    ) -> UserRoleAssignment:
        """Give a user a role within its scope.

        Raises:
            RoleNotFoundError: If the role does not exist in the scope.
            RoleConflictError: If the user already holds the role there.
        """
        role = await self._get_role_in_scope(role_id, scope)

        if await self.user_role_repo.find(user_id, role.id, scope):
            raise RoleConflictError(
                f"User '{user_id}' already has role '{role.name}' in scope '{scope.key}'"
            )

        assignment = UserRoleModel.for_scope(user_id, role.id, scope)
        try:
            await self.user_role_repo.create(assignment)
        except IntegrityError as e:
            await self.session.rollback()
            raise RoleConflictError(
                f"User '{user_id}' already has role '{role.name}' in scope '{scope.key}'"
            ) from e

        logger.info(
            "User assigned to role",
            user_id=user_id,
            role_id=role.id,
            scope=scope.key,
        )
        return assignment.to_entity()

    async def remove_user_from_role(
        self, user_id: str, role_id: str, scope: RoleScope
    ) -> None:
        """Remove a role from a user.

        Raises:
            RoleNotFoundError: If the assignment does not exist.
        """
        assignment = await self.user_role_repo.find(user_id, role_id, scope)
        if assignment is None:
            raise RoleNotFoundError(
                f"User '{user_id}' does not have role '{role_id}' in scope '{scope.key}'"
            )

        await self.user_role_repo.delete(assignment)
        logger.info(
            "User removed from role",
            user_id=user_id,
            role_id=role_id,
            scope=scope.key,
        )

    # Queries

    async def get_user_roles_for_community(self, user_id: str, community_id: str) -> UserRoles:
        """Get the roles a user holds in a community."""
        roles = await self._roles_held(user_id, RoleScope.community(community_id))
        return UserRoles(
            user_id=user_id,
            resource_id=community_id,
            resource_kind=ResourceKind.COMMUNITY,
            roles=roles,
        )

    async def get_user_roles_for_channel(self, user_id: str, channel_id: str) -> UserRoles:
        """Get the roles a user holds in the community of a channel.

        Returns no roles if the channel does not exist.
        """
        result = UserRoles(
            user_id=user_id,
            resource_id=channel_id,
            resource_kind=ResourceKind.CHANNEL,
        )
        community_id = await self.resource_repo.get_channel_community_id(channel_id)
        if community_id is not None:
            result.roles = await self._roles_held(user_id, RoleScope.community(community_id))
        return result

    async def get_user_instance_roles(self, user_id: str) -> UserRoles:
        """Get the instance roles a user holds."""
        return UserRoles(
            user_id=user_id,
            resource_id=None,
            resource_kind=ResourceKind.INSTANCE,
            roles=await self._roles_held(user_id, INSTANCE_SCOPE),
        )

    async def get_users_for_role(self, role_id: str, scope: RoleScope) -> list[str]:
        """Get the IDs of users holding a role.

        Raises:
            RoleNotFoundError: If the role does not exist in the scope.
        """
        role = await self._get_role_in_scope(role_id, scope)
        return await self.user_role_repo.list_user_ids_for_role(role.id, scope)

    async def get_community_admin_role(self, community_id: str) -> Role | None:
        return await self._get_default_role(COMMUNITY_ADMIN_ROLE, RoleScope.community(community_id))

    async def get_community_moderator_role(self, community_id: str) -> Role | None:
        return await self._get_default_role(MODERATOR_ROLE, RoleScope.community(community_id))

    async def get_community_member_role(self, community_id: str) -> Role | None:
        return await self._get_default_role(MEMBER_ROLE, RoleScope.community(community_id))

    async def get_instance_default_role(self, name: str) -> Role | None:
        """Get a default instance role by template name, if it exists."""
        template = get_template(name)
        if template is None or template not in get_default_instance_roles():
            return None
        return await self._get_default_role(template, INSTANCE_SCOPE)

    # Helpers

    async def _get_default_role(
        self, template: DefaultRoleTemplate, scope: RoleScope
    ) -> Role | None:
        role = await self.role_repo.get_by_name(template.name, scope)
        return role.to_entity() if role else None

    async def _get_role_in_scope(self, role_id: str, scope: RoleScope) -> RoleModel:
        role = await self.role_repo.get_by_id(role_id)
        if role is None or role.scope_key != scope.key:
            raise RoleNotFoundError(f"Role '{role_id}' not found in scope '{scope.key}'")
        return role

    async def _roles_held(self, user_id: str, scope: RoleScope) -> list[Role]:
        assignments = await self.user_role_repo.list_for_user(user_id, scope)
        return [a.role.to_entity() for a in assignments]

    @staticmethod
    def _validate_actions(values: Iterable[str]) -> set[Action]:
        known, unknown = split_known_actions(values)
        if unknown:
            raise RoleValidationError(
                f"Invalid actions: {', '.join(unknown)}",
                invalid_actions=unknown,
            )
        if not known:
            raise RoleValidationError("A role must grant at least one action")
        return known
