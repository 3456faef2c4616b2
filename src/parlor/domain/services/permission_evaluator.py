"""Permission evaluation service.

Answers "may user U perform actions A on resource R of kind K?". The user's
roles in the resolved scope are unioned and the required actions must all be
present. There is no explicit deny: any combination of roles that covers the
required set grants access. Anything that cannot be resolved is a denial.
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from parlor.core.logging import get_logger
from parlor.domain.entities import (
    Action,
    DirectMessageScope,
    ResourceKind,
    RoleScope,
    UserRoles,
    split_known_actions,
)
from parlor.domain.services.scope_resolver import ScopeResolver
from parlor.infrastructure.persistence.repositories import UserRoleRepository

logger = get_logger(__name__)


class PermissionEvaluator:
    """Evaluates set-membership permission checks.

    Deny by default: missing resources, unknown kinds, unknown actions and
    users without roles all yield False. Store failures propagate.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the evaluator.

        Args:
            session: Database session for role and resource lookups.
        """
        self.session = session
        self.resolver = ScopeResolver(session)
        self.user_role_repo = UserRoleRepository(session)

    async def verify(
        self,
        user_id: str,
        resource_id: str | None,
        resource_kind: ResourceKind | str | None,
        required_actions: Iterable[Action | str],
    ) -> bool:
        """Check whether a user holds every required action on a resource.

        Args:
            user_id: User to check.
            resource_id: Resource ID, or None for instance-level actions.
            resource_kind: Kind of the resource.
            required_actions: Actions that must all be granted.

        Returns:
            True if access is granted, False otherwise.
        """
        required, unknown = split_known_actions(required_actions)
        if unknown:
            logger.warning(
                "Permission denied: unknown actions requested",
                user_id=user_id,
                unknown_actions=unknown,
            )
            return False

        scope = await self.resolver.resolve_scope(resource_id, resource_kind)

        if scope is None:
            logger.debug(
                "Permission denied: resource scope not found",
                user_id=user_id,
                resource_id=resource_id,
                resource_kind=str(resource_kind),
            )
            return False

        if isinstance(scope, DirectMessageScope):
            is_member = await self.resolver.is_member(user_id, scope.group_id)
            if not is_member:
                logger.debug(
                    "Permission denied: not a DM group member",
                    user_id=user_id,
                    group_id=scope.group_id,
                )
            return is_member

        return await self._verify_in_scope(user_id, scope, required)

    async def get_granted_actions(self, user_id: str, scope: RoleScope) -> frozenset[Action]:
        """Get the union of actions granted by a user's roles in a scope."""
        assignments = await self.user_role_repo.list_for_user(user_id, scope)
        held = UserRoles(
            user_id=user_id,
            resource_id=scope.community_id,
            resource_kind=ResourceKind.INSTANCE if scope.is_instance else ResourceKind.COMMUNITY,
            roles=[a.role.to_entity() for a in assignments],
        )
        return held.actions

    async def _verify_in_scope(
        self, user_id: str, scope: RoleScope, required: set[Action]
    ) -> bool:
        granted = await self.get_granted_actions(user_id, scope)
        if not granted:
            logger.debug(
                "Permission denied: no roles in scope",
                user_id=user_id,
                scope=scope.key,
            )
            return False

        missing = required - granted
        if missing:
            logger.debug(
                "Permission denied: missing actions",
                user_id=user_id,
                scope=scope.key,
                missing=sorted(a.value for a in missing),
            )
            return False

        return True
