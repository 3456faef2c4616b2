"""Resource scope resolution.

Translates a resource reference into the scope whose roles govern it by
walking the containment hierarchy: channel to community, message to channel
or DM group. Resources that cannot be placed resolve to None, which callers
must treat as a denial.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from parlor.core.logging import get_logger
from parlor.domain.entities import (
    INSTANCE_SCOPE,
    DirectMessageScope,
    ResourceKind,
    RoleScope,
)
from parlor.infrastructure.persistence.repositories import ResourceRepository

logger = get_logger(__name__)

ResolvedScope = RoleScope | DirectMessageScope


class ScopeResolver:
    """Resolves resource references to authorization scopes.

    Stateless apart from the session used for reads; safe to share between
    concurrent permission checks that share a session.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the resolver.

        Args:
            session: Database session for resource lookups.
        """
        self.session = session
        self.resource_repo = ResourceRepository(session)

    async def resolve_scope(
        self,
        resource_id: str | None,
        resource_kind: ResourceKind | str | None,
    ) -> ResolvedScope | None:
        """Resolve a resource reference to its scope.

        Args:
            resource_id: Resource ID, or None for the instance.
            resource_kind: Kind of the resource. Unknown values resolve to None.

        Returns:
            RoleScope for community and instance resources, DirectMessageScope
            for DM groups and DM messages, None when the resource cannot be
            placed.
        """
        kind = ResourceKind.parse(resource_kind)

        if not resource_id or kind is ResourceKind.INSTANCE:
            return INSTANCE_SCOPE
        if kind is ResourceKind.COMMUNITY:
            return RoleScope.community(resource_id)
        if kind is ResourceKind.CHANNEL:
            return await self._resolve_channel(resource_id)
        if kind is ResourceKind.MESSAGE:
            return await self._resolve_message(resource_id)
        if kind is ResourceKind.DM_GROUP:
            return DirectMessageScope(group_id=resource_id)

        logger.debug(
            "Unknown resource kind",
            resource_id=resource_id,
            resource_kind=str(resource_kind),
        )
        return None

    async def _resolve_channel(self, channel_id: str) -> RoleScope | None:
        community_id = await self.resource_repo.get_channel_community_id(channel_id)
        if community_id is None:
            logger.debug("Channel not found", channel_id=channel_id)
            return None
        return RoleScope.community(community_id)

    async def _resolve_message(self, message_id: str) -> ResolvedScope | None:
        container = await self.resource_repo.get_message_container(message_id)
        if container is None:
            logger.debug("Message not found", message_id=message_id)
            return None

        # DM messages are authorized by group membership, never by role.
        if container.direct_message_group_id is not None:
            return DirectMessageScope(group_id=container.direct_message_group_id)

        if container.channel_id is None:
            logger.debug("Message has no container", message_id=message_id)
            return None
        if container.community_id is None:
            logger.debug(
                "Message channel not found",
                message_id=message_id,
                channel_id=container.channel_id,
            )
            return None
        return RoleScope.community(container.community_id)

    async def is_member(self, user_id: str, group_id: str) -> bool:
        """Check DM-group membership, which grants every DM action."""
        return await self.resource_repo.is_direct_message_group_member(user_id, group_id)
