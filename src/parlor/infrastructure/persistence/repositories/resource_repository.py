"""Read-only lookups over the resource containment hierarchy."""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parlor.infrastructure.persistence.models import (
    ChannelModel,
    DirectMessageGroupMemberModel,
    MessageModel,
)


@dataclass
class MessageContainer:
    """Where a message lives.

    Attributes:
        channel_id: Channel of the message, if posted in a channel.
        direct_message_group_id: DM group of the message, if any.
        community_id: Community of the channel, if the channel exists.
    """

    channel_id: str | None = None
    direct_message_group_id: str | None = None
    community_id: str | None = None


class ResourceRepository:
    """Repository answering containment questions about channels and messages."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_channel_community_id(self, channel_id: str) -> str | None:
        """Get the community that owns a channel.

        Args:
            channel_id: Channel ID.

        Returns:
            Community ID if the channel exists, None otherwise.
        """
        result = await self.session.execute(
            select(ChannelModel.community_id).where(ChannelModel.id == channel_id)
        )
        return result.scalar_one_or_none()

    async def get_message_container(self, message_id: str) -> MessageContainer | None:
        """Get the channel, DM group and community a message belongs to.

        Args:
            message_id: Message ID.

        Returns:
            MessageContainer if the message exists, None otherwise.
        """
        result = await self.session.execute(
            select(
                MessageModel.channel_id,
                MessageModel.direct_message_group_id,
                ChannelModel.community_id,
            )
            .outerjoin(ChannelModel, ChannelModel.id == MessageModel.channel_id)
            .where(MessageModel.id == message_id)
        )
        row = result.first()
        if row is None:
            return None
        return MessageContainer(
            channel_id=row.channel_id,
            direct_message_group_id=row.direct_message_group_id,
            community_id=row.community_id,
        )

    async def is_direct_message_group_member(self, user_id: str, group_id: str) -> bool:
        """Check whether a user belongs to a DM group."""
        result = await self.session.execute(
            select(DirectMessageGroupMemberModel.user_id).where(
                (DirectMessageGroupMemberModel.group_id == group_id)
                & (DirectMessageGroupMemberModel.user_id == user_id)
            )
        )
        return result.first() is not None
