"""SQLAlchemy models for the resources the authorization core reads.

Channels, messages and direct-message memberships are owned by other parts
of the platform. Only the columns needed to walk the containment hierarchy
are mapped here: channel to community, and message to channel or DM group.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from parlor.infrastructure.persistence.database import Base


class ChannelModel(Base):
    """A text or voice channel inside a community."""

    __tablename__ = "channels"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    community_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, community_id={self.community_id})>"


class MessageModel(Base):
    """A message posted either in a channel or in a DM group."""

    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    channel_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    direct_message_group_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Message(id={self.id}, channel_id={self.channel_id}, "
            f"direct_message_group_id={self.direct_message_group_id})>"
        )


class DirectMessageGroupMemberModel(Base):
    """Membership of a user in a direct-message group."""

    __tablename__ = "direct_message_group_members"

    group_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), primary_key=True, index=True)

    def __repr__(self) -> str:
        return f"<DirectMessageGroupMember(group_id={self.group_id}, user_id={self.user_id})>"
