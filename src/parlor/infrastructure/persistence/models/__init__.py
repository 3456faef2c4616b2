"""SQLAlchemy models for Parlor.

All models inherit from the Base class defined in database.py and are
created on startup in development mode.
"""

from parlor.infrastructure.persistence.models.resources import (
    ChannelModel,
    DirectMessageGroupMemberModel,
    MessageModel,
)
from parlor.infrastructure.persistence.models.role import RoleModel
from parlor.infrastructure.persistence.models.user_role import UserRoleModel

__all__ = [
    "ChannelModel",
    "DirectMessageGroupMemberModel",
    "MessageModel",
    "RoleModel",
    "UserRoleModel",
]
