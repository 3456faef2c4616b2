"""Action enumeration for role-based access control.

An action is an atomic permission symbol. Roles hold a flat set of actions;
the grouping below is informal and only mirrors the resource each action
usually applies to.
"""

from collections.abc import Iterable
from enum import Enum


class Action(str, Enum):
    """Every permission a role can grant."""

    # Communities
    CREATE_COMMUNITY = "CREATE_COMMUNITY"
    READ_COMMUNITY = "READ_COMMUNITY"
    UPDATE_COMMUNITY = "UPDATE_COMMUNITY"
    DELETE_COMMUNITY = "DELETE_COMMUNITY"

    # Channels
    CREATE_CHANNEL = "CREATE_CHANNEL"
    READ_CHANNEL = "READ_CHANNEL"
    UPDATE_CHANNEL = "UPDATE_CHANNEL"
    DELETE_CHANNEL = "DELETE_CHANNEL"
    JOIN_CHANNEL = "JOIN_CHANNEL"

    # Members
    CREATE_MEMBER = "CREATE_MEMBER"
    READ_MEMBER = "READ_MEMBER"
    UPDATE_MEMBER = "UPDATE_MEMBER"
    DELETE_MEMBER = "DELETE_MEMBER"

    # Messages
    CREATE_MESSAGE = "CREATE_MESSAGE"
    READ_MESSAGE = "READ_MESSAGE"
    UPDATE_MESSAGE = "UPDATE_MESSAGE"
    DELETE_MESSAGE = "DELETE_MESSAGE"
    DELETE_ANY_MESSAGE = "DELETE_ANY_MESSAGE"
    PIN_MESSAGE = "PIN_MESSAGE"
    UNPIN_MESSAGE = "UNPIN_MESSAGE"

    # Attachments and reactions
    CREATE_ATTACHMENT = "CREATE_ATTACHMENT"
    DELETE_ATTACHMENT = "DELETE_ATTACHMENT"
    CREATE_REACTION = "CREATE_REACTION"
    DELETE_REACTION = "DELETE_REACTION"

    # Roles
    CREATE_ROLE = "CREATE_ROLE"
    READ_ROLE = "READ_ROLE"
    UPDATE_ROLE = "UPDATE_ROLE"
    DELETE_ROLE = "DELETE_ROLE"

    # Community invites
    CREATE_INVITE = "CREATE_INVITE"
    DELETE_INVITE = "DELETE_INVITE"

    # Alias groups
    CREATE_ALIAS_GROUP = "CREATE_ALIAS_GROUP"
    READ_ALIAS_GROUP = "READ_ALIAS_GROUP"
    UPDATE_ALIAS_GROUP = "UPDATE_ALIAS_GROUP"
    DELETE_ALIAS_GROUP = "DELETE_ALIAS_GROUP"
    CREATE_ALIAS_GROUP_MEMBER = "CREATE_ALIAS_GROUP_MEMBER"
    READ_ALIAS_GROUP_MEMBER = "READ_ALIAS_GROUP_MEMBER"
    UPDATE_ALIAS_GROUP_MEMBER = "UPDATE_ALIAS_GROUP_MEMBER"
    DELETE_ALIAS_GROUP_MEMBER = "DELETE_ALIAS_GROUP_MEMBER"

    # Voice
    CAPTURE_REPLAY = "CAPTURE_REPLAY"

    # Moderation
    KICK_USER = "KICK_USER"
    TIMEOUT_USER = "TIMEOUT_USER"
    BAN_USER = "BAN_USER"
    UNBAN_USER = "UNBAN_USER"
    VIEW_BAN_LIST = "VIEW_BAN_LIST"
    VIEW_MODERATION_LOGS = "VIEW_MODERATION_LOGS"

    # Users
    CREATE_USER = "CREATE_USER"
    READ_USER = "READ_USER"
    UPDATE_USER = "UPDATE_USER"
    DELETE_USER = "DELETE_USER"
    MANAGE_USER_STORAGE = "MANAGE_USER_STORAGE"

    # Instance
    READ_INSTANCE_SETTINGS = "READ_INSTANCE_SETTINGS"
    UPDATE_INSTANCE_SETTINGS = "UPDATE_INSTANCE_SETTINGS"
    READ_INSTANCE_STATS = "READ_INSTANCE_STATS"
    CREATE_INSTANCE_INVITE = "CREATE_INSTANCE_INVITE"
    READ_INSTANCE_INVITE = "READ_INSTANCE_INVITE"
    UPDATE_INSTANCE_INVITE = "UPDATE_INSTANCE_INVITE"
    DELETE_INSTANCE_INVITE = "DELETE_INSTANCE_INVITE"


def split_known_actions(values: Iterable[str]) -> tuple[set[Action], list[str]]:
    """Partition raw action values into known actions and unknown strings.

    Args:
        values: Action names, either ``Action`` members or plain strings.

    Returns:
        Tuple of (known actions, unknown values in input order).
    """
    known: set[Action] = set()
    unknown: list[str] = []
    for value in values:
        try:
            known.add(Action(value))
        except ValueError:
            unknown.append(str(value))
    return known, unknown
