"""Built-in role templates.

Community templates form a chain (Member within Moderator within Community
Admin); each tier is built from the previous one so the chain cannot drift.
Instance templates are independent bundles. The catalog is read-only data
consulted when roles are created or reset.
"""

from dataclasses import dataclass

from parlor.domain.entities.action import Action


@dataclass(frozen=True)
class DefaultRoleTemplate:
    """Immutable template for a built-in role.

    Attributes:
        name: Role name used for every role created from the template.
        actions: Actions granted by the template.
    """

    name: str
    actions: frozenset[Action]


_MEMBER_ACTIONS = frozenset(
    {
        Action.READ_COMMUNITY,
        Action.READ_CHANNEL,
        Action.READ_MEMBER,
        Action.READ_MESSAGE,
        Action.CREATE_MESSAGE,
        Action.JOIN_CHANNEL,
        Action.CREATE_REACTION,
        Action.DELETE_REACTION,
        Action.READ_ALIAS_GROUP,
        Action.READ_ALIAS_GROUP_MEMBER,
        Action.CAPTURE_REPLAY,
    }
)

_MODERATOR_ACTIONS = _MEMBER_ACTIONS | {
    Action.READ_ROLE,
    Action.DELETE_MESSAGE,
    Action.CREATE_CHANNEL,
    Action.UPDATE_CHANNEL,
    Action.CREATE_MEMBER,
    Action.UPDATE_MEMBER,
    # Moderation without unban or logs
    Action.KICK_USER,
    Action.TIMEOUT_USER,
    Action.PIN_MESSAGE,
    Action.UNPIN_MESSAGE,
    Action.DELETE_ANY_MESSAGE,
    Action.VIEW_BAN_LIST,
}

# Full management of a community, shared with the Community Creator role.
_COMMUNITY_MANAGEMENT_ACTIONS = _MODERATOR_ACTIONS | {
    Action.DELETE_CHANNEL,
    Action.DELETE_MEMBER,
    Action.CREATE_ROLE,
    Action.UPDATE_ROLE,
    Action.DELETE_ROLE,
    Action.CREATE_INVITE,
    Action.DELETE_INVITE,
    Action.CREATE_ALIAS_GROUP,
    Action.UPDATE_ALIAS_GROUP,
    Action.DELETE_ALIAS_GROUP,
    Action.CREATE_ALIAS_GROUP_MEMBER,
    Action.DELETE_ALIAS_GROUP_MEMBER,
    Action.UNBAN_USER,
    Action.VIEW_MODERATION_LOGS,
}

COMMUNITY_ADMIN_ROLE = DefaultRoleTemplate(
    name="Community Admin",
    actions=_COMMUNITY_MANAGEMENT_ACTIONS
    | {Action.UPDATE_COMMUNITY, Action.DELETE_COMMUNITY},
)

MODERATOR_ROLE = DefaultRoleTemplate(name="Moderator", actions=_MODERATOR_ACTIONS)

MEMBER_ROLE = DefaultRoleTemplate(name="Member", actions=_MEMBER_ACTIONS)

INSTANCE_ADMIN_ROLE = DefaultRoleTemplate(
    name="Instance Admin",
    actions=frozenset(
        {
            Action.READ_INSTANCE_SETTINGS,
            Action.UPDATE_INSTANCE_SETTINGS,
            Action.READ_INSTANCE_STATS,
            Action.MANAGE_USER_STORAGE,
            Action.READ_USER,
            Action.UPDATE_USER,
            Action.BAN_USER,
            Action.DELETE_USER,
            Action.READ_INSTANCE_INVITE,
            Action.CREATE_INSTANCE_INVITE,
            Action.UPDATE_INSTANCE_INVITE,
            Action.DELETE_INSTANCE_INVITE,
        }
    ),
)

COMMUNITY_CREATOR_ROLE = DefaultRoleTemplate(
    name="Community Creator",
    actions=_COMMUNITY_MANAGEMENT_ACTIONS | {Action.CREATE_COMMUNITY},
)

USER_MANAGER_ROLE = DefaultRoleTemplate(
    name="User Manager",
    actions=frozenset(
        {
            Action.READ_USER,
            Action.UPDATE_USER,
            Action.BAN_USER,
            Action.UNBAN_USER,
            Action.MANAGE_USER_STORAGE,
            Action.READ_INSTANCE_STATS,
        }
    ),
)

INVITE_MANAGER_ROLE = DefaultRoleTemplate(
    name="Invite Manager",
    actions=frozenset(
        {
            Action.READ_INSTANCE_INVITE,
            Action.CREATE_INSTANCE_INVITE,
            Action.UPDATE_INSTANCE_INVITE,
            Action.DELETE_INSTANCE_INVITE,
        }
    ),
)

DEFAULT_COMMUNITY_ROLES: tuple[DefaultRoleTemplate, ...] = (
    COMMUNITY_ADMIN_ROLE,
    MODERATOR_ROLE,
    MEMBER_ROLE,
)

DEFAULT_INSTANCE_ROLES: tuple[DefaultRoleTemplate, ...] = (
    INSTANCE_ADMIN_ROLE,
    COMMUNITY_CREATOR_ROLE,
    USER_MANAGER_ROLE,
    INVITE_MANAGER_ROLE,
)


def get_default_community_roles() -> tuple[DefaultRoleTemplate, ...]:
    """Get the community role templates, highest tier first."""
    return DEFAULT_COMMUNITY_ROLES


def get_default_instance_roles() -> tuple[DefaultRoleTemplate, ...]:
    """Get the instance role templates."""
    return DEFAULT_INSTANCE_ROLES


def get_instance_admin_actions() -> frozenset[Action]:
    """Get every action the Instance Admin template grants."""
    return INSTANCE_ADMIN_ROLE.actions


def get_community_creator_actions() -> frozenset[Action]:
    """Get every action the Community Creator template grants."""
    return COMMUNITY_CREATOR_ROLE.actions


def get_template(name: str) -> DefaultRoleTemplate | None:
    """Look up a community or instance template by role name."""
    for template in DEFAULT_COMMUNITY_ROLES + DEFAULT_INSTANCE_ROLES:
        if template.name == name:
            return template
    return None
