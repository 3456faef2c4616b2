"""Domain services for Parlor.

Services hold the authorization logic: the default role catalog, scope
resolution, permission evaluation and the role lifecycle.
"""

from parlor.domain.services.default_roles import (
    DefaultRoleTemplate,
    get_community_creator_actions,
    get_default_community_roles,
    get_default_instance_roles,
    get_instance_admin_actions,
)
from parlor.domain.services.permission_evaluator import PermissionEvaluator
from parlor.domain.services.role_service import RoleService
from parlor.domain.services.scope_resolver import ScopeResolver

__all__ = [
    "DefaultRoleTemplate",
    "PermissionEvaluator",
    "RoleService",
    "ScopeResolver",
    "get_community_creator_actions",
    "get_default_community_roles",
    "get_default_instance_roles",
    "get_instance_admin_actions",
]
