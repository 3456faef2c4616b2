"""Unit tests for PermissionEvaluator."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from parlor.domain.entities import (
    INSTANCE_SCOPE,
    Action,
    DirectMessageScope,
    ResourceKind,
    RoleScope,
)
from parlor.domain.services import PermissionEvaluator
from parlor.infrastructure.persistence.models import RoleModel, UserRoleModel


def assignment(scope: RoleScope, *actions: Action) -> UserRoleModel:
    role = RoleModel.for_scope(scope, f"role-{len(actions)}", [a.value for a in actions])
    row = UserRoleModel.for_scope("u1", role.id, scope)
    row.role = role
    return row


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def evaluator(mock_session):
    """Create a PermissionEvaluator with a mocked session."""
    return PermissionEvaluator(mock_session)


class TestPermissionEvaluator:
    """Test suite for PermissionEvaluator.verify."""

    @pytest.mark.asyncio
    async def test_instance_permission_granted(self, evaluator):
        with patch.object(
            evaluator.user_role_repo,
            "list_for_user",
            return_value=[assignment(INSTANCE_SCOPE, Action.READ_USER, Action.BAN_USER)],
        ) as lookup:
            allowed = await evaluator.verify("u1", None, None, {Action.BAN_USER})

        assert allowed is True
        lookup.assert_awaited_once_with("u1", INSTANCE_SCOPE)

    @pytest.mark.asyncio
    async def test_instance_permission_denied_when_action_missing(self, evaluator):
        with patch.object(
            evaluator.user_role_repo,
            "list_for_user",
            return_value=[assignment(INSTANCE_SCOPE, Action.READ_USER)],
        ):
            allowed = await evaluator.verify(
                "u1", None, ResourceKind.INSTANCE, {Action.DELETE_USER}
            )

        assert allowed is False

    @pytest.mark.asyncio
    async def test_no_roles_denies(self, evaluator):
        with patch.object(evaluator.user_role_repo, "list_for_user", return_value=[]):
            allowed = await evaluator.verify(
                "u1", "c1", ResourceKind.COMMUNITY, {Action.READ_MESSAGE}
            )

        assert allowed is False

    @pytest.mark.asyncio
    async def test_actions_union_across_roles(self, evaluator):
        scope = RoleScope.community("c1")
        with patch.object(
            evaluator.user_role_repo,
            "list_for_user",
            return_value=[
                assignment(scope, Action.READ_MESSAGE),
                assignment(scope, Action.DELETE_MESSAGE, Action.PIN_MESSAGE),
            ],
        ):
            allowed = await evaluator.verify(
                "u1",
                "c1",
                ResourceKind.COMMUNITY,
                {Action.READ_MESSAGE, Action.DELETE_MESSAGE},
            )

        assert allowed is True

    @pytest.mark.asyncio
    async def test_all_required_actions_must_be_present(self, evaluator):
        scope = RoleScope.community("c1")
        with patch.object(
            evaluator.user_role_repo,
            "list_for_user",
            return_value=[assignment(scope, Action.READ_MESSAGE)],
        ):
            allowed = await evaluator.verify(
                "u1",
                "c1",
                ResourceKind.COMMUNITY,
                [Action.READ_MESSAGE, Action.DELETE_MESSAGE],
            )

        assert allowed is False

    @pytest.mark.asyncio
    async def test_unresolved_scope_denies_without_loading_roles(self, evaluator):
        with patch.object(
            evaluator.resolver, "resolve_scope", return_value=None
        ), patch.object(evaluator.user_role_repo, "list_for_user") as lookup:
            allowed = await evaluator.verify(
                "u1", "chan-1", ResourceKind.CHANNEL, {Action.DELETE_MESSAGE}
            )

        assert allowed is False
        lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_dm_scope_uses_membership_only(self, evaluator):
        with patch.object(
            evaluator.resolver,
            "resolve_scope",
            return_value=DirectMessageScope(group_id="dm-1"),
        ), patch.object(
            evaluator.resolver, "is_member", return_value=True
        ) as membership, patch.object(
            evaluator.user_role_repo, "list_for_user"
        ) as lookup:
            allowed = await evaluator.verify(
                "u1", "m1", ResourceKind.MESSAGE, {Action.DELETE_ANY_MESSAGE}
            )

        assert allowed is True
        membership.assert_awaited_once_with("u1", "dm-1")
        lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_dm_non_member_denied(self, evaluator):
        with patch.object(
            evaluator.resolver,
            "resolve_scope",
            return_value=DirectMessageScope(group_id="dm-1"),
        ), patch.object(evaluator.resolver, "is_member", return_value=False):
            allowed = await evaluator.verify(
                "u1", "dm-1", ResourceKind.DM_GROUP, {Action.READ_MESSAGE}
            )

        assert allowed is False

    @pytest.mark.asyncio
    async def test_unknown_action_denies(self, evaluator):
        with patch.object(evaluator.resolver, "resolve_scope") as resolve:
            allowed = await evaluator.verify("u1", None, None, ["TELEPORT"])

        assert allowed is False
        resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_kind_denies(self, evaluator):
        allowed = await evaluator.verify("u1", "x1", "GUILD", {Action.READ_MESSAGE})
        assert allowed is False

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, evaluator):
        with patch.object(
            evaluator.user_role_repo,
            "list_for_user",
            side_effect=OperationalError("SELECT", {}, Exception("db down")),
        ):
            with pytest.raises(OperationalError):
                await evaluator.verify("u1", None, None, {Action.READ_USER})

    @pytest.mark.asyncio
    async def test_unknown_stored_actions_are_ignored(self, evaluator):
        row = assignment(INSTANCE_SCOPE, Action.READ_USER)
        row.role.actions = ["READ_USER", "LEGACY_ACTION"]
        with patch.object(evaluator.user_role_repo, "list_for_user", return_value=[row]):
            assert await evaluator.verify("u1", None, None, {Action.READ_USER}) is True

    @pytest.mark.asyncio
    async def test_granted_actions_union(self, evaluator):
        scope = RoleScope.community("c1")
        with patch.object(
            evaluator.user_role_repo,
            "list_for_user",
            return_value=[
                assignment(scope, Action.READ_MESSAGE),
                assignment(scope, Action.READ_MESSAGE, Action.KICK_USER),
            ],
        ):
            granted = await evaluator.get_granted_actions("u1", scope)

        assert granted == frozenset({Action.READ_MESSAGE, Action.KICK_USER})
