"""Unit tests for scopes and resource kinds."""

import pytest

from parlor.domain.entities import INSTANCE_SCOPE, ResourceKind, RoleScope


class TestRoleScope:
    """Test suite for RoleScope."""

    def test_instance_scope_key(self):
        assert INSTANCE_SCOPE.is_instance is True
        assert INSTANCE_SCOPE.key == "instance"

    def test_community_scope_key(self):
        scope = RoleScope.community("c1")
        assert scope.is_instance is False
        assert scope.key == "community:c1"

    def test_from_key_round_trips(self):
        assert RoleScope.from_key("instance") == INSTANCE_SCOPE
        assert RoleScope.from_key("community:abc") == RoleScope.community("abc")

    def test_from_key_rejects_garbage(self):
        with pytest.raises(ValueError):
            RoleScope.from_key("guild:1")

    def test_community_requires_id(self):
        with pytest.raises(ValueError, match="Community ID is required"):
            RoleScope.community("")

    def test_scopes_are_hashable_and_comparable(self):
        assert {RoleScope.community("a"), RoleScope.community("a")} == {RoleScope.community("a")}
        assert RoleScope.community("a") != INSTANCE_SCOPE


class TestResourceKind:
    """Test suite for ResourceKind.parse."""

    @pytest.mark.parametrize("value", ["CHANNEL", ResourceKind.CHANNEL])
    def test_parse_known(self, value):
        assert ResourceKind.parse(value) is ResourceKind.CHANNEL

    @pytest.mark.parametrize("value", ["GUILD", "channel", "", None])
    def test_parse_unknown_returns_none(self, value):
        assert ResourceKind.parse(value) is None
