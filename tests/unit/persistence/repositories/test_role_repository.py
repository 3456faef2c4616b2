"""Tests for RoleRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from parlor.domain.entities import INSTANCE_SCOPE, RoleScope
from parlor.infrastructure.persistence.models import RoleModel
from parlor.infrastructure.persistence.repositories import RoleRepository

COMMUNITY = RoleScope.community("c1")


@pytest.fixture
def repo(db_session):
    return RoleRepository(db_session)


@pytest.mark.asyncio
async def test_create_and_get_by_id(repo):
    role = await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"]))

    found = await repo.get_by_id(role.id)

    assert found is not None
    assert found.name == "Support"
    assert found.community_id == "c1"
    assert found.is_instance_role is False
    assert found.scope_key == "community:c1"


@pytest.mark.asyncio
async def test_get_by_id_missing(repo):
    assert await repo.get_by_id("missing") is None


@pytest.mark.asyncio
async def test_get_by_name_is_scoped(repo):
    await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"]))
    await repo.create(RoleModel.for_scope(INSTANCE_SCOPE, "Support", ["READ_USER"]))

    community_role = await repo.get_by_name("Support", COMMUNITY)
    instance_role = await repo.get_by_name("Support", INSTANCE_SCOPE)

    assert community_role.id != instance_role.id
    assert instance_role.is_instance_role is True
    assert await repo.get_by_name("Support", RoleScope.community("c2")) is None


@pytest.mark.asyncio
async def test_name_exists_with_exclusion(repo):
    role = await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"]))

    assert await repo.name_exists("Support", COMMUNITY) is True
    assert await repo.name_exists("Support", COMMUNITY, exclude_id=role.id) is False
    assert await repo.name_exists("Support", INSTANCE_SCOPE) is False


@pytest.mark.asyncio
async def test_unique_name_per_scope(repo):
    await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"]))

    with pytest.raises(IntegrityError):
        await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_MEMBER"]))


@pytest.mark.asyncio
async def test_list_by_scope_puts_defaults_first(repo):
    await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"]))
    await repo.create(RoleModel.for_scope(COMMUNITY, "Member", ["READ_CHANNEL"], is_default=True))
    await repo.create(RoleModel.for_scope(RoleScope.community("c2"), "Other", ["READ_USER"]))

    roles = await repo.list_by_scope(COMMUNITY)

    assert [r.name for r in roles] == ["Member", "Support"]


@pytest.mark.asyncio
async def test_update_and_delete(repo):
    role = await repo.create(RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"]))

    role.actions = ["READ_MEMBER"]
    await repo.update(role)
    assert (await repo.get_by_id(role.id)).actions == ["READ_MEMBER"]

    await repo.delete(role)
    assert await repo.get_by_id(role.id) is None
