"""Tests for UserRoleRepository."""

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError

from parlor.domain.entities import INSTANCE_SCOPE, RoleScope
from parlor.infrastructure.persistence.models import RoleModel, UserRoleModel
from parlor.infrastructure.persistence.repositories import (
    RoleRepository,
    UserRoleRepository,
)

COMMUNITY = RoleScope.community("c1")


@pytest.fixture
def repo(db_session):
    return UserRoleRepository(db_session)


@pytest_asyncio.fixture
async def role(db_session):
    """A custom role of community c1."""
    return await RoleRepository(db_session).create(
        RoleModel.for_scope(COMMUNITY, "Support", ["READ_USER"])
    )


@pytest.mark.asyncio
async def test_create_and_find(repo, role):
    await repo.create(UserRoleModel.for_scope("u1", role.id, COMMUNITY))

    found = await repo.find("u1", role.id, COMMUNITY)

    assert found is not None
    assert found.community_id == "c1"
    assert found.is_instance_role is False
    assert await repo.find("u1", role.id, INSTANCE_SCOPE) is None
    assert await repo.find("u2", role.id, COMMUNITY) is None


@pytest.mark.asyncio
async def test_duplicate_assignment_rejected_by_constraint(repo, role):
    await repo.create(UserRoleModel.for_scope("u1", role.id, COMMUNITY))

    with pytest.raises(IntegrityError):
        await repo.create(UserRoleModel.for_scope("u1", role.id, COMMUNITY))


@pytest.mark.asyncio
async def test_list_for_user_loads_roles(repo, role):
    await repo.create(UserRoleModel.for_scope("u1", role.id, COMMUNITY))

    assignments = await repo.list_for_user("u1", COMMUNITY)

    assert len(assignments) == 1
    entity = assignments[0].to_entity(with_role=True)
    assert entity.role.name == "Support"
    assert entity.scope == COMMUNITY
    assert await repo.list_for_user("u1", RoleScope.community("c2")) == []


@pytest.mark.asyncio
async def test_list_user_ids_and_count(repo, role):
    for user_id in ("u1", "u2"):
        await repo.create(UserRoleModel.for_scope(user_id, role.id, COMMUNITY))

    assert sorted(await repo.list_user_ids_for_role(role.id, COMMUNITY)) == ["u1", "u2"]
    assert await repo.count_for_role(role.id) == 2


@pytest.mark.asyncio
async def test_delete(repo, role):
    assignment = await repo.create(UserRoleModel.for_scope("u1", role.id, COMMUNITY))

    await repo.delete(assignment)

    assert await repo.count_for_role(role.id) == 0
