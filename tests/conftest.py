"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from parlor.infrastructure.persistence import models  # noqa: F401
from parlor.infrastructure.persistence.database import Base
from parlor.infrastructure.persistence.models import (
    ChannelModel,
    DirectMessageGroupMemberModel,
    MessageModel,
)


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def seed_resources(db_session):
    """Insert channels, messages and DM memberships for resolution tests.

    Returns an async callable so each test seeds exactly what it needs.
    """

    async def _seed(
        channels: dict[str, str] | None = None,
        messages: dict[str, tuple[str | None, str | None]] | None = None,
        dm_members: list[tuple[str, str]] | None = None,
    ) -> None:
        for channel_id, community_id in (channels or {}).items():
            db_session.add(ChannelModel(id=channel_id, community_id=community_id))
        await db_session.flush()
        for message_id, (channel_id, group_id) in (messages or {}).items():
            db_session.add(
                MessageModel(
                    id=message_id,
                    channel_id=channel_id,
                    direct_message_group_id=group_id,
                )
            )
        for group_id, user_id in dm_members or []:
            db_session.add(DirectMessageGroupMemberModel(group_id=group_id, user_id=user_id))
        await db_session.flush()

    return _seed
