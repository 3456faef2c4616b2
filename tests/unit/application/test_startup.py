"""Tests for process startup tasks."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from parlor.application import startup
from parlor.application.startup import bootstrap_instance_roles, on_startup
from parlor.core.config import Settings


def _db_for(session):
    """Build a database manager stub handing out the given session."""

    @asynccontextmanager
    async def _session():
        yield session

    db = MagicMock()
    db.session = _session
    return db


@pytest.mark.asyncio
async def test_bootstrap_creates_instance_roles(db_session):
    created = await bootstrap_instance_roles(_db_for(db_session))

    assert created == ["Instance Admin", "Community Creator", "User Manager", "Invite Manager"]


@pytest.mark.asyncio
async def test_bootstrap_survives_unreachable_database():
    db = MagicMock()
    db.session.side_effect = OperationalError("connect", {}, Exception("refused"))

    assert await bootstrap_instance_roles(db) == []


@pytest.mark.asyncio
async def test_on_startup_runs_bootstrap_when_enabled():
    settings = Settings(environment="testing", log_format="console")

    with patch.object(startup, "init_database", new_callable=AsyncMock) as init_db, \
         patch.object(startup, "bootstrap_instance_roles", new_callable=AsyncMock) as bootstrap:
        bootstrap.return_value = []
        await on_startup(settings)

    init_db.assert_awaited_once()
    bootstrap.assert_awaited_once()


@pytest.mark.asyncio
async def test_on_startup_skips_bootstrap_when_disabled():
    settings = Settings(environment="testing", log_format="console", bootstrap_instance_roles=False)

    with patch.object(startup, "init_database", new_callable=AsyncMock), \
         patch.object(startup, "bootstrap_instance_roles", new_callable=AsyncMock) as bootstrap:
        await on_startup(settings)

    bootstrap.assert_not_awaited()


@pytest.mark.asyncio
async def test_on_startup_propagates_database_failure():
    settings = Settings(environment="testing", log_format="console")

    with patch.object(
        startup, "init_database", new_callable=AsyncMock, side_effect=RuntimeError("no db")
    ), patch.object(startup, "bootstrap_instance_roles", new_callable=AsyncMock) as bootstrap:
        with pytest.raises(RuntimeError, match="no db"):
            await on_startup(settings)

    bootstrap.assert_not_awaited()


@pytest.mark.asyncio
async def test_on_shutdown_disposes_engine():
    with patch.object(startup, "close_database", new_callable=AsyncMock) as close_db:
        await startup.on_shutdown()

    close_db.assert_awaited_once()
