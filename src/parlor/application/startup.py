"""Process startup and shutdown tasks.

Startup runs once during process initialization: database setup, then
creation of any missing default instance role. Shutdown disposes of the
engine. The role bootstrap never raises, so a
database hiccup at boot does not keep the process from serving requests.
"""

from parlor.core.config import Settings, get_settings
from parlor.core.logging import configure_logging, get_logger
from parlor.domain.services import RoleService
from parlor.infrastructure.persistence.database import (
    DatabaseManager,
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


async def bootstrap_instance_roles(db: DatabaseManager | None = None) -> list[str]:
    """Create missing default instance roles in a fresh session.

    Args:
        db: Database manager to use. Defaults to the global one.

    Returns:
        Names of the roles created, empty if none were missing or the
        bootstrap failed.
    """
    db = db or get_db_manager()
    try:
        async with db.session() as session:
            created = await RoleService(session).ensure_default_instance_roles_exist()
            await session.commit()
            return created
    except Exception as e:
        # Opening the session or committing can fail when the database is down.
        logger.error("Instance role bootstrap skipped", error=str(e))
        return []


async def on_startup(settings: Settings | None = None) -> None:
    """Initialize logging and the database, then bootstrap instance roles."""
    settings = settings or get_settings()
    configure_logging(settings)

    logger.info(
        "Starting Parlor",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    if settings.bootstrap_instance_roles:
        created = await bootstrap_instance_roles()
        logger.info("Instance role bootstrap finished", created=created)


async def on_shutdown() -> None:
    """Dispose of the database engine."""
    await close_database()
    logger.info("Parlor stopped")
