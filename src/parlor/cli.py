"""Command-line interface for Parlor.

Administrative commands for the authorization core: database setup, the
instance role bootstrap, role listing and ad-hoc permission checks.
"""

import asyncio
import sys
import uuid
from pathlib import Path

import click

from parlor import __version__
from parlor.core.config import get_settings
from parlor.core.logging import bind_correlation_id, configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="Parlor")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides PARLOR_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """Parlor - authorization core for communities, channels and DMs."""
    settings = get_settings()
    if log_level:
        settings.log_level = log_level
    configure_logging(settings)
    bind_correlation_id(f"cli_{uuid.uuid4().hex[:12]}")


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt and allow running in production",
)
def init_db(force: bool) -> None:
    """Create all database tables.

    Use this only in development. In production, use `parlor migrate`.
    """
    from parlor.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = get_db_manager()
        try:
            await init_database()
            await db.create_tables()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option(
    "--alembic-ini",
    type=click.Path(exists=True, dir_okay=False),
    default="alembic.ini",
    show_default=True,
    help="Path to the Alembic configuration file",
)
@click.option("--revision", default="head", show_default=True, help="Target revision")
def migrate(alembic_ini: str, revision: str) -> None:
    """Apply schema migrations."""
    from alembic import command
    from alembic.config import Config

    config = Config(alembic_ini)
    script_location = config.get_main_option("script_location")
    if script_location and not Path(script_location).is_absolute():
        config.set_main_option(
            "script_location",
            str(Path(alembic_ini).resolve().parent / script_location),
        )
    command.upgrade(config, revision)
    click.echo(f"Database upgraded to {revision}.")


@cli.command()
def bootstrap_roles() -> None:
    """Create any missing default instance role."""
    from parlor.application.startup import bootstrap_instance_roles
    from parlor.infrastructure.persistence.database import get_db_manager

    async def run() -> list[str]:
        db = get_db_manager()
        try:
            return await bootstrap_instance_roles(db)
        finally:
            await db.disconnect()

    created = asyncio.run(run())
    if created:
        click.echo(f"Created instance roles: {', '.join(created)}")
    else:
        click.echo("No instance roles created.")


@cli.command()
@click.option(
    "--community",
    "community_id",
    default=None,
    help="Community ID (lists instance roles when omitted)",
)
def roles(community_id: str | None) -> None:
    """List the roles of a community or of the instance."""
    from parlor.domain.entities import RoleScope
    from parlor.domain.services import RoleService
    from parlor.infrastructure.persistence.database import get_db_manager

    scope = RoleScope.community(community_id) if community_id else RoleScope.instance()

    async def run():
        db = get_db_manager()
        try:
            async with db.session() as session:
                return await RoleService(session).get_roles(scope)
        finally:
            await db.disconnect()

    found = asyncio.run(run())
    if not found:
        click.echo(f"No roles in scope '{scope.key}'.")
        return
    for role in found:
        marker = " (default)" if role.is_default else ""
        click.echo(f"{role.id}  {role.name}{marker}  [{len(role.actions)} actions]")


@cli.command()
@click.argument("user_id")
@click.argument("actions", nargs=-1, required=True)
@click.option("--resource-id", default=None, help="Resource ID (instance when omitted)")
@click.option(
    "--kind",
    type=click.Choice(["INSTANCE", "COMMUNITY", "CHANNEL", "MESSAGE", "DM_GROUP"]),
    default="INSTANCE",
    show_default=True,
    help="Resource kind",
)
def verify(user_id: str, actions: tuple[str, ...], resource_id: str | None, kind: str) -> None:
    """Check whether USER_ID may perform every one of ACTIONS."""
    from parlor.domain.services import PermissionEvaluator
    from parlor.infrastructure.persistence.database import get_db_manager

    logger = get_logger(__name__)

    async def run() -> bool:
        db = get_db_manager()
        try:
            async with db.session() as session:
                return await PermissionEvaluator(session).verify(
                    user_id, resource_id, kind, list(actions)
                )
        finally:
            await db.disconnect()

    allowed = asyncio.run(run())
    logger.info(
        "Permission check via CLI",
        user_id=user_id,
        resource_id=resource_id,
        kind=kind,
        allowed=allowed,
    )
    click.echo("allowed" if allowed else "denied")
    sys.exit(0 if allowed else 1)


@cli.command()
def info() -> None:
    """Display Parlor configuration."""
    settings = get_settings()

    click.echo(f"""
Parlor v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Authorization:
  Bootstrap instance roles: {settings.bootstrap_instance_roles}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> None:
    """Main entry point for the `parlor` command and `python -m parlor`."""
    cli()


if __name__ == "__main__":
    main()
