"""Command-line interface for dynatemplates.

This module provides the CLI commands for running the template service,
initializing its database and rendering stored templates.
"""

import asyncio
import json
from typing import NoReturn

import click

from dynatemplates import __version__
from dynatemplates.core.config import get_settings
from dynatemplates.core.exceptions import TemplateError
from dynatemplates.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="dynatemplates")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides environment)",
)
def cli(log_level: str | None) -> None:
    """dynatemplates - multi-tenant template resolution and rendering."""
    settings = get_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the HTTP server."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    logger = get_logger(__name__)
    logger.info(
        "Starting dynatemplates server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "dynatemplates.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else settings.workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the template tables.

    Use this only in development. In production, run the Alembic migrations.
    """
    from dynatemplates.infrastructure.persistence.database import (
        get_db_manager,
        init_database,
    )

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
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
def engines() -> None:
    """List the enabled expansion engines and language processors."""
    from dynatemplates.infrastructure.engines import EngineRegistry

    registry = EngineRegistry(get_settings().engine_registry_config())
    click.echo(f"Template engines: {', '.join(registry.supported_template_formats()) or '-'}")
    click.echo(f"Language engines: {', '.join(registry.supported_language_formats()) or '-'}")


@cli.command()
@click.argument("name")
@click.option("--scope", type=str, default=None, help="Scope to resolve in (default: system)")
@click.option("--scope-id", type=str, default=None, help="Tenant discriminator for the scope")
@click.option("--locale", type=str, default=None, help="Locale (default: en)")
@click.option("--data", "data_json", type=str, default="{}", help="Template data as a JSON object")
@click.option("--layout", is_flag=True, default=False, help="Render a layout instead of a template")
def render(
    name: str,
    scope: str | None,
    scope_id: str | None,
    locale: str | None,
    data_json: str,
    layout: bool,
) -> None:
    """Render a stored template (or layout) by NAME."""
    from dynatemplates.domain.services import TemplateLayoutService, TemplateService
    from dynatemplates.infrastructure.engines import EngineRegistry
    from dynatemplates.infrastructure.persistence.database import get_db_manager

    try:
        data = json.loads(data_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--data")
    if not isinstance(data, dict):
        raise click.BadParameter("Data must be a JSON object", param_hint="--data")

    registry = EngineRegistry(get_settings().engine_registry_config())

    async def run() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                if layout:
                    result = await TemplateLayoutService(session, registry).render(
                        name, scope=scope, scope_id=scope_id, locale=locale, data=data
                    )
                else:
                    result = await TemplateService(session, registry).render(
                        name, scope=scope, scope_id=scope_id, locale=locale, data=data
                    )
                    if result.subject:
                        click.echo(f"Subject: {result.subject}\n")
                click.echo(result.content)
        finally:
            await db.disconnect()

    try:
        asyncio.run(run())
    except TemplateError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Show configuration information."""
    settings = get_settings()
    click.echo(f"dynatemplates v{settings.app_version}")
    click.echo(f"Environment:  {settings.environment}")
    click.echo(f"Database:     {settings.database_url}")
    click.echo(f"API prefix:   {settings.api_prefix}")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `dynatemplates` command is run
    or when using `python -m dynatemplates`.
    """
    cli()


if __name__ == "__main__":
    main()
