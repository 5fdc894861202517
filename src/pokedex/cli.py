#!/usr/bin/env python3
"""
Main CLI entry point for the Pokedex service.
"""

import asyncio
import os
import sys

import click
import uvicorn

from pokedex import __version__
from pokedex.config import settings
from pokedex.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="pokedex")
def cli() -> None:
    """Pokedex CLI - run the server, seed the database, export the schema."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help=f"Host to bind to (default: {settings.api_host})",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help=f"Port to bind to (default: {settings.api_port})",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Pokedex GraphQL server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Pokedex API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # The app reads its settings at import time
    if log_level == "debug":
        os.environ["POKEDEX_DEBUG"] = "true"
        os.environ["POKEDEX_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("POKEDEX_DEBUG", "false")
        os.environ.setdefault("POKEDEX_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "pokedex.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def seed() -> None:
    """Seed the database with the starter pokemons."""
    from pokedex.database.connection import dispose_database, get_async_session
    from pokedex.database.seed_data import seed_pokemons

    configure_logging()

    async def do_seed() -> bool:
        try:
            async with get_async_session() as db:
                await seed_pokemons(db)
            click.echo("✓ Database seeded successfully")
            return True
        except Exception as e:
            logger.error("Failed to seed database", error=str(e))
            click.echo(f"✗ Error seeding database: {e}", err=True)
            return False
        finally:
            await dispose_database()

    if not asyncio.run(do_seed()):
        sys.exit(1)


@cli.command("export-schema")
@click.option(
    "--output",
    "-o",
    default=settings.schema_output_path,
    type=click.Path(dir_okay=False),
    help=f"Where to write the SDL (default: {settings.schema_output_path})",
)
def export_schema_command(output: str) -> None:
    """Write the GraphQL schema SDL to a file."""
    from pokedex.graphql.schema import export_schema

    configure_logging()

    try:
        path = export_schema(output)
    except OSError as e:
        logger.error("Failed to export schema", path=output, error=str(e))
        click.echo(f"✗ Error exporting schema: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Schema written to {path}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
