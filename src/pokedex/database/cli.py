#!/usr/bin/env python3
"""
`pokedex-migrate`: create or drop the pokemons table through Alembic.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from pokedex import __version__
from pokedex.logging import configure_logging, get_logger

from .connection import get_database_url

logger = get_logger(__name__)

# src/pokedex/database/cli.py -> project root holding alembic.ini and alembic/
PROJECT_DIR = Path(__file__).resolve().parents[3]


def get_alembic_config(project_dir: Path = PROJECT_DIR) -> Config:
    alembic_ini = project_dir / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(project_dir / "alembic"))
    return config


def _run_alembic(action: str, operation: Callable[[Config], None], **details: str) -> None:
    """Run one Alembic command, turning any failure into exit status 1."""
    logger.info(
        "Alembic command started", action=action, database_url=get_database_url(), **details
    )
    try:
        operation(get_alembic_config())
    except Exception as e:
        logger.error("Alembic command failed", action=action, error=str(e), **details)
        click.echo(f"✗ {action} failed: {e}", err=True)
        sys.exit(1)
    logger.info("Alembic command finished", action=action, **details)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="pokedex-migrate")
def main(log_level: str) -> None:
    """Manage the pokemons table schema."""
    configure_logging(debug=(log_level == "debug"))


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Create the pokemons table (migrate up to REVISION, default head)."""
    _run_alembic("Upgrade", lambda cfg: command.upgrade(cfg, revision), revision=revision)


@main.command()
@click.argument("revision", default="base")
def downgrade(revision: str) -> None:
    """Drop the pokemons table (migrate down to REVISION, default base)."""
    _run_alembic("Downgrade", lambda cfg: command.downgrade(cfg, revision), revision=revision)


@main.command()
def current() -> None:
    """Show which revision the database is at."""
    _run_alembic("Revision lookup", lambda cfg: command.current(cfg, verbose=True))


if __name__ == "__main__":
    main()
