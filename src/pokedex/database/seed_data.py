"""
Seed data for database initialization.

Inserts the fixed starter set of pokemons. Every run inserts the full set
again; rows are never deduplicated.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import Pokemons
from ..logging import get_logger
from ..pokemons.repository import create_pokemon

logger = get_logger(__name__)

POKEMON_DATA: list[dict[str, Any]] = [
    {"name": "Cleffa", "hp": 30, "attack": 1},
    {"name": "Feraligatr", "hp": 120, "attack": 10},
    {"name": "Gengar Prime", "hp": 130, "attack": 25},
    {"name": "Sneasel", "hp": 60, "attack": 25},
    {"name": "Chansey", "hp": 120, "attack": 15},
    {"name": "Venusaur", "hp": 10, "attack": 60},
]


async def seed_pokemons(
    db: AsyncSession,
    pokemon_data: list[dict[str, Any]] | None = None,
) -> list[Pokemons]:
    """
    Insert each pokemon record, one commit per record.

    The first failing insert propagates; records created before it stay
    in the database.

    Args:
        db: Database session
        pokemon_data: Records to insert (defaults to POKEMON_DATA)

    Returns:
        The created rows, in insertion order
    """
    if pokemon_data is None:
        pokemon_data = POKEMON_DATA

    logger.info("Start seeding", count=len(pokemon_data))

    created: list[Pokemons] = []
    for data in pokemon_data:
        pokemon = await create_pokemon(db, **data)
        logger.info("Created pokemon", pokemon_id=pokemon.id, name=pokemon.name)
        created.append(pokemon)

    logger.info("Seeding finished", created=len(created))
    return created
