"""
Pokemon resolvers
"""

from __future__ import annotations

import strawberry

from ...database.connection import get_async_session
from ...logging import get_logger
from ...pokemons.repository import find_many_pokemons
from ..types.ordering import PokemonOrderByName, SortOrder
from ..types.pokemon import Pokemon

logger = get_logger(__name__)

DEFAULT_CURSOR = 1
DEFAULT_TAKE = 10
DEFAULT_SKIP = 0
DEFAULT_ORDER = SortOrder.asc


async def resolve_all_pokemons(
    info: strawberry.Info,
    *,
    cursor: int | None = None,
    take: int | None = None,
    skip: int | None = None,
    order_by: PokemonOrderByName | None = None,
) -> list[Pokemon]:
    """
    Resolve a page of pokemons.

    Missing arguments fall back to cursor=1, take=10, skip=0 and ascending
    name order. Storage errors are not caught here.
    """
    _ = info

    cursor = DEFAULT_CURSOR if cursor is None else cursor
    take = DEFAULT_TAKE if take is None else take
    skip = DEFAULT_SKIP if skip is None else skip
    order = order_by.name if order_by is not None else DEFAULT_ORDER

    logger.debug(
        "Resolving pokemons", cursor=cursor, take=take, skip=skip, order=order.value
    )

    async with get_async_session() as session:
        rows = await find_many_pokemons(
            session, take=take, skip=skip, cursor=cursor, order=order.value
        )
        return [Pokemon.from_model(row) for row in rows]
