"""Repository helpers for reading and creating Pokemon records."""

from __future__ import annotations

from typing import Literal

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from ..dbmodels import Pokemons
from ..logging import get_logger

logger = get_logger(__name__)

SortDirection = Literal["asc", "desc"]


async def create_pokemon(session: AsyncSession, *, name: str, hp: int, attack: int) -> Pokemons:
    """Insert one pokemon and commit it, returning the row with its assigned id."""
    pokemon = Pokemons(name=name, hp=hp, attack=attack)
    session.add(pokemon)
    await session.commit()
    await session.refresh(pokemon)
    return pokemon


def _at_or_after(anchor: Pokemons, descending: bool) -> ColumnElement[bool]:
    """Rows positioned at or after ``anchor`` when ordered by (name, id)."""
    if descending:
        return or_(
            Pokemons.name < anchor.name,
            and_(Pokemons.name == anchor.name, Pokemons.id <= anchor.id),
        )
    return or_(
        Pokemons.name > anchor.name,
        and_(Pokemons.name == anchor.name, Pokemons.id >= anchor.id),
    )


async def find_many_pokemons(
    session: AsyncSession,
    *,
    take: int,
    skip: int = 0,
    cursor: int | None = None,
    order: SortDirection = "asc",
) -> list[Pokemons]:
    """
    Fetch a page of pokemons ordered by name.

    The page starts at the row whose id is ``cursor`` (inclusive), skips
    ``skip`` rows and returns up to ``take`` rows. A negative ``take``
    pages backwards from the cursor; the rows still come back in ``order``.
    An unknown cursor yields an empty page.
    """
    if skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")
    if order not in ("asc", "desc"):
        raise ValueError(f"Unknown sort order: {order!r}")

    backwards = take < 0
    # Walking backwards is a forward walk over the reversed ordering
    descending = (order == "desc") != backwards

    stmt = select(Pokemons)

    if cursor is not None:
        anchor = await session.get(Pokemons, cursor)
        if anchor is None:
            logger.debug("Cursor not found, returning empty page", cursor=cursor)
            return []
        stmt = stmt.where(_at_or_after(anchor, descending))

    if descending:
        stmt = stmt.order_by(Pokemons.name.desc(), Pokemons.id.desc())
    else:
        stmt = stmt.order_by(Pokemons.name.asc(), Pokemons.id.asc())

    stmt = stmt.offset(skip).limit(abs(take))

    result = await session.execute(stmt)
    rows = list(result.scalars().all())

    if backwards:
        rows.reverse()

    return rows
