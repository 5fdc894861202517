"""
Root GraphQL query definitions
"""

import strawberry

from ..types.ordering import PokemonOrderByName
from ..types.pokemon import Pokemon


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def get_all_pokemons(
        self,
        info: strawberry.Info,
        cursor: int | None = None,
        take: int | None = None,
        skip: int | None = None,
        order_by: PokemonOrderByName | None = None,
    ) -> list[Pokemon]:
        """Get a page of pokemons, starting at the cursor id and ordered by name."""
        from ..resolvers.pokemon import resolve_all_pokemons

        return await resolve_all_pokemons(
            info, cursor=cursor, take=take, skip=skip, order_by=order_by
        )
