"""
Ordering inputs for list queries
"""

from enum import Enum

import strawberry


@strawberry.enum
class SortOrder(Enum):
    """Sort direction"""

    asc = "asc"
    desc = "desc"


@strawberry.input
class PokemonOrderByName:
    """Order pokemons by name."""

    name: SortOrder
