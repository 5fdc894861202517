"""
Pokemon GraphQL type definitions
"""

from typing import TYPE_CHECKING

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Pokemons


@strawberry.type
class Pokemon:
    """Pokemon type for GraphQL API."""

    id: int
    name: str
    hp: int
    attack: int

    @classmethod
    def from_model(cls, pokemon: "Pokemons") -> "Pokemon":
        return cls(id=pokemon.id, name=pokemon.name, hp=pokemon.hp, attack=pokemon.attack)
