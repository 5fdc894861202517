"""
Pokemon storage helpers
"""

from .repository import create_pokemon, find_many_pokemons

__all__ = ["create_pokemon", "find_many_pokemons"]
