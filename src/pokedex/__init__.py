"""
Pokedex GraphQL service
Paginated GraphQL access to a table of pokemon records
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
