"""
Database module for the Pokedex service
"""

from .connection import dispose_database, get_async_session, init_database

__all__ = ["dispose_database", "get_async_session", "init_database"]
