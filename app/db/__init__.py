"""Core application modules."""

from app.db.database import Database, engine_options, get_database, get_session

__all__ = [
    "Database",
    "engine_options",
    "get_database",
    "get_session",
]
