"""Database module: ORM models, schemas and session management."""

from .models import (
    Art,
    Artist,
    Base,
    Book,
    Chapter,
    Character,
    Item,
    Location,
    Series,
    User,
)
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Art",
    "Artist",
    "Base",
    "Book",
    "Chapter",
    "Character",
    "Item",
    "Location",
    "Series",
    "User",
    "Database",
    "get_db",
    "reset_db",
]
