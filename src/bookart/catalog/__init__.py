"""Catalog entity management: series, books, chapters, characters, locations, items, artists."""

from .associations import Association, add_link, remove_link, replace_links
from .manager import (
    ArtistManager,
    BookManager,
    CatalogManager,
    ChapterManager,
    CharacterManager,
    ItemManager,
    LocationManager,
    SeriesEntityManager,
    SeriesManager,
)

__all__ = [
    "Association",
    "add_link",
    "remove_link",
    "replace_links",
    "ArtistManager",
    "BookManager",
    "CatalogManager",
    "ChapterManager",
    "CharacterManager",
    "ItemManager",
    "LocationManager",
    "SeriesEntityManager",
    "SeriesManager",
]
