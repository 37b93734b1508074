"""Book Art: a catalog pairing book series, books, chapters, characters,
locations and items with artwork, served as a JSON API."""

__version__ = "0.1.0"
