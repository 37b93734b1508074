"""Pydantic schemas for catalog search."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ResultType(str, Enum):
    """Kind of entity a search hit refers to."""

    SERIES = "series"
    BOOK = "book"
    CHAPTER = "chapter"
    CHARACTER = "character"
    LOCATION = "location"
    ITEM = "item"


class SearchHit(BaseModel):
    """A single search hit.

    ``parent_id``/``parent_name`` name the owning series (books, characters,
    locations, items) or book (chapters). Series hits have no parent.
    """

    type: ResultType
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    parent_id: Optional[str] = None
    parent_name: Optional[str] = None


class SearchGroups(BaseModel):
    """Hits grouped by entity type."""

    series: list[SearchHit] = Field(default_factory=list)
    books: list[SearchHit] = Field(default_factory=list)
    chapters: list[SearchHit] = Field(default_factory=list)
    characters: list[SearchHit] = Field(default_factory=list)
    locations: list[SearchHit] = Field(default_factory=list)
    items: list[SearchHit] = Field(default_factory=list)

    def count(self) -> int:
        return (
            len(self.series)
            + len(self.books)
            + len(self.chapters)
            + len(self.characters)
            + len(self.locations)
            + len(self.items)
        )


class SearchResults(BaseModel):
    """Search response."""

    query: str
    total_count: int
    results: SearchGroups
