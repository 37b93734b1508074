"""Pydantic schemas for art pieces."""

from typing import Optional

from pydantic import Field

from ..db.schemas import (
    ArtistResponse,
    RequestModel,
    ResponseModel,
    SeriesEntityResponse,
)


class ArtCreate(RequestModel):
    """Schema for creating an art piece.

    ``characters``, ``locations`` and ``items`` are lists of ids to tag the
    piece with. They must belong to the same series as the book.
    """

    book_id: str = Field(..., min_length=1)
    chapter_id: Optional[str] = None
    artist_id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    image_url: str = Field(..., min_length=1, max_length=1000)
    tags: list[str] = Field(default_factory=list)
    order_index: int = 0
    characters: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)


class ArtUpdate(RequestModel):
    """Schema for updating an art piece.

    An association list that is sent replaces the existing set; one that is
    left out is not touched.
    """

    chapter_id: Optional[str] = None
    artist_id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, min_length=1, max_length=1000)
    tags: Optional[list[str]] = None
    order_index: Optional[int] = None
    characters: Optional[list[str]] = None
    locations: Optional[list[str]] = None
    items: Optional[list[str]] = None


class ArtResponse(ResponseModel):
    """Schema for art response."""

    id: str
    book_id: str
    chapter_id: Optional[str]
    artist_id: Optional[str]
    title: Optional[str]
    description: Optional[str]
    image_url: str
    tags: list[str]
    order_index: int
    created_at: str
    updated_at: str


class ArtDetail(ArtResponse):
    """Art piece with its artist and tagged entities resolved."""

    artist: Optional[ArtistResponse]
    characters: list[SeriesEntityResponse]
    locations: list[SeriesEntityResponse]
    items: list[SeriesEntityResponse]


class ArtPage(ResponseModel):
    """A page of art pieces."""

    art: list[ArtResponse]
    total: int
    page: int
    limit: int
