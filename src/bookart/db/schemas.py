"""Pydantic schemas for catalog data validation.

Request schemas accept camelCase keys (``coverImageUrl``) as well as the
field names themselves. Update schemas are presence-aware: only fields the
client actually sent appear in ``model_dump(exclude_unset=True)``, so an
explicit ``null`` clears a column while an absent key leaves it alone.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..utils import snake_to_camel


class RequestModel(BaseModel):
    """Base for request payloads."""

    model_config = ConfigDict(
        alias_generator=snake_to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class ResponseModel(BaseModel):
    """Base for responses built from ORM rows."""

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# Series
# ============================================================================


class SeriesCreate(RequestModel):
    """Schema for creating a series."""

    title: str = Field(..., min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    cover_image_url: Optional[str] = Field(None, max_length=1000)


class SeriesUpdate(RequestModel):
    """Schema for updating a series."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    cover_image_url: Optional[str] = Field(None, max_length=1000)


class SeriesResponse(ResponseModel):
    """Schema for series response."""

    id: str
    title: str
    author: Optional[str]
    description: Optional[str]
    cover_image_url: Optional[str]
    created_at: str
    updated_at: str


# ============================================================================
# Books
# ============================================================================


class BookCreate(RequestModel):
    """Schema for creating a book. Every book belongs to a series."""

    series_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    cover_image_url: Optional[str] = Field(None, max_length=1000)


class BookUpdate(RequestModel):
    """Schema for updating a book."""

    series_id: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    author: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    cover_image_url: Optional[str] = Field(None, max_length=1000)


class BookResponse(ResponseModel):
    """Schema for book response."""

    id: str
    series_id: str
    title: str
    author: Optional[str]
    description: Optional[str]
    cover_image_url: Optional[str]
    created_at: str
    updated_at: str


# ============================================================================
# Chapters
# ============================================================================


class ChapterCreate(RequestModel):
    """Schema for creating a chapter."""

    book_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=500)
    chapter_number: int
    summary: Optional[str] = None


class ChapterUpdate(RequestModel):
    """Schema for updating a chapter."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    chapter_number: Optional[int] = None
    summary: Optional[str] = None


class ChapterResponse(ResponseModel):
    """Schema for chapter response."""

    id: str
    book_id: str
    title: str
    chapter_number: int
    summary: Optional[str]
    created_at: str
    updated_at: str


# ============================================================================
# Characters, locations and items
# ============================================================================


class SeriesEntityCreate(RequestModel):
    """Schema for creating a character, location or item."""

    series_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=1000)
    data: dict[str, Any] = Field(default_factory=dict)
    book_ids: list[str] = Field(default_factory=list)


class SeriesEntityUpdate(RequestModel):
    """Schema for updating a character, location or item.

    ``book_ids``, when sent, replaces the full set of books the entity
    appears in; an empty list clears it.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=300)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=1000)
    data: Optional[dict[str, Any]] = None
    book_ids: Optional[list[str]] = None


class SeriesEntityResponse(ResponseModel):
    """Schema for character, location and item responses."""

    id: str
    series_id: str
    name: str
    description: Optional[str]
    image_url: Optional[str]
    data: dict[str, Any]
    created_at: str
    updated_at: str


class BookLink(RequestModel):
    """Schema for linking an entity to a single book."""

    book_id: str = Field(..., min_length=1)


# ============================================================================
# Artists
# ============================================================================


class ArtistCreate(RequestModel):
    """Schema for creating an artist."""

    name: str = Field(..., min_length=1, max_length=300)
    website: Optional[str] = Field(None, max_length=1000)
    bio: Optional[str] = None


class ArtistUpdate(RequestModel):
    """Schema for updating an artist."""

    name: Optional[str] = Field(None, min_length=1, max_length=300)
    website: Optional[str] = Field(None, max_length=1000)
    bio: Optional[str] = None


class ArtistResponse(ResponseModel):
    """Schema for artist response."""

    id: str
    name: str
    website: Optional[str]
    bio: Optional[str]
    created_at: str
    updated_at: str


# ============================================================================
# Pagination
# ============================================================================


class Page(BaseModel):
    """A page of results with the total row count."""

    items: list[Any]
    total: int
    page: int
    limit: int
