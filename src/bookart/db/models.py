"""SQLAlchemy ORM models for the Book Art catalog.

Tables:
- series: Top-level collections of books
- books: Books, each owned by a series
- chapters: Chapters within a book
- characters / locations / items: Entities scoped to a series
- artists: Creators credited on art
- art: Artwork attached to a book and optionally a chapter
- users: Accounts for the admin surface

Junction tables (many-to-many):
- book_characters, book_locations, book_items
- art_characters, art_locations, art_items
"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string for primary keys."""
    return str(uuid4())


def utc_now() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class TimestampMixin:
    """Server-assigned creation and modification timestamps."""

    created_at: Mapped[str] = mapped_column(String(32), default=utc_now, index=True)
    updated_at: Mapped[str] = mapped_column(String(32), default=utc_now, onupdate=utc_now)


def _junction(name: str, left: tuple[str, str], right: tuple[str, str]) -> Table:
    """Build a junction table holding only a pair of cascading foreign keys.

    ``left`` and ``right`` are ``(column, referenced_table)`` pairs.
    """
    (left_col, left_table), (right_col, right_table) = left, right
    return Table(
        name,
        Base.metadata,
        Column(
            left_col,
            String(36),
            ForeignKey(f"{left_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            right_col,
            String(36),
            ForeignKey(f"{right_table}.id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )


book_characters = _junction(
    "book_characters", ("book_id", "books"), ("character_id", "characters")
)
book_locations = _junction(
    "book_locations", ("book_id", "books"), ("location_id", "locations")
)
book_items = _junction("book_items", ("book_id", "books"), ("item_id", "items"))
art_characters = _junction(
    "art_characters", ("art_id", "art"), ("character_id", "characters")
)
art_locations = _junction("art_locations", ("art_id", "art"), ("location_id", "locations"))
art_items = _junction("art_items", ("art_id", "art"), ("item_id", "items"))


class Series(TimestampMixin, Base):
    """A collection of books sharing a continuity."""

    __tablename__ = "series"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[Optional[str]] = mapped_column(String(300))
    description: Mapped[Optional[str]] = mapped_column(Text)
    cover_image_url: Mapped[Optional[str]] = mapped_column(String(1000))

    books: Mapped[list["Book"]] = relationship(
        back_populates="series", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Series(id={self.id}, title='{self.title}')>"


class Book(TimestampMixin, Base):
    """A book within a series."""

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    series_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    author: Mapped[Optional[str]] = mapped_column(String(300))
    description: Mapped[Optional[str]] = mapped_column(Text)
    cover_image_url: Mapped[Optional[str]] = mapped_column(String(1000))

    series: Mapped["Series"] = relationship(back_populates="books")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"


class Chapter(TimestampMixin, Base):
    """A chapter of a book. chapter_number orders chapters but is not unique."""

    __tablename__ = "chapters"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    book_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    chapter_number: Mapped[int] = mapped_column(Integer, nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text)

    book: Mapped["Book"] = relationship()

    def __repr__(self) -> str:
        return f"<Chapter(id={self.id}, number={self.chapter_number})>"


class _SeriesEntity(TimestampMixin):
    """Columns shared by characters, locations and items."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image_url: Mapped[Optional[str]] = mapped_column(String(1000))
    data: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)


class Character(_SeriesEntity, Base):
    """A character appearing in a series."""

    __tablename__ = "characters"

    series_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True
    )
    series: Mapped["Series"] = relationship()
    books: Mapped[list["Book"]] = relationship(
        secondary=book_characters, order_by="Book.title", passive_deletes=True
    )


class Location(_SeriesEntity, Base):
    """A place within a series."""

    __tablename__ = "locations"

    series_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True
    )
    series: Mapped["Series"] = relationship()
    books: Mapped[list["Book"]] = relationship(
        secondary=book_locations, order_by="Book.title", passive_deletes=True
    )


class Item(_SeriesEntity, Base):
    """A notable object within a series."""

    __tablename__ = "items"

    series_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("series.id", ondelete="CASCADE"), nullable=False, index=True
    )
    series: Mapped["Series"] = relationship()
    books: Mapped[list["Book"]] = relationship(
        secondary=book_items, order_by="Book.title", passive_deletes=True
    )


class Artist(TimestampMixin, Base):
    """An artist credited on art pieces."""

    __tablename__ = "artists"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    website: Mapped[Optional[str]] = mapped_column(String(1000))
    bio: Mapped[Optional[str]] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Artist(id={self.id}, name='{self.name}')>"


class Art(TimestampMixin, Base):
    """A piece of art for a book, optionally pinned to a chapter."""

    __tablename__ = "art"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    book_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )
    chapter_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("chapters.id", ondelete="CASCADE"), index=True
    )
    artist_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("artists.id", ondelete="SET NULL"), index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(500))
    description: Mapped[Optional[str]] = mapped_column(Text)
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    book: Mapped["Book"] = relationship()
    artist: Mapped[Optional["Artist"]] = relationship()
    characters: Mapped[list["Character"]] = relationship(
        secondary=art_characters, order_by="Character.name", passive_deletes=True
    )
    locations: Mapped[list["Location"]] = relationship(
        secondary=art_locations, order_by="Location.name", passive_deletes=True
    )
    items: Mapped[list["Item"]] = relationship(
        secondary=art_items, order_by="Item.name", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Art(id={self.id}, book_id={self.book_id})>"


class User(TimestampMixin, Base):
    """An account. Only admins may mutate the catalog."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
