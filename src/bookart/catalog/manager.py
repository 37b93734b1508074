"""Managers for catalog entities.

``CatalogManager`` implements list/get/create/update/delete for one table,
parameterized by model, schemas and junction-table associations. Every write,
including link replacement, runs inside a single session so it commits or
rolls back as a whole.
"""

import logging
from typing import Any, ClassVar, Optional

from pydantic import BaseModel
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..art.schemas import ArtResponse
from ..db.models import (
    Art,
    Artist,
    Base,
    Book,
    Chapter,
    Character,
    Item,
    Location,
    Series,
    art_characters,
    art_items,
    art_locations,
    book_characters,
    book_items,
    book_locations,
    utc_now,
)
from ..db.schemas import (
    ArtistCreate,
    ArtistResponse,
    ArtistUpdate,
    BookCreate,
    BookResponse,
    BookUpdate,
    ChapterCreate,
    ChapterResponse,
    ChapterUpdate,
    Page,
    SeriesCreate,
    SeriesEntityCreate,
    SeriesEntityResponse,
    SeriesEntityUpdate,
    SeriesResponse,
    SeriesUpdate,
)
from ..db.sqlite import Database
from ..errors import BadRequest
from .associations import Association, add_link, remove_link, replace_links

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class CatalogManager:
    """Generic CRUD manager for one catalog table.

    Subclasses set the class attributes below and add their nested
    read-only projections.
    """

    model: ClassVar[type[Base]]
    label: ClassVar[str]
    create_schema: ClassVar[type[BaseModel]]
    update_schema: ClassVar[type[BaseModel]]
    response_schema: ClassVar[type[BaseModel]]
    order_by: ClassVar[tuple] = ()
    # Foreign key column -> model that must contain the referenced row
    parents: ClassVar[dict[str, type[Base]]] = {}
    associations: ClassVar[tuple[Association, ...]] = ()

    def __init__(self, db: Database):
        """Initialize the manager.

        Args:
            db: Database instance
        """
        self.db = db

    # ========================================================================
    # CRUD
    # ========================================================================

    def list_all(self, **filters: Any) -> list[BaseModel]:
        """List every row, ordered by the natural key.

        Args:
            **filters: Column equality filters, e.g. ``series_id="..."``.
                       ``None`` values are ignored.
        """
        with self.db.get_session() as session:
            stmt = self._filtered(select(self.model), filters).order_by(*self.order_by)
            rows = session.execute(stmt).scalars().all()
            return [self._to_response(row) for row in rows]

    def list_page(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, **filters: Any
    ) -> Page:
        """List one page of rows with the total row count.

        Args:
            page: 1-based page number
            limit: Rows per page, capped at MAX_PAGE_SIZE
            **filters: Column equality filters
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        with self.db.get_session() as session:
            count_stmt = self._filtered(select(func.count()).select_from(self.model), filters)
            total = session.execute(count_stmt).scalar_one()

            stmt = (
                self._filtered(select(self.model), filters)
                .order_by(*self.order_by)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            rows = session.execute(stmt).scalars().all()
            return Page(
                items=[self._to_response(row) for row in rows],
                total=total,
                page=page,
                limit=limit,
            )

    def get(self, entry_id: str) -> Optional[BaseModel]:
        """Get a row by ID, or None if it does not exist."""
        with self.db.get_session() as session:
            row = session.get(self.model, entry_id)
            if row is None:
                return None
            return self._to_response(row)

    def create(self, payload: BaseModel) -> BaseModel:
        """Insert a row and its links in one transaction.

        Raises:
            BadRequest: If a referenced parent or linked row does not exist
        """
        data = payload.model_dump()
        links = {a.field: data.pop(a.field) for a in self.associations}

        with self.db.get_session() as session:
            self._check_parents(session, data)

            row = self.model(**data)
            session.add(row)
            session.flush()

            for association in self.associations:
                replace_links(
                    session,
                    association,
                    row.id,
                    links[association.field],
                    series_id=self._link_scope(row),
                )

            logger.info("Created %s %s", self.label.lower(), row.id)
            return self._to_response(row)

    def update(self, entry_id: str, payload: BaseModel) -> Optional[BaseModel]:
        """Apply a partial update.

        Only fields present in the payload are written. An association list
        that is present replaces the existing links.

        Returns:
            The updated row, or None if it does not exist

        Raises:
            BadRequest: If a required column is set to null or a referenced
                        row does not exist
        """
        data = payload.model_dump(exclude_unset=True)
        links = {a.field: data.pop(a.field) for a in self.associations if a.field in data}

        with self.db.get_session() as session:
            row = session.get(self.model, entry_id)
            if row is None:
                return None

            self._check_not_null(data)
            self._check_parents(session, data)
            self._before_update(session, row, data)

            for field, value in data.items():
                setattr(row, field, value)
            if data or links:
                row.updated_at = utc_now()
            session.flush()

            for association in self.associations:
                if association.field in links:
                    replace_links(
                        session,
                        association,
                        row.id,
                        links[association.field],
                        series_id=self._link_scope(row),
                    )

            logger.info("Updated %s %s", self.label.lower(), row.id)
            return self._to_response(row)

    def delete(self, entry_id: str) -> bool:
        """Hard-delete a row. Dependents go with it via ON DELETE CASCADE.

        Returns:
            True if deleted, False if not found
        """
        with self.db.get_session() as session:
            result = session.execute(delete(self.model).where(self.model.id == entry_id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info("Deleted %s %s", self.label.lower(), entry_id)
        return deleted

    # ========================================================================
    # Single-link operations
    # ========================================================================

    def link(self, entry_id: str, field: str, other_id: str) -> Optional[bool]:
        """Add one link. Returns None if the owner does not exist."""
        association = self._association(field)
        with self.db.get_session() as session:
            row = session.get(self.model, entry_id)
            if row is None:
                return None
            return add_link(
                session,
                association,
                entry_id,
                other_id,
                series_id=self._link_scope(row),
            )

    def unlink(self, entry_id: str, field: str, other_id: str) -> Optional[bool]:
        """Remove one link. Returns None if the owner does not exist."""
        association = self._association(field)
        with self.db.get_session() as session:
            if session.get(self.model, entry_id) is None:
                return None
            return remove_link(session, association, entry_id, other_id)

    # ========================================================================
    # Helpers
    # ========================================================================

    def _to_response(self, row: Base) -> BaseModel:
        return self.response_schema.model_validate(row)

    def _filtered(self, stmt, filters: dict[str, Any]):
        for column, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(self.model, column) == value)
        return stmt

    def _association(self, field: str) -> Association:
        for association in self.associations:
            if association.field == field:
                return association
        raise KeyError(f"{self.label} has no association {field!r}")

    def _before_update(self, session: Session, row: Base, data: dict[str, Any]) -> None:
        """Hook run inside the update transaction before fields are written."""

    def _link_scope(self, row: Base) -> Optional[str]:
        """Series that linked rows must belong to."""
        return getattr(row, "series_id", None)

    def _check_not_null(self, data: dict[str, Any]) -> None:
        columns = self.model.__table__.c
        for field, value in data.items():
            if value is None and field in columns and not columns[field].nullable:
                raise BadRequest(f"{field} cannot be null")

    def _check_parents(self, session: Session, data: dict[str, Any]) -> None:
        for column, parent_model in self.parents.items():
            parent_id = data.get(column)
            if parent_id is not None and session.get(parent_model, parent_id) is None:
                raise BadRequest(f"{parent_model.__name__} {parent_id} does not exist")

    def _children(
        self,
        parent_id: str,
        child_model: type[Base],
        column: str,
        schema: type[BaseModel],
        *order_by,
    ) -> Optional[list[BaseModel]]:
        """Rows of ``child_model`` whose ``column`` points at ``parent_id``.

        Returns None if the parent does not exist.
        """
        with self.db.get_session() as session:
            if session.get(self.model, parent_id) is None:
                return None
            stmt = (
                select(child_model)
                .where(getattr(child_model, column) == parent_id)
                .order_by(*order_by)
            )
            return [schema.model_validate(r) for r in session.execute(stmt).scalars()]

    def _linked(
        self,
        owner_id: str,
        table,
        owner_column: str,
        other_column: str,
        other_model: type[Base],
        schema: type[BaseModel],
        *order_by,
    ) -> Optional[list[BaseModel]]:
        """Rows of ``other_model`` reached from ``owner_id`` through a junction table.

        Returns None if the owner does not exist.
        """
        with self.db.get_session() as session:
            if session.get(self.model, owner_id) is None:
                return None
            stmt = (
                select(other_model)
                .join(table, table.c[other_column] == other_model.id)
                .where(table.c[owner_column] == owner_id)
                .order_by(*order_by)
            )
            return [schema.model_validate(r) for r in session.execute(stmt).scalars()]


# ============================================================================
# Series
# ============================================================================


class SeriesManager(CatalogManager):
    """Manager for series."""

    model = Series
    label = "Series"
    create_schema = SeriesCreate
    update_schema = SeriesUpdate
    response_schema = SeriesResponse
    order_by = (Series.title.asc(), Series.id)

    def list_books(self, series_id: str) -> Optional[list[BaseModel]]:
        """Books in a series, by title."""
        return self._children(series_id, Book, "series_id", BookResponse, Book.title.asc())

    def list_characters(self, series_id: str) -> Optional[list[BaseModel]]:
        """Characters in a series, by name."""
        return self._children(
            series_id, Character, "series_id", SeriesEntityResponse, Character.name.asc()
        )

    def list_locations(self, series_id: str) -> Optional[list[BaseModel]]:
        """Locations in a series, by name."""
        return self._children(
            series_id, Location, "series_id", SeriesEntityResponse, Location.name.asc()
        )

    def list_items(self, series_id: str) -> Optional[list[BaseModel]]:
        """Items in a series, by name."""
        return self._children(series_id, Item, "series_id", SeriesEntityResponse, Item.name.asc())


# ============================================================================
# Books
# ============================================================================


class BookManager(CatalogManager):
    """Manager for books."""

    model = Book
    label = "Book"
    create_schema = BookCreate
    update_schema = BookUpdate
    response_schema = BookResponse
    order_by = (Book.created_at.desc(), Book.id)
    parents = {"series_id": Series}
    # (junction table, entity column, entity model) for book and art links
    book_links = (
        (book_characters, "character_id", Character),
        (book_locations, "location_id", Location),
        (book_items, "item_id", Item),
    )
    art_links = (
        (art_characters, "character_id", Character),
        (art_locations, "location_id", Location),
        (art_items, "item_id", Item),
    )

    def _before_update(self, session: Session, row: Base, data: dict[str, Any]) -> None:
        """Drop links to the old series when a book moves to another one.

        Links on the book and tags on its art may only point at entities of
        the book's series, so rows that would cross series are deleted.
        """
        new_series = data.get("series_id")
        if new_series is None or new_series == row.series_id:
            return

        removed = 0
        for table, column, model in self.book_links:
            stale = select(model.id).where(model.series_id != new_series)
            result = session.execute(
                delete(table).where(table.c.book_id == row.id, table.c[column].in_(stale))
            )
            removed += result.rowcount

        book_art = select(Art.id).where(Art.book_id == row.id)
        for table, column, model in self.art_links:
            stale = select(model.id).where(model.series_id != new_series)
            result = session.execute(
                delete(table).where(table.c.art_id.in_(book_art), table.c[column].in_(stale))
            )
            removed += result.rowcount

        logger.info(
            "Book %s moved to series %s; removed %d cross-series links",
            row.id, new_series, removed,
        )

    def list_chapters(self, book_id: str) -> Optional[list[BaseModel]]:
        """Chapters of a book, by chapter number."""
        return self._children(
            book_id, Chapter, "book_id", ChapterResponse,
            Chapter.chapter_number.asc(), Chapter.title.asc(),
        )

    def list_characters(self, book_id: str) -> Optional[list[BaseModel]]:
        """Characters appearing in a book."""
        return self._linked(
            book_id, book_characters, "book_id", "character_id",
            Character, SeriesEntityResponse, Character.name.asc(),
        )

    def list_locations(self, book_id: str) -> Optional[list[BaseModel]]:
        """Locations appearing in a book."""
        return self._linked(
            book_id, book_locations, "book_id", "location_id",
            Location, SeriesEntityResponse, Location.name.asc(),
        )

    def list_items(self, book_id: str) -> Optional[list[BaseModel]]:
        """Items appearing in a book."""
        return self._linked(
            book_id, book_items, "book_id", "item_id",
            Item, SeriesEntityResponse, Item.name.asc(),
        )

    def list_art(self, book_id: str) -> Optional[list[BaseModel]]:
        """All art for a book, in display order."""
        return self._children(
            book_id, Art, "book_id", ArtResponse, Art.order_index.asc(), Art.created_at.asc()
        )


# ============================================================================
# Chapters
# ============================================================================


class ChapterManager(CatalogManager):
    """Manager for chapters."""

    model = Chapter
    label = "Chapter"
    create_schema = ChapterCreate
    update_schema = ChapterUpdate
    response_schema = ChapterResponse
    order_by = (Chapter.book_id, Chapter.chapter_number.asc(), Chapter.title.asc())
    parents = {"book_id": Book}

    def list_art(self, chapter_id: str) -> Optional[list[BaseModel]]:
        """Art pinned to a chapter, in display order."""
        return self._children(
            chapter_id, Art, "chapter_id", ArtResponse,
            Art.order_index.asc(), Art.created_at.asc(),
        )


# ============================================================================
# Characters, locations and items
# ============================================================================


class SeriesEntityManager(CatalogManager):
    """Shared behaviour for entities scoped to a series and linked to books."""

    create_schema = SeriesEntityCreate
    update_schema = SeriesEntityUpdate
    response_schema = SeriesEntityResponse
    parents = {"series_id": Series}
    # Junction table linking art to this entity, and its column name
    art_table: ClassVar[Any]
    art_column: ClassVar[str]

    def list_books(self, entry_id: str) -> Optional[list[BaseModel]]:
        """Books this entity appears in, by title."""
        association = self.associations[0]
        return self._linked(
            entry_id, association.table, association.owner_column,
            association.other_column, Book, BookResponse, Book.title.asc(),
        )

    def list_art(self, entry_id: str) -> Optional[list[BaseModel]]:
        """Art tagged with this entity, newest first."""
        return self._linked(
            entry_id, self.art_table, self.art_column, "art_id",
            Art, ArtResponse, Art.created_at.desc(),
        )


class CharacterManager(SeriesEntityManager):
    """Manager for characters."""

    model = Character
    label = "Character"
    order_by = (Character.name.asc(), Character.id)
    associations = (
        Association("book_ids", book_characters, "character_id", "book_id", Book, "Books"),
    )
    art_table = art_characters
    art_column = "character_id"


class LocationManager(SeriesEntityManager):
    """Manager for locations."""

    model = Location
    label = "Location"
    order_by = (Location.name.asc(), Location.id)
    associations = (
        Association("book_ids", book_locations, "location_id", "book_id", Book, "Books"),
    )
    art_table = art_locations
    art_column = "location_id"


class ItemManager(SeriesEntityManager):
    """Manager for items."""

    model = Item
    label = "Item"
    order_by = (Item.name.asc(), Item.id)
    associations = (
        Association("book_ids", book_items, "item_id", "book_id", Book, "Books"),
    )
    art_table = art_items
    art_column = "item_id"


# ============================================================================
# Artists
# ============================================================================


class ArtistManager(CatalogManager):
    """Manager for artists."""

    model = Artist
    label = "Artist"
    create_schema = ArtistCreate
    update_schema = ArtistUpdate
    response_schema = ArtistResponse
    order_by = (Artist.name.asc(), Artist.id)

    def list_art(self, artist_id: str) -> Optional[list[BaseModel]]:
        """Art credited to an artist, newest first."""
        return self._children(
            artist_id, Art, "artist_id", ArtResponse, Art.created_at.desc(), Art.id
        )
