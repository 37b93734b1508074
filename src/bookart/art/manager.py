"""Manager for art pieces.

An art piece carries three independent many-to-many relations (characters,
locations, items). Creating or updating a piece writes the row and every
relation in one transaction; any failure rolls all of it back.
"""

import logging
from typing import Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session, selectinload

from .schemas import ArtCreate, ArtDetail, ArtPage, ArtResponse, ArtUpdate
from ..catalog.associations import Association, replace_links
from ..db.models import (
    Art,
    Artist,
    Book,
    Chapter,
    Character,
    Item,
    Location,
    art_characters,
    art_items,
    art_locations,
    utc_now,
)
from ..db.sqlite import Database
from ..errors import BadRequest

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

ART_ASSOCIATIONS = (
    Association("characters", art_characters, "art_id", "character_id", Character, "Characters"),
    Association("locations", art_locations, "art_id", "location_id", Location, "Locations"),
    Association("items", art_items, "art_id", "item_id", Item, "Items"),
)

_NOT_NULL = ("image_url", "tags", "order_index")


class ArtManager:
    """Manager for art operations."""

    def __init__(self, db: Database):
        """Initialize the art manager.

        Args:
            db: Database instance
        """
        self.db = db

    # ========================================================================
    # Queries
    # ========================================================================

    def list_art(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> ArtPage:
        """List art, newest first, one page at a time.

        Args:
            page: 1-based page number
            limit: Pieces per page, capped at MAX_PAGE_SIZE

        Returns:
            The page of art with the total count
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        with self.db.get_session() as session:
            total = session.execute(select(func.count()).select_from(Art)).scalar_one()
            stmt = (
                select(Art)
                .order_by(Art.created_at.desc(), Art.id)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            rows = session.execute(stmt).scalars().all()

            return ArtPage(
                art=[ArtResponse.model_validate(a) for a in rows],
                total=total,
                page=page,
                limit=limit,
            )

    def get_art(self, art_id: str) -> Optional[ArtDetail]:
        """Get an art piece with its artist and tagged entities.

        Args:
            art_id: Art UUID

        Returns:
            The composed view, or None if not found
        """
        with self.db.get_session() as session:
            stmt = (
                select(Art)
                .where(Art.id == art_id)
                .options(
                    selectinload(Art.artist),
                    selectinload(Art.characters),
                    selectinload(Art.locations),
                    selectinload(Art.items),
                )
            )
            art = session.execute(stmt).scalar_one_or_none()
            if art is None:
                return None
            return ArtDetail.model_validate(art)

    def search_art(
        self,
        query: Optional[str] = None,
        book_id: Optional[str] = None,
        chapter_id: Optional[str] = None,
    ) -> list[ArtResponse]:
        """Filter art by text, book and chapter, newest first.

        Args:
            query: Substring matched against title or description
            book_id: Only art for this book
            chapter_id: Only art pinned to this chapter
        """
        stmt = select(Art)
        if query and query.strip():
            term = query.strip()
            stmt = stmt.where(
                or_(
                    Art.title.icontains(term, autoescape=True),
                    Art.description.icontains(term, autoescape=True),
                )
            )
        if book_id:
            stmt = stmt.where(Art.book_id == book_id)
        if chapter_id:
            stmt = stmt.where(Art.chapter_id == chapter_id)
        stmt = stmt.order_by(Art.created_at.desc(), Art.id)

        with self.db.get_session() as session:
            return [ArtResponse.model_validate(a) for a in session.execute(stmt).scalars()]

    # ========================================================================
    # Writes
    # ========================================================================

    def create_art(self, payload: ArtCreate) -> ArtResponse:
        """Create an art piece and its tags in one transaction.

        Raises:
            BadRequest: If the book, chapter or artist does not exist, or a
                        tagged entity is not part of the book's series
        """
        data = payload.model_dump()
        links = {a.field: data.pop(a.field) for a in ART_ASSOCIATIONS}

        with self.db.get_session() as session:
            book = session.get(Book, data["book_id"])
            if book is None:
                raise BadRequest(f"Book {data['book_id']} does not exist")
            self._check_refs(session, book, data)

            art = Art(**data)
            session.add(art)
            session.flush()

            for association in ART_ASSOCIATIONS:
                replace_links(
                    session, association, art.id, links[association.field],
                    series_id=book.series_id,
                )

            logger.info("Created art %s for book %s", art.id, book.id)
            return ArtResponse.model_validate(art)

    def update_art(self, art_id: str, payload: ArtUpdate) -> Optional[ArtResponse]:
        """Update an art piece in one transaction.

        Scalar fields present in the payload are written. Each association
        list that is present replaces that relation; absent lists are kept.

        Returns:
            Updated art, or None if not found
        """
        data = payload.model_dump(exclude_unset=True)
        links = {a.field: data.pop(a.field) for a in ART_ASSOCIATIONS if a.field in data}

        with self.db.get_session() as session:
            art = session.get(Art, art_id)
            if art is None:
                return None

            for field in _NOT_NULL:
                if field in data and data[field] is None:
                    raise BadRequest(f"{field} cannot be null")

            book = session.get(Book, art.book_id)
            self._check_refs(session, book, data)

            for field, value in data.items():
                setattr(art, field, value)
            if data or links:
                art.updated_at = utc_now()
            session.flush()

            for association in ART_ASSOCIATIONS:
                if association.field in links:
                    replace_links(
                        session, association, art.id, links[association.field],
                        series_id=book.series_id,
                    )

            logger.info("Updated art %s", art.id)
            return ArtResponse.model_validate(art)

    def delete_art(self, art_id: str) -> bool:
        """Delete an art piece. Tag links cascade.

        Returns:
            True if deleted, False if not found
        """
        with self.db.get_session() as session:
            result = session.execute(delete(Art).where(Art.id == art_id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info("Deleted art %s", art_id)
        return deleted

    # ========================================================================
    # Helpers
    # ========================================================================

    def _check_refs(self, session: Session, book: Book, data: dict) -> None:
        """Validate the optional chapter and artist references."""
        chapter_id = data.get("chapter_id")
        if chapter_id is not None:
            chapter = session.get(Chapter, chapter_id)
            if chapter is None or chapter.book_id != book.id:
                raise BadRequest(f"Chapter {chapter_id} is not part of book {book.id}")

        artist_id = data.get("artist_id")
        if artist_id is not None and session.get(Artist, artist_id) is None:
            raise BadRequest(f"Artist {artist_id} does not exist")
