"""Manager for catalog-wide search.

Each entity type is searched on its own: case-insensitive substring match on
the primary field (title/name) or the secondary field (description/summary).
Within a type, hits whose primary field starts with the query come first,
then alphabetical by primary field. Types are never merged or ranked against
each other.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import case, func, null, or_, select
from sqlalchemy.orm import Session

from ..db.models import Base, Book, Chapter, Character, Item, Location, Series
from ..db.sqlite import Database, get_db
from ..errors import BadRequest
from .schemas import ResultType, SearchGroups, SearchHit, SearchResults

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


@dataclass(frozen=True)
class _Target:
    """How one entity type is searched and reported."""

    group: str
    type: ResultType
    model: type[Base]
    primary: str
    secondary: str
    image: Optional[str] = None
    parent_model: Optional[type[Base]] = None
    parent_fk: Optional[str] = None
    parent_name: Optional[str] = None


_TARGETS = (
    _Target("series", ResultType.SERIES, Series, "title", "description", "cover_image_url"),
    _Target(
        "books", ResultType.BOOK, Book, "title", "description", "cover_image_url",
        Series, "series_id", "title",
    ),
    _Target("chapters", ResultType.CHAPTER, Chapter, "title", "summary", None, Book, "book_id", "title"),
    _Target(
        "characters", ResultType.CHARACTER, Character, "name", "description", "image_url",
        Series, "series_id", "title",
    ),
    _Target(
        "locations", ResultType.LOCATION, Location, "name", "description", "image_url",
        Series, "series_id", "title",
    ),
    _Target(
        "items", ResultType.ITEM, Item, "name", "description", "image_url",
        Series, "series_id", "title",
    ),
)


def normalize_limit(limit: Optional[int]) -> int:
    """Clamp a requested per-type limit into [1, MAX_LIMIT]."""
    if limit is None:
        return DEFAULT_LIMIT
    return min(max(int(limit), 1), MAX_LIMIT)


class SearchManager:
    """Searches series, books, chapters, characters, locations and items."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize search manager.

        Args:
            db: Database instance
        """
        self.db = db or get_db()

    def search(self, query: Optional[str], limit: Optional[int] = DEFAULT_LIMIT) -> SearchResults:
        """Search every entity type for ``query``.

        Args:
            query: Free text; leading and trailing whitespace is ignored
            limit: Max hits per type (default 20, capped at 100)

        Returns:
            Hits grouped by type with the total across all groups

        Raises:
            BadRequest: If the query is missing or blank
        """
        term = (query or "").strip()
        if not term:
            raise BadRequest("Search query is required")
        per_type = normalize_limit(limit)

        groups: dict[str, list[SearchHit]] = {}
        # One session: every group is read from the same snapshot
        with self.db.get_session() as session:
            for target in _TARGETS:
                groups[target.group] = self._search_target(session, target, term, per_type)

        results = SearchGroups(**groups)
        total = results.count()
        logger.debug("Search %r returned %d hits", term, total)
        return SearchResults(query=term, total_count=total, results=results)

    def _search_target(
        self, session: Session, target: _Target, term: str, limit: int
    ) -> list[SearchHit]:
        model = target.model
        primary = getattr(model, target.primary)
        secondary = getattr(model, target.secondary)
        image = getattr(model, target.image) if target.image else null()

        columns: list[Any] = [
            model.id,
            primary.label("name"),
            secondary.label("description"),
            image.label("image_url"),
        ]
        stmt = select(*columns)

        if target.parent_model is not None:
            parent = target.parent_model
            stmt = stmt.add_columns(
                parent.id.label("parent_id"),
                getattr(parent, target.parent_name).label("parent_name"),
            ).outerjoin(parent, getattr(model, target.parent_fk) == parent.id)

        prefix_first = case((primary.istartswith(term, autoescape=True), 0), else_=1)
        stmt = (
            stmt.where(
                or_(
                    primary.icontains(term, autoescape=True),
                    secondary.icontains(term, autoescape=True),
                )
            )
            .order_by(prefix_first, func.lower(primary), primary, model.id)
            .limit(limit)
        )

        return [
            SearchHit(type=target.type, **row._asdict())
            for row in session.execute(stmt)
        ]
