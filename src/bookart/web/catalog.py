"""Blueprints for series, books, chapters, characters, locations, items and artists.

Every resource gets the same list/get/create/update/delete surface; nested
read-only projections are added per resource.
"""

from typing import Callable, Optional

from flask import Blueprint, request

from ..auth.guard import admin_required
from ..catalog.manager import (
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
from ..db.schemas import BookLink
from ..errors import NotFound
from .helpers import get_database, int_arg, parse_body, respond


def _found(value, label: str):
    if value is None:
        raise NotFound(f"{label} not found")
    return value


def crud_blueprint(
    name: str,
    manager_cls: type[CatalogManager],
    singular: str,
    plural: str,
    paginated: bool = False,
) -> tuple[Blueprint, Callable[[], CatalogManager]]:
    """Build a blueprint with list/get/create/update/delete routes.

    Args:
        name: Blueprint name
        manager_cls: Manager class for the resource
        singular: Response key for one row, e.g. "book"
        plural: Response key for lists, e.g. "books"
        paginated: Whether the list route takes page/limit parameters

    Returns:
        The blueprint and a factory for the resource's manager
    """
    bp = Blueprint(name, __name__)
    label = manager_cls.label

    def manager() -> CatalogManager:
        return manager_cls(get_database())

    @bp.get("")
    def list_rows():
        filters = {}
        if "series_id" in manager_cls.model.__table__.c:
            filters["series_id"] = request.args.get("seriesId") or None
        if paginated:
            page = manager().list_page(int_arg("page", 1), int_arg("limit", 20), **filters)
            return respond(
                {plural: page.items, "total": page.total, "page": page.page, "limit": page.limit}
            )
        return respond({plural: manager().list_all(**filters)})

    @bp.get("/<entry_id>")
    def get_row(entry_id: str):
        return respond({singular: _found(manager().get(entry_id), label)})

    @bp.post("")
    @admin_required
    def create_row():
        payload = parse_body(manager_cls.create_schema)
        return respond({singular: manager().create(payload)}, 201)

    @bp.put("/<entry_id>")
    @admin_required
    def update_row(entry_id: str):
        payload = parse_body(manager_cls.update_schema)
        return respond({singular: _found(manager().update(entry_id, payload), label)})

    @bp.delete("/<entry_id>")
    @admin_required
    def delete_row(entry_id: str):
        if not manager().delete(entry_id):
            raise NotFound(f"{label} not found")
        return respond({"message": f"{label} deleted successfully"})

    return bp, manager


def _nested(bp: Blueprint, path: str, key: str, label: str, fetch: Callable[[str], Optional[list]]):
    """Register a read-only ``GET /<id>/<path>`` projection."""

    def view(entry_id: str):
        return respond({key: _found(fetch(entry_id), label)})

    view.__name__ = f"list_{path}"
    bp.add_url_rule(f"/<entry_id>/{path}", view_func=view, methods=["GET"])


def _book_links(bp: Blueprint, manager: Callable[[], SeriesEntityManager], label: str):
    """Register routes that link or unlink a single book."""

    @bp.post("/<entry_id>/books")
    @admin_required
    def link_book(entry_id: str):
        link = parse_body(BookLink)
        _found(manager().link(entry_id, "book_ids", link.book_id), label)
        return respond({"message": f"{label} associated with book"}, 201)

    @bp.delete("/<entry_id>/books/<book_id>")
    @admin_required
    def unlink_book(entry_id: str, book_id: str):
        _found(manager().unlink(entry_id, "book_ids", book_id), label)
        return respond({"message": f"{label} removed from book"})


# ============================================================================
# Resources
# ============================================================================

series_bp, _series = crud_blueprint("series", SeriesManager, "series", "series")
_nested(series_bp, "books", "books", "Series", lambda i: _series().list_books(i))
_nested(series_bp, "characters", "characters", "Series", lambda i: _series().list_characters(i))
_nested(series_bp, "locations", "locations", "Series", lambda i: _series().list_locations(i))
_nested(series_bp, "items", "items", "Series", lambda i: _series().list_items(i))

books_bp, _books = crud_blueprint("books", BookManager, "book", "books")
_nested(books_bp, "chapters", "chapters", "Book", lambda i: _books().list_chapters(i))
_nested(books_bp, "characters", "characters", "Book", lambda i: _books().list_characters(i))
_nested(books_bp, "locations", "locations", "Book", lambda i: _books().list_locations(i))
_nested(books_bp, "items", "items", "Book", lambda i: _books().list_items(i))
_nested(books_bp, "art", "art", "Book", lambda i: _books().list_art(i))

chapters_bp, _chapters = crud_blueprint("chapters", ChapterManager, "chapter", "chapters")
_nested(chapters_bp, "art", "art", "Chapter", lambda i: _chapters().list_art(i))

characters_bp, _characters = crud_blueprint(
    "characters", CharacterManager, "character", "characters", paginated=True
)
_nested(characters_bp, "books", "books", "Character", lambda i: _characters().list_books(i))
_nested(characters_bp, "art", "art", "Character", lambda i: _characters().list_art(i))
_book_links(characters_bp, _characters, "Character")

locations_bp, _locations = crud_blueprint(
    "locations", LocationManager, "location", "locations", paginated=True
)
_nested(locations_bp, "books", "books", "Location", lambda i: _locations().list_books(i))
_nested(locations_bp, "art", "art", "Location", lambda i: _locations().list_art(i))
_book_links(locations_bp, _locations, "Location")

items_bp, _items = crud_blueprint("items", ItemManager, "item", "items", paginated=True)
_nested(items_bp, "books", "books", "Item", lambda i: _items().list_books(i))
_nested(items_bp, "art", "art", "Item", lambda i: _items().list_art(i))
_book_links(items_bp, _items, "Item")

artists_bp, _artists = crud_blueprint("artists", ArtistManager, "artist", "artists")
_nested(artists_bp, "art", "art", "Artist", lambda i: _artists().list_art(i))

CATALOG_BLUEPRINTS = (
    (series_bp, "/api/series"),
    (books_bp, "/api/books"),
    (chapters_bp, "/api/chapters"),
    (characters_bp, "/api/characters"),
    (locations_bp, "/api/locations"),
    (items_bp, "/api/items"),
    (artists_bp, "/api/artists"),
)
