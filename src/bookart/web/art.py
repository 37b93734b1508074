"""Blueprint for art pieces."""

from flask import Blueprint, request

from ..art.manager import ArtManager
from ..art.schemas import ArtCreate, ArtUpdate
from ..auth.guard import admin_required
from ..errors import NotFound
from .helpers import get_database, int_arg, parse_body, respond

art_bp = Blueprint("art", __name__)


def _manager() -> ArtManager:
    return ArtManager(get_database())


@art_bp.get("")
def list_art():
    """Paginated art, newest first."""
    page = _manager().list_art(int_arg("page", 1), int_arg("limit", 20))
    return respond(
        {"art": page.art, "total": page.total, "page": page.page, "limit": page.limit}
    )


# Registered before /<art_id> so "search" is not taken for an id
@art_bp.get("/search")
def search_art():
    """Filter art by text, book and chapter."""
    results = _manager().search_art(
        query=request.args.get("q"),
        book_id=request.args.get("bookId"),
        chapter_id=request.args.get("chapterId"),
    )
    return respond({"art": results})


@art_bp.get("/<art_id>")
def get_art(art_id: str):
    """Art piece with artist, characters, locations and items."""
    art = _manager().get_art(art_id)
    if art is None:
        raise NotFound("Art not found")
    return respond({"art": art})


@art_bp.post("")
@admin_required
def create_art():
    payload = parse_body(ArtCreate)
    return respond({"art": _manager().create_art(payload)}, 201)


@art_bp.put("/<art_id>")
@admin_required
def update_art(art_id: str):
    payload = parse_body(ArtUpdate)
    art = _manager().update_art(art_id, payload)
    if art is None:
        raise NotFound("Art not found")
    return respond({"art": art})


@art_bp.delete("/<art_id>")
@admin_required
def delete_art(art_id: str):
    if not _manager().delete_art(art_id):
        raise NotFound("Art not found")
    return respond({"message": "Art deleted successfully"})
