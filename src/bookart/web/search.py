"""Blueprint for catalog-wide search."""

from flask import Blueprint, request

from ..errors import BadRequest
from ..search.manager import DEFAULT_LIMIT, SearchManager
from .helpers import get_database, int_arg, respond

search_bp = Blueprint("search", __name__)


@search_bp.get("")
def search():
    """GET /api/search?q=...&limit=..."""
    query = request.args.get("q", "")
    if not query.strip():
        raise BadRequest("Search query is required")

    results = SearchManager(get_database()).search(query, int_arg("limit", DEFAULT_LIMIT))
    return respond(results.model_dump(mode="json"))
