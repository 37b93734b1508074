"""Catalog-wide search."""

from .manager import DEFAULT_LIMIT, MAX_LIMIT, SearchManager
from .schemas import ResultType, SearchGroups, SearchHit, SearchResults

__all__ = [
    "SearchManager",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "ResultType",
    "SearchGroups",
    "SearchHit",
    "SearchResults",
]
