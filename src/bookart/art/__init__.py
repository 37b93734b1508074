"""Art pieces and their character, location and item tags."""

from .schemas import ArtCreate, ArtDetail, ArtPage, ArtResponse, ArtUpdate
from .manager import ART_ASSOCIATIONS, ArtManager

__all__ = [
    "ArtManager",
    "ART_ASSOCIATIONS",
    "ArtCreate",
    "ArtUpdate",
    "ArtResponse",
    "ArtDetail",
    "ArtPage",
]
