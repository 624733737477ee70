"""
Catalog Bounded Context

Domain logic for search results, pagination state and playback state.
"""

from catalog_player.domain.catalog.entities import (
    PageState,
    PlaybackState,
    Track,
    TrackCatalog,
    TrackPage,
)
from catalog_player.domain.catalog.services import CatalogMergeService, MergeResult
from catalog_player.domain.catalog.value_objects import MergePolicy, PlaybackStatus, TrackId

__all__ = [
    # Entities
    "Track",
    "TrackCatalog",
    "TrackPage",
    "PageState",
    "PlaybackState",
    # Value Objects
    "TrackId",
    "MergePolicy",
    "PlaybackStatus",
    # Services
    "CatalogMergeService",
    "MergeResult",
]
