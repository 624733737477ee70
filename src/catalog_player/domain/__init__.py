"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting exceptions, types, messages and the event bus
- catalog/: Track, catalog, pagination and playback state
"""

from catalog_player.domain.catalog import Track, TrackCatalog, TrackId
from catalog_player.domain.shared.exceptions import DomainError

__all__ = [
    "Track",
    "TrackCatalog",
    "TrackId",
    "DomainError",
]
