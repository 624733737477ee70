"""Application services orchestrating the catalog, playback and session."""

from catalog_player.application.services.pagination_service import PaginationFetcher
from catalog_player.application.services.playback_queue import PlaybackQueue
from catalog_player.application.services.session_controller import (
    DEFAULT_PREFERENCES,
    Preference,
    SessionController,
)

__all__ = [
    "PaginationFetcher",
    "PlaybackQueue",
    "SessionController",
    "Preference",
    "DEFAULT_PREFERENCES",
]
