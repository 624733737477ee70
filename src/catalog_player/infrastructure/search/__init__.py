"""Search backend adapters."""

from catalog_player.infrastructure.search.http_search_client import HttpTrackSearchClient

__all__ = ["HttpTrackSearchClient"]
