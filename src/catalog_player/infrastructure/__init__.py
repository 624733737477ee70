"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Search (httpx client for the paginated search backend)
- Audio (virtual playback backend)
"""

from catalog_player.infrastructure.audio.virtual_player import VirtualAudioBackend
from catalog_player.infrastructure.search.http_search_client import HttpTrackSearchClient

__all__ = [
    "HttpTrackSearchClient",
    "VirtualAudioBackend",
]
