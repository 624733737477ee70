"""Application Ports - interfaces implemented by the infrastructure layer."""

from catalog_player.application.interfaces.audio_backend import (
    AudioBackend,
    PlayableResource,
    ResourceEvents,
)
from catalog_player.application.interfaces.search_client import TrackSearchClient

__all__ = [
    "AudioBackend",
    "PlayableResource",
    "ResourceEvents",
    "TrackSearchClient",
]
