"""Audio infrastructure - virtual playback backend."""

from catalog_player.infrastructure.audio.virtual_player import (
    PlayerState,
    VirtualAudioBackend,
    VirtualResource,
)

__all__ = [
    "PlayerState",
    "VirtualAudioBackend",
    "VirtualResource",
]
