"""Port interfaces for acquiring and controlling playable audio resources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from catalog_player.domain.shared.types import HttpUrlStr


@dataclass(frozen=True)
class ResourceEvents:
    """Notifications a playable resource delivers to its single subscriber."""

    on_metadata_ready: Callable[[float], None]
    on_time_update: Callable[[float], None]
    on_ended: Callable[[], Awaitable[None]]


class PlayableResource(ABC):
    """Opaque handle for one track's audio playback."""

    @property
    @abstractmethod
    def url(self) -> str:
        ...

    @abstractmethod
    async def play(self) -> None:
        """Start or resume playback.

        Raises:
            PlaybackStartError: If playback is refused (e.g. blocked autoplay).
        """
        ...

    @abstractmethod
    def pause(self) -> None:
        """Suspend playback, keeping the current position."""
        ...

    @abstractmethod
    def set_current_time(self, seconds: float) -> None:
        """Move the playback position."""
        ...

    @abstractmethod
    def attach(self, events: ResourceEvents) -> None:
        """Subscribe to this resource's notifications, replacing any previous subscriber."""
        ...

    @abstractmethod
    def detach(self) -> None:
        """Stop delivering notifications."""
        ...


class AudioBackend(ABC):
    """Interface for creating and disposing playable resources."""

    @abstractmethod
    def acquire(self, url: HttpUrlStr) -> PlayableResource:
        """Create a resource for a preview URL. The resource starts suspended."""
        ...

    @abstractmethod
    def release(self, resource: PlayableResource) -> None:
        """Stop and dispose a resource. Safe to call more than once."""
        ...

    def release_all(self) -> None:
        """Dispose every resource still held by this backend."""
        return None
