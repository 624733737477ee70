"""
Virtual Audio Player

Infrastructure component that simulates preview playback on the event loop
clock. It produces the same notifications a real player would (metadata,
time updates, end of track) without decoding any audio.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum

from catalog_player.application.interfaces.audio_backend import (
    AudioBackend,
    PlayableResource,
    ResourceEvents,
)
from catalog_player.config.settings import PlayerSettings
from catalog_player.domain.shared.exceptions import PlaybackStartError
from catalog_player.domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)


class PlayerState(Enum):
    """States for a virtual resource."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"
    RELEASED = "released"


class VirtualResource(PlayableResource):
    """A preview that advances by ``tick_interval`` every tick while playing."""

    def __init__(
        self,
        url: str,
        *,
        duration: float,
        tick_interval: float,
        autoplay_allowed: bool = True,
    ) -> None:
        self._url = url
        self._duration = duration
        self._tick_interval = tick_interval
        self._autoplay_allowed = autoplay_allowed

        self._state = PlayerState.IDLE
        self._position = 0.0
        self._events: ResourceEvents | None = None
        self._metadata_sent = False
        self._ticker: asyncio.Task[None] | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def position(self) -> float:
        return self._position

    @property
    def duration(self) -> float:
        return self._duration

    async def play(self) -> None:
        if self._state == PlayerState.RELEASED:
            raise PlaybackStartError(self._url, ErrorMessages.RESOURCE_RELEASED)
        if not self._autoplay_allowed:
            raise PlaybackStartError(self._url)

        if self._state == PlayerState.ENDED:
            self._position = 0.0
        self._state = PlayerState.PLAYING

        if not self._metadata_sent and self._events is not None:
            self._metadata_sent = True
            self._events.on_metadata_ready(self._duration)

        if self._ticker is None:
            self._ticker = asyncio.create_task(self._run())

    def pause(self) -> None:
        if self._state != PlayerState.PLAYING:
            return
        self._state = PlayerState.PAUSED
        self._stop_ticker()

    def set_current_time(self, seconds: float) -> None:
        self._position = min(max(seconds, 0.0), self._duration)
        if self._events is not None:
            self._events.on_time_update(self._position)

    def attach(self, events: ResourceEvents) -> None:
        self._events = events

    def detach(self) -> None:
        self._events = None

    def close(self) -> None:
        """Stop the clock and refuse further playback."""
        self._stop_ticker()
        self._events = None
        self._state = PlayerState.RELEASED

    def _stop_ticker(self) -> None:
        task = self._ticker
        self._ticker = None
        # The ticker itself may be closing us from inside on_ended.
        if task is not None and task is not asyncio.current_task():
            task.cancel()

    async def _run(self) -> None:
        while self._state == PlayerState.PLAYING:
            await asyncio.sleep(self._tick_interval)
            if self._state != PlayerState.PLAYING:
                return

            self._position = min(self._position + self._tick_interval, self._duration)
            if self._events is not None:
                self._events.on_time_update(self._position)

            if self._position >= self._duration:
                self._state = PlayerState.ENDED
                self._ticker = None
                if self._events is not None:
                    await self._events.on_ended()
                return


class VirtualAudioBackend(AudioBackend):
    """Creates virtual resources and tracks which ones are still live."""

    def __init__(self, settings: PlayerSettings | None = None) -> None:
        self._settings = settings or PlayerSettings()
        self._live: list[VirtualResource] = []

    @property
    def live_resources(self) -> list[VirtualResource]:
        return list(self._live)

    def acquire(self, url: str) -> VirtualResource:
        resource = VirtualResource(
            url,
            duration=self._settings.preview_duration_seconds,
            tick_interval=self._settings.tick_interval_seconds,
            autoplay_allowed=self._settings.autoplay_allowed,
        )
        self._live.append(resource)
        logger.debug("Acquired virtual resource for %s", url)
        return resource

    def release(self, resource: PlayableResource) -> None:
        if not isinstance(resource, VirtualResource):
            raise TypeError(f"Unexpected resource type: {type(resource).__name__}")
        if resource in self._live:
            self._live.remove(resource)
            logger.debug("Released virtual resource for %s", resource.url)
        resource.close()

    def release_all(self) -> None:
        for resource in list(self._live):
            self.release(resource)
