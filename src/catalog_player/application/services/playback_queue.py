"""Playback Application Service - transport controls over the track catalog."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from ..interfaces.audio_backend import ResourceEvents
from ...domain.catalog.entities import PlaybackState, Track, TrackCatalog
from ...domain.catalog.value_objects import PlaybackStatus
from ...domain.shared.events import (
    EventBus,
    PlaybackPaused,
    PlaybackResumed,
    PlaybackStarted,
    PlaybackStartFailed,
    QueueExhausted,
    TrackEnded,
    get_event_bus,
)
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.audio_backend import AudioBackend, PlayableResource
    from .pagination_service import PaginationFetcher

logger = logging.getLogger(__name__)


class PlaybackQueue:
    """Plays catalog entries one at a time and advances when a track ends.

    Exactly one playable resource is owned at a time: the previous one is
    detached and released before the next is acquired. Replacing the catalog
    returns the queue to idle.

    Boundary contract: next() on the last index and prev() on the first are
    no-ops that keep the current state. A track ending on the last index
    leaves the queue paused at that index.
    """

    def __init__(
        self,
        *,
        fetcher: PaginationFetcher,
        audio_backend: AudioBackend,
        event_bus: EventBus | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._backend = audio_backend
        self._event_bus = event_bus

        self._state = PlaybackState()
        self._resource: PlayableResource | None = None
        # Generation of the catalog the current index points into.
        self._generation: int | None = None

        self._fetcher.add_catalog_listener(self._on_catalog_replaced)

    # === Read-only views ===

    @property
    def catalog(self) -> TrackCatalog:
        return self._fetcher.catalog

    @property
    def state(self) -> PlaybackState:
        return self._state.model_copy()

    @property
    def status(self) -> PlaybackStatus:
        return self._state.status

    @property
    def queue_index(self) -> int | None:
        return self._state.queue_index

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def resource(self) -> PlayableResource | None:
        return self._resource

    @property
    def current_track(self) -> Track | None:
        index = self._state.queue_index
        if index is None or self._generation != self.catalog.generation:
            return None
        return self.catalog.get(index)

    # === Transport commands ===

    async def play_at(self, index: int) -> bool:
        """Start the track at index from the beginning.

        Returns True when playback started. Out-of-range indices are ignored.
        """
        catalog = self.catalog
        track = catalog.get(index)
        if track is None:
            logger.debug(LogTemplates.PLAYBACK_INVALID_INDEX, index, len(catalog))
            return False

        self._release_resource()
        self._state.start(index)
        self._generation = catalog.generation

        try:
            resource = self._backend.acquire(track.preview_url)
        except Exception as exc:
            await self._start_failed(index, track, exc)
            return False

        self._resource = resource
        resource.attach(self._events_for(resource))

        try:
            await resource.play()
        except Exception as exc:
            if self._resource is resource:
                await self._start_failed(index, track, exc)
            return False

        if self._resource is not resource:
            # Superseded by another selection or a catalog reset while starting.
            return False

        logger.info(LogTemplates.PLAYBACK_STARTED, index, track.display_title)
        await self._bus.publish(
            PlaybackStarted(queue_index=index, track_id=track.id, track_title=track.title)
        )
        return True

    async def toggle_play(self) -> bool:
        """Flip between playing and paused. Returns the resulting play flag."""
        index = self._state.queue_index
        if index is None:
            return False

        if self._state.is_playing:
            if self._resource is not None:
                self._resource.pause()
            self._state.is_playing = False
            logger.debug(LogTemplates.PLAYBACK_PAUSED, index)
            await self._bus.publish(PlaybackPaused(queue_index=index))
            return False

        resource = self._resource
        if resource is None:
            return await self.play_at(index)

        self._state.is_playing = True
        try:
            await resource.play()
        except Exception as exc:
            if self._resource is resource:
                await self._start_failed(index, self.current_track, exc)
            return False

        if self._resource is not resource:
            return False

        logger.debug(LogTemplates.PLAYBACK_RESUMED, index)
        await self._bus.publish(PlaybackResumed(queue_index=index))
        return True

    def seek(self, seconds: float) -> float | None:
        """Move the playback position, clamped to [0, duration].

        Returns the applied position, or None when idle or the
        position is not a number.
        """
        if self._state.queue_index is None or math.isnan(seconds):
            return None

        clamped = min(max(float(seconds), 0.0), self._state.duration)
        if self._resource is not None:
            self._resource.set_current_time(clamped)
        self._state.current_time = clamped
        logger.debug(LogTemplates.PLAYBACK_SEEK, clamped, seconds)
        return clamped

    async def next(self) -> bool:
        index = self._state.queue_index
        if index is None or index + 1 >= len(self.catalog):
            return False
        return await self.play_at(index + 1)

    async def prev(self) -> bool:
        index = self._state.queue_index
        if index is None or index == 0:
            return False
        return await self.play_at(index - 1)

    def stop(self) -> None:
        """Release the resource and return to idle."""
        self._release_resource()
        self._state.reset()
        self._generation = None
        logger.info(LogTemplates.PLAYBACK_STOPPED)

    # === Resource notifications ===

    def _events_for(self, resource: PlayableResource) -> ResourceEvents:
        def on_metadata_ready(duration: float) -> None:
            if self._resource is not resource:
                logger.debug(LogTemplates.PLAYBACK_STALE_EVENT, "metadata_ready")
                return
            self._state.duration = max(0.0, float(duration))

        def on_time_update(seconds: float) -> None:
            if self._resource is not resource:
                logger.debug(LogTemplates.PLAYBACK_STALE_EVENT, "time_update")
                return
            self._state.current_time = max(0.0, float(seconds))

        async def on_ended() -> None:
            if self._resource is not resource:
                logger.debug(LogTemplates.PLAYBACK_STALE_EVENT, "ended")
                return
            await self._handle_ended()

        return ResourceEvents(
            on_metadata_ready=on_metadata_ready,
            on_time_update=on_time_update,
            on_ended=on_ended,
        )

    async def _handle_ended(self) -> None:
        index = self._state.queue_index
        if index is None:
            return
        track = self.current_track
        logger.debug(LogTemplates.TRACK_ENDED, index)
        await self._bus.publish(
            TrackEnded(queue_index=index, track_id=track.id if track else None)
        )
        if self._state.queue_index != index:
            # A handler moved or stopped playback.
            return

        if index < len(self.catalog) - 1:
            await self.next()
            return

        self._state.is_playing = False
        logger.info(LogTemplates.QUEUE_EXHAUSTED, index)
        await self._bus.publish(
            QueueExhausted(queue_index=index, last_track_id=track.id if track else None)
        )

    def _on_catalog_replaced(self, catalog: TrackCatalog) -> None:
        was_active = self._state.queue_index is not None or self._resource is not None
        self._release_resource()
        self._state.reset()
        self._generation = None
        if was_active:
            logger.info(LogTemplates.PLAYBACK_RESET_ON_CATALOG, catalog.generation)

    # === Helpers ===

    async def _start_failed(self, index: int, track: Track | None, exc: Exception) -> None:
        self._state.is_playing = False
        reason = getattr(exc, "message", None) or str(exc) or exc.__class__.__name__
        logger.warning(LogTemplates.PLAYBACK_START_FAILED, index, reason)
        await self._bus.publish(
            PlaybackStartFailed(
                queue_index=index,
                track_id=track.id if track else None,
                reason=reason,
            )
        )

    def _release_resource(self) -> None:
        resource = self._resource
        if resource is None:
            return
        self._resource = None
        resource.detach()
        try:
            self._backend.release(resource)
        except Exception:
            logger.exception(LogTemplates.RESOURCE_RELEASE_ERROR)

    @property
    def _bus(self) -> EventBus:
        return self._event_bus or get_event_bus()
