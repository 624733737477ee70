"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the search client, audio backend and the
services built on them. Components are created on-demand and cached for
reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.interfaces.audio_backend import AudioBackend
    from ..application.interfaces.search_client import TrackSearchClient
    from ..application.services.pagination_service import PaginationFetcher
    from ..application.services.playback_queue import PlaybackQueue
    from ..application.services.session_controller import SessionController
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings

    # Infrastructure adapters
    _search_client: TrackSearchClient | None = None
    _audio_backend: AudioBackend | None = None

    # Application services
    _pagination_fetcher: PaginationFetcher | None = None
    _playback_queue: PlaybackQueue | None = None
    _session_controller: SessionController | None = None

    # === Infrastructure Adapters ===

    @property
    def search_client(self) -> TrackSearchClient:
        """Get the search backend client."""
        if self._search_client is None:
            from ..infrastructure.search.http_search_client import HttpTrackSearchClient

            self._search_client = HttpTrackSearchClient(self.settings.search)
        return self._search_client

    @property
    def audio_backend(self) -> AudioBackend:
        """Get the audio backend."""
        if self._audio_backend is None:
            from ..infrastructure.audio.virtual_player import VirtualAudioBackend

            self._audio_backend = VirtualAudioBackend(self.settings.player)
        return self._audio_backend

    # === Application Services ===

    @property
    def pagination_fetcher(self) -> PaginationFetcher:
        """Get the pagination fetcher."""
        if self._pagination_fetcher is None:
            from ..application.services.pagination_service import PaginationFetcher

            self._pagination_fetcher = PaginationFetcher(
                search_client=self.search_client,
                page_size=self.settings.search.page_size,
                max_pages=self.settings.search.max_pages,
                merge_policy=self.settings.search.merge_policy,
            )
        return self._pagination_fetcher

    @property
    def playback_queue(self) -> PlaybackQueue:
        """Get the playback queue."""
        if self._playback_queue is None:
            from ..application.services.playback_queue import PlaybackQueue

            self._playback_queue = PlaybackQueue(
                fetcher=self.pagination_fetcher,
                audio_backend=self.audio_backend,
            )
        return self._playback_queue

    @property
    def session_controller(self) -> SessionController:
        """Get the session controller."""
        if self._session_controller is None:
            from ..application.services.session_controller import SessionController

            self._session_controller = SessionController(
                fetcher=self.pagination_fetcher,
                playback=self.playback_queue,
            )
        return self._session_controller

    # === Lifecycle ===

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._playback_queue is not None:
            self._playback_queue.stop()

        if self._audio_backend is not None:
            self._audio_backend.release_all()

        if self._pagination_fetcher is not None:
            await self._pagination_fetcher.aclose()

        if self._search_client is not None:
            try:
                await self._search_client.close()
            except Exception as exc:
                logger.warning("Failed closing search client: %r", exc)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
