"""Session Application Service - effective query and track selection."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.catalog.value_objects import TrackId, coerce_track_id
from ...domain.shared.messages import LogTemplates
from ...domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from .pagination_service import PaginationFetcher
    from .playback_queue import PlaybackQueue

logger = logging.getLogger(__name__)


class Preference(BaseModel):
    """A stored listening preference that stands in for an empty search."""

    model_config = ConfigDict(frozen=True)

    name: NonEmptyStr
    query: NonEmptyStr


DEFAULT_PREFERENCES: tuple[Preference, ...] = (
    Preference(name="Chill", query="chill"),
    Preference(name="Focus", query="focus"),
    Preference(name="Workout", query="workout"),
    Preference(name="Party", query="party"),
    Preference(name="Romance", query="love songs"),
    Preference(name="Throwback", query="90s hits"),
)


class SessionController:
    """Feeds the effective query to the fetcher and resolves user selections.

    The preference is injected by the caller; this class never reads it from
    storage.
    """

    def __init__(
        self,
        *,
        fetcher: PaginationFetcher,
        playback: PlaybackQueue,
        preference: Preference | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._playback = playback
        self._preference = preference
        self._search_text = ""

    @property
    def fetcher(self) -> PaginationFetcher:
        return self._fetcher

    @property
    def playback(self) -> PlaybackQueue:
        return self._playback

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def preference(self) -> Preference | None:
        return self._preference

    @property
    def effective_query(self) -> str:
        """The search text if non-blank, else the preference's query."""
        text = self._search_text.strip()
        if text:
            return text
        if self._preference is not None:
            return self._preference.query
        return ""

    def set_search_text(self, text: str | None) -> asyncio.Task[None] | None:
        self._search_text = text or ""
        return self._apply()

    def set_preference(self, preference: Preference | None) -> asyncio.Task[None] | None:
        self._preference = preference
        return self._apply()

    def update(
        self, *, search_text: str | None, preference: Preference | None
    ) -> asyncio.Task[None] | None:
        """Replace search text and preference together, resolving the query once."""
        self._search_text = search_text or ""
        self._preference = preference
        return self._apply()

    def refresh(self) -> asyncio.Task[None] | None:
        """Push the current effective query to the fetcher."""
        return self._apply()

    def load_more(self) -> asyncio.Task[None] | None:
        return self._fetcher.request_next_page()

    async def select_track(self, track_id: TrackId | str | int) -> bool:
        """Play a track by identifier, resolved against the catalog at call time.

        Selecting the track that is already loaded toggles play/pause. Empty
        or unknown identifiers are ignored.
        """
        try:
            resolved = coerce_track_id(track_id)
        except ValueError:
            logger.debug(LogTemplates.SESSION_UNKNOWN_TRACK, repr(track_id))
            return False

        index = self._fetcher.catalog.index_of(resolved)
        if index is None:
            logger.debug(LogTemplates.SESSION_UNKNOWN_TRACK, track_id)
            return False

        if index == self._playback.queue_index and self._playback.current_track is not None:
            return await self._playback.toggle_play()
        return await self._playback.play_at(index)

    def _apply(self) -> asyncio.Task[None] | None:
        query = self.effective_query
        logger.debug(LogTemplates.SESSION_EFFECTIVE_QUERY, query)
        return self._fetcher.set_query(query)
