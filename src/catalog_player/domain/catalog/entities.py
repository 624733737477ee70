"""Core domain entities for the catalog bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from catalog_player.domain.catalog.value_objects import PlaybackStatus, TrackId, TrackIdField
from catalog_player.domain.shared.types import (
    HttpUrlStr,
    NonNegativeInt,
    PageNumber,
    QueryGenerationInt,
    QueueIndexInt,
    Seconds,
    TrackTitleStr,
)


class Track(BaseModel):
    """Immutable value object representing one search result."""

    model_config = ConfigDict(frozen=True)

    id: TrackIdField
    title: TrackTitleStr
    artist: str
    album_art: HttpUrlStr
    preview_url: HttpUrlStr

    @property
    def display_title(self) -> str:
        if not self.artist:
            return self.title
        return f"{self.artist} - {self.title}"

    def with_id(self, track_id: TrackId) -> Track:
        """Return a copy of this track under a different identifier."""
        return self.model_copy(update={"id": track_id})


class TrackCatalog(BaseModel):
    """Ordered tracks discovered for one query generation.

    Order is append-only within the generation; a new generation gets a new
    catalog instead of mutating this one.
    """

    generation: QueryGenerationInt = 0
    query: str = ""
    tracks: list[Track] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.tracks)

    @property
    def is_empty(self) -> bool:
        return not self.tracks

    @property
    def track_ids(self) -> list[TrackId]:
        return [track.id for track in self.tracks]

    def index_of(self, track_id: TrackId) -> int | None:
        """Resolve an identifier to its current position, or None."""
        for index, track in enumerate(self.tracks):
            if track.id == track_id:
                return index
        return None

    def get(self, index: int) -> Track | None:
        """Return the track at index, or None when out of range."""
        if 0 <= index < len(self.tracks):
            return self.tracks[index]
        return None

    def extend(self, tracks: list[Track]) -> None:
        self.tracks.extend(tracks)


class TrackPage(BaseModel):
    """One page of search results as delivered by the backend.

    ``skipped`` counts records the backend sent that could not be turned
    into tracks; they still count towards the page length.
    """

    model_config = ConfigDict(frozen=True)

    tracks: list[Track] = Field(default_factory=list)
    skipped: NonNegativeInt = 0

    @property
    def received(self) -> int:
        return len(self.tracks) + self.skipped


class PageState(BaseModel):
    """Pagination cursor for the current query generation."""

    page: PageNumber = 1
    has_more: bool = True
    loading: bool = False

    def begin_request(self) -> int:
        """Mark a request in flight and return the page number to fetch."""
        self.loading = True
        return self.page

    def finish(self, *, has_more: bool, advance: bool) -> None:
        self.loading = False
        self.has_more = self.has_more and has_more
        if advance:
            self.page += 1

    def fail(self) -> None:
        self.loading = False
        self.has_more = False


class PlaybackState(BaseModel):
    """Transport state owned by the playback queue."""

    queue_index: QueueIndexInt | None = None
    is_playing: bool = False
    current_time: Seconds = 0.0
    duration: Seconds = 0.0

    @property
    def status(self) -> PlaybackStatus:
        if self.queue_index is None:
            return PlaybackStatus.IDLE
        if self.is_playing:
            return PlaybackStatus.PLAYING
        return PlaybackStatus.PAUSED

    @property
    def is_idle(self) -> bool:
        return self.queue_index is None

    def start(self, index: int) -> None:
        self.queue_index = index
        self.is_playing = True
        self.current_time = 0.0
        self.duration = 0.0

    def reset(self) -> None:
        self.queue_index = None
        self.is_playing = False
        self.current_time = 0.0
        self.duration = 0.0
