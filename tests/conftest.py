import asyncio

import pytest

from catalog_player.application.interfaces.audio_backend import (
    AudioBackend,
    PlayableResource,
    ResourceEvents,
)
from catalog_player.application.interfaces.search_client import TrackSearchClient
from catalog_player.domain.catalog.entities import Track, TrackPage
from catalog_player.domain.catalog.value_objects import TrackId
from catalog_player.domain.shared.events import EventBus, reset_event_bus
from catalog_player.domain.shared.exceptions import PlaybackStartError

# ============================================================================
# Track Helpers
# ============================================================================


def make_track(track_id: str, title: str | None = None, artist: str = "Test Artist") -> Track:
    return Track(
        id=TrackId(track_id),
        title=title or f"Track {track_id}",
        artist=artist,
        album_art=f"https://img.example.com/{track_id}.jpg",
        preview_url=f"https://cdn.example.com/{track_id}.mp3",
    )


def make_page(prefix: str, count: int, start: int = 0) -> list[Track]:
    return [make_track(f"{prefix}-{i}") for i in range(start, start + count)]


# ============================================================================
# Fake Search Backend
# ============================================================================


class FakeSearchClient(TrackSearchClient):
    """Serves canned pages; a held page waits until its gate is set."""

    def __init__(self) -> None:
        self.pages: dict[tuple[str, int], list[Track] | TrackPage | Exception] = {}
        self.gates: dict[tuple[str, int], asyncio.Event] = {}
        self.calls: list[tuple[str, int]] = []
        self.closed = False

    def set_page(
        self, query: str, page: int, result: list[Track] | TrackPage | Exception
    ) -> None:
        self.pages[(query, page)] = result

    def hold(self, query: str, page: int) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[(query, page)] = gate
        return gate

    async def fetch_page(self, query: str, page: int) -> TrackPage:
        self.calls.append((query, page))
        gate = self.gates.get((query, page))
        if gate is not None:
            await gate.wait()
        result = self.pages.get((query, page), [])
        if isinstance(result, Exception):
            raise result
        if isinstance(result, TrackPage):
            return result
        return TrackPage(tracks=list(result))

    async def close(self) -> None:
        self.closed = True


# ============================================================================
# Fake Audio Backend
# ============================================================================


class FakeResource(PlayableResource):
    def __init__(self, url: str, backend: "FakeAudioBackend") -> None:
        self._url = url
        self._backend = backend
        self.events: ResourceEvents | None = None
        self.play_calls = 0
        self.pause_calls = 0
        self.seeks: list[float] = []
        self.released = False

    @property
    def url(self) -> str:
        return self._url

    async def play(self) -> None:
        self.play_calls += 1
        if self._url in self._backend.blocked_urls:
            raise PlaybackStartError(self._url, "Autoplay blocked")

    def pause(self) -> None:
        self.pause_calls += 1

    def set_current_time(self, seconds: float) -> None:
        self.seeks.append(seconds)

    def attach(self, events: ResourceEvents) -> None:
        self.events = events

    def detach(self) -> None:
        self.events = None

    def emit_metadata(self, duration: float) -> None:
        if self.events is not None:
            self.events.on_metadata_ready(duration)

    def emit_time(self, seconds: float) -> None:
        if self.events is not None:
            self.events.on_time_update(seconds)

    async def emit_ended(self) -> None:
        if self.events is not None:
            await self.events.on_ended()


class FakeAudioBackend(AudioBackend):
    def __init__(self) -> None:
        self.acquired: list[FakeResource] = []
        self.live: list[FakeResource] = []
        self.max_live = 0
        self.blocked_urls: set[str] = set()
        self.fail_acquire = False

    def acquire(self, url: str) -> FakeResource:
        if self.fail_acquire:
            raise RuntimeError("decoder unavailable")
        resource = FakeResource(url, self)
        self.acquired.append(resource)
        self.live.append(resource)
        self.max_live = max(self.max_live, len(self.live))
        return resource

    def release(self, resource: PlayableResource) -> None:
        assert isinstance(resource, FakeResource)
        if resource in self.live:
            self.live.remove(resource)
        resource.released = True

    def release_all(self) -> None:
        for resource in list(self.live):
            self.release(resource)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_global_event_bus():
    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def search_client():
    return FakeSearchClient()


@pytest.fixture
def audio_backend():
    return FakeAudioBackend()


@pytest.fixture
def sample_track():
    return make_track("test-track-123", title="Test Track")
