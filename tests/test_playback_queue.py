"""
Unit Tests for PlaybackQueue

Tests for:
- play_at (valid/invalid indices, resource exclusivity, start failures)
- toggle_play, seek clamping, next/prev boundaries
- Resource notifications (metadata, time updates, ended auto-advance)
- Catalog replacement forcing idle
- Ignoring notifications from released resources
"""

import pytest
import pytest_asyncio

from catalog_player.application.services.pagination_service import PaginationFetcher
from catalog_player.application.services.playback_queue import PlaybackQueue
from catalog_player.domain.catalog.value_objects import PlaybackStatus
from catalog_player.domain.shared.events import (
    PlaybackStarted,
    PlaybackStartFailed,
    QueueExhausted,
    TrackEnded,
)
from conftest import make_page


@pytest.fixture
def fetcher(search_client, event_bus):
    return PaginationFetcher(search_client=search_client, page_size=20, event_bus=event_bus)


@pytest.fixture
def queue(fetcher, audio_backend, event_bus):
    return PlaybackQueue(fetcher=fetcher, audio_backend=audio_backend, event_bus=event_bus)


@pytest_asyncio.fixture
async def loaded(fetcher, search_client):
    """Catalog holding five tracks for the query 'rock'."""
    search_client.set_page("rock", 1, make_page("t", 5))
    await fetcher.set_query("rock")
    return fetcher


def _record(event_bus, event_type):
    received = []

    async def handler(event):
        received.append(event)

    event_bus.subscribe(event_type, handler)
    return received


class TestPlayAt:
    @pytest.mark.asyncio
    async def test_starts_playing_requested_track(self, loaded, queue, audio_backend):
        assert await queue.play_at(2) is True

        state = queue.state
        assert state.queue_index == 2
        assert state.is_playing is True
        assert state.current_time == 0.0
        assert state.duration == 0.0
        assert queue.status == PlaybackStatus.PLAYING
        assert queue.current_track.id.value == "t-2"
        assert audio_backend.acquired[0].url == "https://cdn.example.com/t-2.mp3"
        assert audio_backend.acquired[0].play_calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [-1, 5, 99])
    async def test_out_of_range_index_is_ignored(self, loaded, queue, audio_backend, index):
        assert await queue.play_at(index) is False

        assert queue.status == PlaybackStatus.IDLE
        assert audio_backend.acquired == []

    @pytest.mark.asyncio
    async def test_out_of_range_keeps_current_playback(self, loaded, queue, audio_backend):
        await queue.play_at(1)

        await queue.play_at(10)

        assert queue.queue_index == 1
        assert queue.is_playing is True
        assert len(audio_backend.live) == 1

    @pytest.mark.asyncio
    async def test_previous_resource_released_before_next(self, loaded, queue, audio_backend):
        await queue.play_at(0)
        first = audio_backend.acquired[0]

        await queue.play_at(3)

        assert first.released is True
        assert first.events is None
        assert audio_backend.live == [audio_backend.acquired[1]]
        assert audio_backend.max_live == 1

    @pytest.mark.asyncio
    async def test_rapid_selection_never_overlaps(self, loaded, queue, audio_backend):
        for index in [0, 4, 2, 2, 1, 3]:
            await queue.play_at(index)

        assert audio_backend.max_live == 1
        assert len(audio_backend.live) == 1
        assert queue.queue_index == 3

    @pytest.mark.asyncio
    async def test_blocked_start_leaves_queue_paused(self, loaded, queue, audio_backend, event_bus):
        failures = _record(event_bus, PlaybackStartFailed)
        audio_backend.blocked_urls.add("https://cdn.example.com/t-1.mp3")

        assert await queue.play_at(1) is False

        assert queue.status == PlaybackStatus.PAUSED
        assert queue.queue_index == 1
        assert queue.resource is audio_backend.acquired[0]
        assert len(failures) == 1
        assert failures[0].queue_index == 1
        assert "Autoplay blocked" in failures[0].reason

    @pytest.mark.asyncio
    async def test_acquire_failure_leaves_queue_paused(self, loaded, queue, audio_backend):
        audio_backend.fail_acquire = True

        assert await queue.play_at(0) is False

        assert queue.status == PlaybackStatus.PAUSED
        assert queue.resource is None

    @pytest.mark.asyncio
    async def test_publishes_started_event(self, loaded, queue, event_bus):
        started = _record(event_bus, PlaybackStarted)

        await queue.play_at(0)

        assert len(started) == 1
        assert started[0].track_id.value == "t-0"


class TestTogglePlay:
    @pytest.mark.asyncio
    async def test_idle_toggle_is_noop(self, loaded, queue, audio_backend):
        assert await queue.toggle_play() is False
        assert queue.status == PlaybackStatus.IDLE
        assert audio_backend.acquired == []

    @pytest.mark.asyncio
    async def test_pause_and_resume(self, loaded, queue, audio_backend):
        await queue.play_at(0)
        resource = audio_backend.acquired[0]

        assert await queue.toggle_play() is False
        assert queue.status == PlaybackStatus.PAUSED
        assert resource.pause_calls == 1

        assert await queue.toggle_play() is True
        assert queue.status == PlaybackStatus.PLAYING
        assert resource.play_calls == 2
        assert len(audio_backend.acquired) == 1

    @pytest.mark.asyncio
    async def test_resume_after_blocked_start(self, loaded, queue, audio_backend):
        url = "https://cdn.example.com/t-0.mp3"
        audio_backend.blocked_urls.add(url)
        await queue.play_at(0)

        audio_backend.blocked_urls.discard(url)
        assert await queue.toggle_play() is True
        assert queue.status == PlaybackStatus.PLAYING

    @pytest.mark.asyncio
    async def test_resume_after_failed_acquire_reacquires(self, loaded, queue, audio_backend):
        audio_backend.fail_acquire = True
        await queue.play_at(2)

        audio_backend.fail_acquire = False
        assert await queue.toggle_play() is True

        assert queue.queue_index == 2
        assert len(audio_backend.acquired) == 1


class TestSeek:
    @pytest.mark.asyncio
    async def test_idle_seek_is_noop(self, loaded, queue):
        assert queue.seek(10) is None
        assert queue.state.current_time == 0.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(-5, 0.0), (250, 200.0), (42.5, 42.5), (0, 0.0), (200, 200.0)],
    )
    async def test_seek_is_clamped_to_duration(
        self, loaded, queue, audio_backend, requested, expected
    ):
        await queue.play_at(0)
        audio_backend.acquired[0].emit_metadata(200)

        assert queue.seek(requested) == expected
        assert queue.state.current_time == expected
        assert audio_backend.acquired[0].seeks == [expected]

    @pytest.mark.asyncio
    async def test_nan_seek_is_ignored(self, loaded, queue, audio_backend):
        await queue.play_at(0)
        audio_backend.acquired[0].emit_metadata(200)
        queue.seek(40)

        assert queue.seek(float("nan")) is None

        assert queue.state.current_time == 40.0
        assert audio_backend.acquired[0].seeks == [40.0]

    @pytest.mark.asyncio
    async def test_seek_before_metadata_stays_at_zero(self, loaded, queue):
        await queue.play_at(0)

        assert queue.seek(30) == 0.0


class TestNextPrev:
    @pytest.mark.asyncio
    async def test_next_and_prev_move_one_track(self, loaded, queue):
        await queue.play_at(2)

        assert await queue.next() is True
        assert queue.queue_index == 3

        assert await queue.prev() is True
        assert await queue.prev() is True
        assert queue.queue_index == 1

    @pytest.mark.asyncio
    async def test_next_at_last_index_keeps_state(self, loaded, queue, audio_backend):
        await queue.play_at(4)

        assert await queue.next() is False
        assert queue.queue_index == 4
        assert queue.status == PlaybackStatus.PLAYING
        assert len(audio_backend.acquired) == 1

    @pytest.mark.asyncio
    async def test_prev_at_first_index_keeps_paused_state(self, loaded, queue):
        await queue.play_at(0)
        await queue.toggle_play()

        assert await queue.prev() is False
        assert queue.queue_index == 0
        assert queue.status == PlaybackStatus.PAUSED

    @pytest.mark.asyncio
    async def test_next_and_prev_from_idle_are_noops(self, loaded, queue, audio_backend):
        assert await queue.next() is False
        assert await queue.prev() is False
        assert audio_backend.acquired == []


class TestResourceNotifications:
    @pytest.mark.asyncio
    async def test_metadata_and_time_updates(self, loaded, queue, audio_backend):
        await queue.play_at(0)
        resource = audio_backend.acquired[0]

        resource.emit_metadata(29.8)
        resource.emit_time(12.0)

        assert queue.state.duration == 29.8
        assert queue.state.current_time == 12.0

    @pytest.mark.asyncio
    async def test_ended_advances_to_next_track(self, loaded, queue, audio_backend, event_bus):
        ended = _record(event_bus, TrackEnded)
        await queue.play_at(0)

        await audio_backend.acquired[0].emit_ended()

        assert queue.status == PlaybackStatus.PLAYING
        assert queue.queue_index == 1
        assert audio_backend.acquired[0].released is True
        assert audio_backend.acquired[1].url.endswith("t-1.mp3")
        assert [e.queue_index for e in ended] == [0]

    @pytest.mark.asyncio
    async def test_track_ended_published_before_next_start(
        self, loaded, queue, audio_backend, event_bus
    ):
        order = []

        async def on_ended(event):
            order.append(("ended", event.queue_index))

        async def on_started(event):
            order.append(("started", event.queue_index))

        event_bus.subscribe(TrackEnded, on_ended)
        event_bus.subscribe(PlaybackStarted, on_started)
        await queue.play_at(0)

        await audio_backend.acquired[0].emit_ended()

        assert order == [("started", 0), ("ended", 0), ("started", 1)]

    @pytest.mark.asyncio
    async def test_handler_stopping_on_track_end_prevents_advance(
        self, loaded, queue, audio_backend, event_bus
    ):
        async def stop_on_end(event):
            queue.stop()

        event_bus.subscribe(TrackEnded, stop_on_end)
        await queue.play_at(0)

        await audio_backend.acquired[0].emit_ended()

        assert queue.status == PlaybackStatus.IDLE
        assert len(audio_backend.acquired) == 1

    @pytest.mark.asyncio
    async def test_ended_on_last_track_pauses_in_place(
        self, loaded, queue, audio_backend, event_bus
    ):
        exhausted = _record(event_bus, QueueExhausted)
        await queue.play_at(4)

        await audio_backend.acquired[0].emit_ended()

        assert queue.is_playing is False
        assert queue.queue_index == 4
        assert queue.status == PlaybackStatus.PAUSED
        assert len(audio_backend.acquired) == 1
        assert exhausted[0].last_track_id.value == "t-4"

    @pytest.mark.asyncio
    async def test_chained_endings_walk_the_catalog(self, loaded, queue, audio_backend):
        await queue.play_at(0)

        for _ in range(4):
            await audio_backend.acquired[-1].emit_ended()

        assert queue.queue_index == 4
        assert queue.is_playing is True
        assert audio_backend.max_live == 1

    @pytest.mark.asyncio
    async def test_notifications_from_released_resource_are_ignored(
        self, loaded, queue, audio_backend
    ):
        await queue.play_at(0)
        old = audio_backend.acquired[0]
        stale_events = old.events

        await queue.play_at(3)
        audio_backend.acquired[1].emit_metadata(30)

        stale_events.on_metadata_ready(999)
        stale_events.on_time_update(500)
        await stale_events.on_ended()

        assert queue.queue_index == 3
        assert queue.state.duration == 30
        assert queue.state.current_time == 0.0
        assert len(audio_backend.acquired) == 2


class TestCatalogReplacement:
    @pytest.mark.asyncio
    async def test_new_query_forces_idle(self, loaded, queue, audio_backend, search_client):
        await queue.play_at(2)
        resource = audio_backend.acquired[0]

        task = loaded.set_query("jazz")

        assert queue.status == PlaybackStatus.IDLE
        assert queue.current_track is None
        assert resource.released is True
        assert audio_backend.live == []
        await task

    @pytest.mark.asyncio
    async def test_old_index_invalid_after_reset(self, loaded, queue, search_client):
        search_client.set_page("jazz", 1, make_page("j", 2))
        await queue.play_at(4)

        await loaded.set_query("jazz")

        assert await queue.next() is False
        assert await queue.play_at(4) is False
        assert await queue.play_at(1) is True
        assert queue.current_track.id.value == "j-1"

    @pytest.mark.asyncio
    async def test_stop_releases_and_goes_idle(self, loaded, queue, audio_backend):
        await queue.play_at(1)

        queue.stop()

        assert queue.status == PlaybackStatus.IDLE
        assert audio_backend.live == []
