"""Pagination Application Service - fetches and merges pages of search results."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ...domain.catalog.entities import PageState, TrackCatalog
from ...domain.catalog.services import CatalogMergeService
from ...domain.catalog.value_objects import MergePolicy
from ...domain.shared.events import EventBus, PageFetchFailed, PageMerged, get_event_bus
from ...domain.shared.exceptions import TransportError
from ...domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.search_client import TrackSearchClient

logger = logging.getLogger(__name__)

CatalogListener = Callable[[TrackCatalog], None]

DEFAULT_PAGE_SIZE = 20
DEFAULT_MAX_PAGES = 10


class PaginationFetcher:
    """Owns the track catalog and pagination cursor for the effective query.

    Every effective-query change starts a new generation. A fetch is tagged
    with the generation it was issued for, and its response is dropped when
    that generation is no longer current. At most one fetch is in flight per
    generation.
    """

    def __init__(
        self,
        *,
        search_client: TrackSearchClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
        merge_policy: MergePolicy = MergePolicy.DROP,
        event_bus: EventBus | None = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")

        self._client = search_client
        self._page_size = page_size
        self._max_pages = max_pages
        self._merge_policy = merge_policy
        self._event_bus = event_bus

        self._generation = 0
        self._query: str | None = None
        self._catalog = TrackCatalog()
        self._page_state = PageState(has_more=False)
        self._last_error: TransportError | None = None

        self._listeners: list[CatalogListener] = []
        self._tasks: set[asyncio.Task[None]] = set()

    # === Read-only views ===

    @property
    def query(self) -> str | None:
        return self._query

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def catalog(self) -> TrackCatalog:
        """The live catalog for the current generation. Callers must not mutate it."""
        return self._catalog

    @property
    def page_state(self) -> PageState:
        return self._page_state.model_copy()

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def max_pages(self) -> int:
        return self._max_pages

    @property
    def merge_policy(self) -> MergePolicy:
        return self._merge_policy

    @property
    def last_error(self) -> TransportError | None:
        return self._last_error

    @property
    def has_more(self) -> bool:
        return self._page_state.has_more

    @property
    def is_loading(self) -> bool:
        return self._page_state.loading

    def add_catalog_listener(self, listener: CatalogListener) -> None:
        """Register a callback invoked synchronously whenever the catalog is replaced."""
        self._listeners.append(listener)

    def remove_catalog_listener(self, listener: CatalogListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # === Commands ===

    def set_query(self, query: str | None) -> asyncio.Task[None] | None:
        """Switch to a new effective query and schedule its first page.

        Returns the scheduled fetch, or None when the query is empty or
        unchanged.
        """
        normalized = (query or "").strip()
        if not normalized:
            logger.debug(LogTemplates.QUERY_IGNORED_EMPTY)
            return None
        if normalized == self._query:
            logger.debug(LogTemplates.QUERY_UNCHANGED, normalized, self._generation)
            return None

        self._generation += 1
        self._query = normalized
        self._catalog = TrackCatalog(generation=self._generation, query=normalized)
        self._page_state = PageState()
        self._last_error = None
        logger.info(LogTemplates.QUERY_CHANGED, normalized, self._generation)

        for listener in list(self._listeners):
            listener(self._catalog)

        return self._schedule_fetch()

    def request_next_page(self) -> asyncio.Task[None] | None:
        """Schedule the next page unless a fetch is in flight or results are exhausted."""
        if self._query is None or self._page_state.loading or not self._page_state.has_more:
            logger.debug(
                LogTemplates.PAGE_REQUEST_SKIPPED,
                self._page_state.loading,
                self._page_state.has_more,
            )
            return None
        return self._schedule_fetch()

    def reset_pagination(self) -> bool:
        """Re-enable paging for the current generation after a failed fetch.

        The catalog is kept; the next request_next_page() retries the page
        that failed. Returns False when the last fetch did not fail, so
        pagination that ended normally stays ended.
        """
        if self._query is None or self._page_state.loading or self._last_error is None:
            return False
        self._page_state.has_more = True
        self._last_error = None
        logger.info(LogTemplates.PAGINATION_RESET, self._query, self._page_state.page)
        return True

    async def aclose(self) -> None:
        """Cancel in-flight fetches."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # === Fetch lifecycle ===

    def _schedule_fetch(self) -> asyncio.Task[None]:
        assert self._query is not None
        page = self._page_state.begin_request()
        logger.debug(LogTemplates.PAGE_REQUESTED, page, self._query, self._generation)

        task = asyncio.create_task(self._fetch(self._generation, self._query, page))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _fetch(self, generation: int, query: str, page: int) -> None:
        try:
            fetched = await self._client.fetch_page(query, page)
        except asyncio.CancelledError:
            if self._is_current(generation):
                self._page_state.loading = False
            raise
        except Exception as exc:
            if not self._is_current(generation):
                logger.debug(LogTemplates.PAGE_STALE, page, generation, self._generation)
                return
            if isinstance(exc, TransportError):
                error = exc
            else:
                error = TransportError(query, page, cause=str(exc) or exc.__class__.__name__)
            await self._handle_failure(generation, query, page, error)
            return

        if not self._is_current(generation):
            logger.debug(LogTemplates.PAGE_STALE, page, generation, self._generation)
            return

        result = CatalogMergeService.merge(
            self._catalog, fetched.tracks, page=page, policy=self._merge_policy
        )
        is_last = CatalogMergeService.is_last_page(
            fetched.received, page=page, page_size=self._page_size, max_pages=self._max_pages
        )
        self._page_state.finish(has_more=not is_last, advance=True)

        logger.info(
            LogTemplates.PAGE_MERGED,
            page,
            len(result.accepted),
            result.dropped,
            result.rekeyed,
            fetched.skipped,
            len(self._catalog),
            self._page_state.has_more,
        )
        if not self._page_state.has_more:
            logger.info(LogTemplates.PAGINATION_EXHAUSTED, query, page)

        await self._bus.publish(
            PageMerged(
                generation=generation,
                query=query,
                page=page,
                accepted=len(result.accepted),
                dropped=result.dropped,
                rekeyed=result.rekeyed,
                skipped=fetched.skipped,
                catalog_size=len(self._catalog),
                has_more=self._page_state.has_more,
            )
        )

    async def _handle_failure(
        self, generation: int, query: str, page: int, error: TransportError
    ) -> None:
        self._page_state.fail()
        self._last_error = error
        logger.warning(LogTemplates.PAGE_FETCH_FAILED, page, query, error.message)

        await self._bus.publish(
            PageFetchFailed(generation=generation, query=query, page=page, error=error.message)
        )

    @property
    def _bus(self) -> EventBus:
        return self._event_bus or get_event_bus()
