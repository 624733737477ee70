"""HTTP client for the paginated track search backend, powered by httpx."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from catalog_player.application.interfaces.search_client import TrackSearchClient
from catalog_player.config.settings import SearchSettings
from catalog_player.domain.catalog.entities import Track, TrackPage
from catalog_player.domain.shared.exceptions import TransportError
from catalog_player.domain.shared.messages import ErrorMessages, LogTemplates
from catalog_player.infrastructure.search.models import (
    LOG_QUERY_TRUNCATE,
    SEARCH_PATH,
    SearchPagePayload,
    SearchTrackPayload,
)

logger = logging.getLogger(__name__)


class HttpTrackSearchClient(TrackSearchClient):
    """Fetches ``GET /search?q=<query>&page=<n>`` and parses the JSON array.

    Connection, HTTP status, invalid JSON and a body that is not an array of
    objects are raised as TransportError. Individual records that fail
    validation are skipped and counted on the returned page.
    """

    def __init__(
        self,
        settings: SearchSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or SearchSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client

        self._client = httpx.AsyncClient(
            base_url=self._settings.base_url,
            timeout=self._settings.timeout_seconds,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        logger.info(
            LogTemplates.SEARCH_CLIENT_CREATED,
            self._settings.base_url,
            self._settings.timeout_seconds,
        )
        return self._client

    async def fetch_page(self, query: str, page: int) -> TrackPage:
        client = self._get_client()
        logger.debug(LogTemplates.SEARCH_REQUEST, SEARCH_PATH, query[:LOG_QUERY_TRUNCATE], page)

        try:
            response = await client.get(SEARCH_PATH, params={"q": query, "page": page})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                query,
                page,
                cause=ErrorMessages.HTTP_STATUS.format(status=e.response.status_code),
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                query,
                page,
                cause=ErrorMessages.HTTP_TRANSPORT.format(error=e.__class__.__name__),
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(query, page, cause=ErrorMessages.INVALID_JSON) from e

        try:
            records = SearchPagePayload.validate_python(data)
        except ValidationError as e:
            raise TransportError(query, page, cause=ErrorMessages.INVALID_PAYLOAD) from e

        tracks: list[Track] = []
        skipped = 0
        for position, record in enumerate(records):
            try:
                tracks.append(SearchTrackPayload.model_validate(record).to_domain())
            except ValueError as e:
                skipped += 1
                logger.warning(
                    LogTemplates.SEARCH_RECORD_SKIPPED,
                    position,
                    page,
                    query[:LOG_QUERY_TRUNCATE],
                    _describe(e),
                )

        return TrackPage(tracks=tracks, skipped=skipped)

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        logger.debug(LogTemplates.SEARCH_CLIENT_CLOSED)


def _describe(error: ValueError) -> str:
    if isinstance(error, ValidationError):
        first = error.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "record"
        return f"{location}: {first['msg']}"
    return str(error)
