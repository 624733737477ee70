"""Port interface for fetching pages of search results."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from catalog_player.domain.shared.types import NonEmptyStr, PageNumber

if TYPE_CHECKING:
    from ...domain.catalog.entities import TrackPage


class TrackSearchClient(ABC):
    """Interface for the paginated search backend."""

    @abstractmethod
    async def fetch_page(self, query: NonEmptyStr, page: PageNumber) -> "TrackPage":
        """Fetch one page of tracks for a query.

        Records that cannot be parsed are left out of ``tracks`` and counted
        in ``skipped``, so the page length still reflects what was sent.

        Raises:
            TransportError: On network, HTTP status, JSON or payload failures.
        """
        ...

    async def close(self) -> None:
        """Release any underlying connections."""
        return None
