"""
Catalog Domain Services

Domain services containing business logic that doesn't naturally fit
within a single entity or value object.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from catalog_player.domain.catalog.entities import Track, TrackCatalog
from catalog_player.domain.catalog.value_objects import MergePolicy, TrackId
from catalog_player.domain.shared.types import NonNegativeInt


class MergeResult(BaseModel):
    """Outcome of merging one page into a catalog."""

    accepted: list[Track] = Field(default_factory=list)
    dropped: NonNegativeInt = 0
    rekeyed: NonNegativeInt = 0


class CatalogMergeService:
    """Domain service for page merge and termination rules."""

    @classmethod
    def merge(
        cls,
        catalog: TrackCatalog,
        incoming: list[Track],
        *,
        page: int,
        policy: MergePolicy = MergePolicy.DROP,
    ) -> MergeResult:
        """Append a page to the catalog, resolving identifier collisions.

        Collisions are checked against the catalog and against earlier tracks
        of the same page, so the catalog never holds two equal identifiers.

        Args:
            catalog: The catalog to extend in place.
            incoming: Tracks in backend order.
            page: Page number the tracks came from (scopes synthetic ids).
            policy: Drop duplicates, or keep them under synthetic ids.

        Returns:
            The accepted tracks and collision counts.
        """
        seen: set[TrackId] = set(catalog.track_ids)
        result = MergeResult()

        for position, track in enumerate(incoming):
            if track.id not in seen:
                seen.add(track.id)
                result.accepted.append(track)
                continue

            if policy == MergePolicy.DROP:
                result.dropped += 1
                continue

            rekeyed = track.with_id(cls._synthetic_id(track.id, page, position, seen))
            seen.add(rekeyed.id)
            result.accepted.append(rekeyed)
            result.rekeyed += 1

        catalog.extend(result.accepted)
        return result

    @staticmethod
    def _synthetic_id(track_id: TrackId, page: int, position: int, taken: set[TrackId]) -> TrackId:
        attempt = 0
        candidate = track_id.scoped(page, position)
        while candidate in taken:
            attempt += 1
            candidate = track_id.scoped(page, position, attempt)
        return candidate

    @classmethod
    def is_last_page(cls, received: int, *, page: int, page_size: int, max_pages: int) -> bool:
        """Check whether a page ends pagination.

        A page ends pagination when it is empty, shorter than a full page,
        or is the deepest page allowed.
        """
        return received == 0 or received < page_size or page >= max_pages
