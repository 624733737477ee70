"""Pydantic models for search backend payloads.

These are infrastructure-specific models for parsing the JSON array the
search endpoint returns and converting it into domain tracks.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from catalog_player.domain.catalog.entities import Track
from catalog_player.domain.catalog.value_objects import TrackIdField
from catalog_player.domain.shared.types import HttpUrlStr, TrackTitleStr

SEARCH_PATH: Final[str] = "/search"
LOG_QUERY_TRUNCATE: Final[int] = 60


class SearchTrackPayload(BaseModel):
    """One track record as sent by the backend (camelCase keys)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: TrackIdField
    title: TrackTitleStr
    artist: str
    album_art: HttpUrlStr = Field(alias="albumArt")
    preview_url: HttpUrlStr = Field(alias="previewUrl")

    @field_validator("title", "artist", mode="before")
    @classmethod
    def _strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    def to_domain(self) -> Track:
        return Track(
            id=self.id,
            title=self.title,
            artist=self.artist,
            album_art=self.album_art,
            preview_url=self.preview_url,
        )


# Outer shape only; records are validated one at a time.
SearchPagePayload = TypeAdapter(list[dict[str, Any]])
