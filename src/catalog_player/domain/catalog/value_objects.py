"""Immutable value objects for the catalog bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import PlainSerializer, PlainValidator

from catalog_player.domain.shared.messages import ErrorMessages


@dataclass(frozen=True)
class TrackId:
    """Opaque backend identifier, compared by exact string value."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError(ErrorMessages.EMPTY_TRACK_ID)

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        return hash(self.value)

    def scoped(self, page: int, position: int, attempt: int = 0) -> TrackId:
        """Return a synthetic identifier scoped to a page position."""
        suffix = f"~p{page}.{position}"
        if attempt:
            suffix = f"{suffix}.{attempt}"
        return TrackId(f"{self.value}{suffix}")


def coerce_track_id(v: object) -> TrackId:
    """Build a TrackId from a backend or caller value; numbers compare as strings.

    Raises:
        ValueError: If the value is empty, blank or of an unsupported type.
    """
    if isinstance(v, TrackId):
        return v
    if isinstance(v, bool):
        raise ValueError(ErrorMessages.EMPTY_TRACK_ID)
    if isinstance(v, int | str):
        return TrackId(str(v))
    raise ValueError(f"Unsupported track id type: {type(v).__name__}")


# Serializes as plain string in JSON, stores as TrackId in the model.
# Backends are free to send numeric ids; they compare as their string form.
TrackIdField = Annotated[
    TrackId,
    PlainValidator(coerce_track_id),
    PlainSerializer(lambda v: v.value, return_type=str),
]

OptionalTrackIdField = Annotated[
    TrackId | None,
    PlainValidator(lambda v: None if v is None else coerce_track_id(v)),
    PlainSerializer(lambda v: v.value if v is not None else None, return_type=str | None),
]


class MergePolicy(Enum):
    """How a page merge treats identifiers already present in the catalog."""

    DROP = "drop"  # keep the first occurrence only
    REKEY = "rekey"  # keep every occurrence under a page-scoped synthetic id


class PlaybackStatus(Enum):
    """Transport state derived from queue index and play flag.

    State transitions:
    - IDLE -> PLAYING (play_at)
    - PLAYING <-> PAUSED (toggle, ended at last index, start failure)
    - Any -> IDLE (catalog replaced, stop)
    """

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"

    @property
    def is_active(self) -> bool:
        return self in {PlaybackStatus.PLAYING, PlaybackStatus.PAUSED}
