"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from catalog_player.domain.shared.types import NonEmptyStr, PageNumber

    class MyModel(BaseModel):
        page: PageNumber
        query: NonEmptyStr
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(max_length=500)]
"""Track title: up to 500 characters, may be empty."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""


# ── Domain-specific numeric constraints ─────────────────────────────

PageNumber = Annotated[int, Field(ge=1)]
"""One-based page number."""

QueryGenerationInt = Annotated[int, Field(ge=0)]
"""Query generation counter; 0 means no query has been issued yet."""

QueueIndexInt = Annotated[int, Field(ge=0)]
"""Zero-based index into the track catalog."""

Seconds = Annotated[float, Field(ge=0.0)]
"""Playback position or duration in seconds."""


# ── Settings-specific constraints ──────────────────────────────────

PageSizeInt = Annotated[int, Field(ge=1, le=200)]
"""Expected length of a full page: 1 … 200."""

MaxPagesInt = Annotated[int, Field(ge=1, le=1000)]
"""Hard cap on pagination depth: 1 … 1 000."""

TimeoutSeconds = Annotated[float, Field(gt=0.0, le=120.0)]
"""HTTP timeout in seconds: (0, 120]."""
