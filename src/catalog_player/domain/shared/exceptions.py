"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class TransportError(DomainError):
    """Raised when a page of search results could not be fetched or parsed."""

    def __init__(
        self,
        query: str,
        page: int,
        message: str | None = None,
        cause: str | None = None,
    ) -> None:
        msg = message or f"Failed to fetch page {page} for '{query}'"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, code="TRANSPORT_FAILURE")
        self.query = query
        self.page = page
        self.cause = cause


class PlaybackStartError(DomainError):
    """Raised when a playable resource refuses to start (e.g. blocked autoplay)."""

    def __init__(self, url: str, message: str | None = None) -> None:
        msg = message or f"Playback could not start for {url}"
        super().__init__(msg, code="PLAYBACK_START_FAILURE")
        self.url = url
