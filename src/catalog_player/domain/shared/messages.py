"""Centralized message constants for error messages and log templates."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_TRACK_ID = "Track ID cannot be empty"

    # Transport Errors
    HTTP_STATUS = "Search backend returned HTTP {status}"
    HTTP_TRANSPORT = "Search backend unreachable ({error})"
    INVALID_JSON = "Search backend returned invalid JSON"
    INVALID_PAYLOAD = "Search backend returned an unexpected payload"

    # Playback Errors
    RESOURCE_RELEASED = "Resource has already been released"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    INVALID_BASE_URL = "Search base URL must start with http:// or https://"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Pagination
    QUERY_CHANGED = "Query changed to %r (generation %d)"
    QUERY_IGNORED_EMPTY = "Ignoring empty query"
    QUERY_UNCHANGED = "Query %r unchanged; keeping generation %d"
    PAGE_REQUESTED = "Requesting page %d for %r (generation %d)"
    PAGE_REQUEST_SKIPPED = "Page request skipped (loading=%s, has_more=%s)"
    PAGE_MERGED = (
        "Merged page %d: %d accepted, %d dropped, %d rekeyed, %d skipped"
        " (catalog=%d, has_more=%s)"
    )
    PAGE_STALE = "Discarding stale page %d for generation %d (current %d)"
    PAGE_FETCH_FAILED = "Fetching page %d for %r failed: %s"
    PAGINATION_EXHAUSTED = "No more pages for %r after page %d"
    PAGINATION_RESET = "Pagination re-enabled for %r at page %d"

    # Playback
    PLAYBACK_STARTED = "Playing index %d: %s"
    PLAYBACK_START_FAILED = "Playback could not start at index %d: %s"
    PLAYBACK_INVALID_INDEX = "Ignoring out-of-range index %s (catalog=%d)"
    PLAYBACK_PAUSED = "Playback paused at index %d"
    PLAYBACK_RESUMED = "Playback resumed at index %d"
    PLAYBACK_STOPPED = "Playback stopped"
    PLAYBACK_RESET_ON_CATALOG = "Catalog replaced (generation %d); playback reset"
    PLAYBACK_STALE_EVENT = "Ignoring %s from a released resource"
    PLAYBACK_SEEK = "Seek to %.2fs (requested %.2fs)"
    TRACK_ENDED = "Track ended at index %d"
    QUEUE_EXHAUSTED = "Reached end of catalog at index %d"
    RESOURCE_RELEASE_ERROR = "Error releasing playable resource"

    # Session
    SESSION_EFFECTIVE_QUERY = "Effective query resolved to %r"
    SESSION_UNKNOWN_TRACK = "Selected track %s is not in the current catalog"

    # Search client
    SEARCH_CLIENT_CREATED = "Search client created for %s (timeout %.1fs)"
    SEARCH_CLIENT_CLOSED = "Search client closed"
    SEARCH_RECORD_SKIPPED = "Skipping record %d on page %d for %r: %s"
    SEARCH_REQUEST = "GET %s q=%r page=%d"

    # Application Lifecycle
    APP_STARTING = "Starting catalog player ({environment})"
    APP_STOPPED = "Catalog player stopped"
    APP_FATAL_ERROR = "Fatal error: %s"
