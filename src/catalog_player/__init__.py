"""Paginated track catalog browsing with sequential preview playback."""

__version__ = "0.1.0"
