"""
Shared Domain Kernel

Contains exceptions, message templates, constrained types and the event bus
shared across the package.
"""

from catalog_player.domain.shared.exceptions import (
    DomainError,
    PlaybackStartError,
    TransportError,
)

__all__ = [
    "DomainError",
    "TransportError",
    "PlaybackStartError",
]
