"""MusicBrainz bibliographic catalog adapter."""

from __future__ import annotations

from .catalog import MusicBrainzCatalog
from .client import MusicBrainzAPIError, MusicBrainzClient

__all__ = [
    "MusicBrainzAPIError",
    "MusicBrainzCatalog",
    "MusicBrainzClient",
]
