"""Canonical wire models and typed REST operations."""

from nodebridge.api.models import (
    LoadException,
    LoadResult,
    LoadType,
    Playlist,
    PlaylistInfo,
    RawTrack,
    RequesterOptions,
    TrackInfo,
)
from nodebridge.api.rest import NodeRest

__all__ = [
    "LoadException",
    "LoadResult",
    "LoadType",
    "NodeRest",
    "Playlist",
    "PlaylistInfo",
    "RawTrack",
    "RequesterOptions",
    "TrackInfo",
]
