"""Load-type translation from dialect vocabularies to the canonical taxonomy.

WHY: The v2 dialect reports far more load types than the canonical five
(shorts, albums, artists, podcasts...). Downstream code should only ever
reason about track / playlist / search / empty / error, whichever server
produced the data.

HOW: Plain lookup tables plus pure functions. Nothing here holds state or
performs I/O, and input payloads are never mutated.

RULES:
- The mapping is lossy and one-directional; there is no reverse mapping
- Unrecognized v2 tags fall back to "track" (documented policy, not an error)
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Dict

from nodebridge.api.models import LoadType


class Nodelink2LoadType(str, enum.Enum):
    """Extended load-type vocabulary of the v2 dialect."""

    SHORTS = "shorts"
    ALBUM = "album"
    ARTIST = "artist"
    SHOW = "show"
    EPISODE = "episode"
    STATION = "station"
    PODCAST = "podcast"


NODELINK2_LOAD_TYPE_MAP: Dict[str, LoadType] = {
    Nodelink2LoadType.SHORTS.value: LoadType.TRACK,
    Nodelink2LoadType.ALBUM.value: LoadType.PLAYLIST,
    Nodelink2LoadType.ARTIST.value: LoadType.SEARCH,
    Nodelink2LoadType.EPISODE.value: LoadType.PLAYLIST,
    Nodelink2LoadType.STATION.value: LoadType.PLAYLIST,
    Nodelink2LoadType.PODCAST.value: LoadType.PLAYLIST,
    Nodelink2LoadType.SHOW.value: LoadType.PLAYLIST,
}

NODELINK2_FALLBACK = LoadType.TRACK


def nodelink2_to_canonical(tag: Any) -> LoadType:
    """Map a v2 load-type tag to the canonical taxonomy.

    RULES:
    - Tags in NODELINK2_LOAD_TYPE_MAP map as listed
    - Anything else (including None) returns LoadType.TRACK
    """
    return NODELINK2_LOAD_TYPE_MAP.get(tag, NODELINK2_FALLBACK)


def translate_load_result(
    payload: Dict[str, Any],
    mapper: Callable[[Any], LoadType],
) -> Dict[str, Any]:
    """Return a copy of payload with its loadType rewritten by mapper.

    Every other key is carried over unchanged.
    """
    translated = dict(payload)
    translated["loadType"] = mapper(payload.get("loadType")).value
    return translated
