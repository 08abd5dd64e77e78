"""Canonical wire dataclasses shared by every dialect.

WHY: Each server dialect speaks its own load-type vocabulary, but once a
response has been translated it always has the same shape: a load type tag
plus a payload whose structure depends on that tag. Typed dataclasses make
those five variants explicit for the player and queue code downstream.

HOW: Each dataclass maps 1:1 to a JSON object of the v4-style REST API.
from_dict() parses camelCase wire keys, to_dict() writes them back.
LoadResult.from_dict() dispatches on the loadType tag.

RULES:
- Only canonical load types are accepted here; translate dialect tags first
- Optional media fields (uri, artworkUrl, isrc) are None when absent
- plugin_info / user_data are opaque and passed through untouched
- A tag whose payload has the wrong shape raises ParseError
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from nodebridge.errors import ParseError


class LoadType(str, enum.Enum):
    """Canonical load-type taxonomy.

    Inherits from str so values compare equal to the raw wire tags.
    """

    TRACK = "track"
    PLAYLIST = "playlist"
    SEARCH = "search"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class TrackInfo:
    """Media record attributes of a single track."""

    identifier: str
    is_seekable: bool
    author: str
    length: int
    is_stream: bool
    position: int
    title: str
    source_name: str
    uri: Optional[str] = None
    artwork_url: Optional[str] = None
    isrc: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TrackInfo:
        return cls(
            identifier=data["identifier"],
            is_seekable=data["isSeekable"],
            author=data["author"],
            length=data["length"],
            is_stream=data["isStream"],
            position=data.get("position", 0),
            title=data["title"],
            source_name=data["sourceName"],
            uri=data.get("uri"),
            artwork_url=data.get("artworkUrl"),
            isrc=data.get("isrc"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "isSeekable": self.is_seekable,
            "author": self.author,
            "length": self.length,
            "isStream": self.is_stream,
            "position": self.position,
            "title": self.title,
            "uri": self.uri,
            "artworkUrl": self.artwork_url,
            "isrc": self.isrc,
            "sourceName": self.source_name,
        }


@dataclass
class RawTrack:
    """A track as returned by the node: encoded blob plus info.

    RULES:
    - encoded is the opaque base64 identifier the node uses to play it
    - plugin_info and user_data are never interpreted here
    """

    encoded: str
    info: TrackInfo
    plugin_info: Any = field(default_factory=dict)
    user_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RawTrack:
        return cls(
            encoded=data["encoded"],
            info=TrackInfo.from_dict(data["info"]),
            plugin_info=data.get("pluginInfo", {}),
            user_data=data.get("userData", {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "encoded": self.encoded,
            "info": self.info.to_dict(),
            "pluginInfo": self.plugin_info,
            "userData": self.user_data,
        }


@dataclass
class PlaylistInfo:
    name: str
    selected_track: int = -1


@dataclass
class Playlist:
    """A named, ordered collection of tracks.

    selected_track is -1 when the source did not point at a specific track.
    """

    info: PlaylistInfo
    tracks: List[RawTrack]
    plugin_info: Any = field(default_factory=dict)
    encoded: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Playlist:
        info = data.get("info", {})
        return cls(
            info=PlaylistInfo(
                name=info.get("name", ""),
                selected_track=info.get("selectedTrack", -1),
            ),
            tracks=[RawTrack.from_dict(t) for t in data.get("tracks", [])],
            plugin_info=data.get("pluginInfo", {}),
            encoded=data.get("encoded"),
        )


@dataclass
class LoadException:
    """Structured failure description carried by an error result."""

    severity: str
    message: Optional[str] = None
    cause: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LoadException:
        return cls(
            severity=data.get("severity", "fault"),
            message=data.get("message"),
            cause=data.get("cause"),
        )


LoadData = Union[RawTrack, Playlist, List[RawTrack], LoadException, None]


@dataclass
class LoadResult:
    """Tagged result of a track load: one of the five canonical variants.

    WHY: Player code branches on load_type and then needs the matching
    payload type. Keeping tag and payload together in one object makes the
    branch exhaustive and type-checkable.

    HOW: from_dict() reads the (already translated) loadType and parses
    data accordingly:
      track    → RawTrack
      playlist → Playlist
      search   → list[RawTrack]
      empty    → None
      error    → LoadException

    RULES:
    - A "track" tag is re-read from the payload shape first: v2 folds its
      canonical and unknown tags onto "track", so a list is a search, an
      empty payload is empty, a dict with "tracks" is a playlist and a dict
      with "severity"/"message" but no "encoded" is an error
    - Raises ParseError for an unknown tag or a mismatched payload
    """

    load_type: LoadType
    data: LoadData = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> LoadResult:
        tag = payload.get("loadType")
        try:
            load_type = LoadType(tag)
        except ValueError as exc:
            raise ParseError(0, f"unknown loadType {tag!r}") from exc

        data = payload.get("data")
        if load_type is LoadType.TRACK:
            load_type = _track_shape(data)
        try:
            if load_type is LoadType.TRACK:
                return cls(load_type, RawTrack.from_dict(data))
            if load_type is LoadType.PLAYLIST:
                return cls(load_type, Playlist.from_dict(data))
            if load_type is LoadType.SEARCH:
                return cls(load_type, [RawTrack.from_dict(t) for t in data])
            if load_type is LoadType.ERROR:
                return cls(load_type, LoadException.from_dict(data))
        except (KeyError, TypeError, AttributeError) as exc:
            raise ParseError(0, f"payload does not match loadType {tag!r}: {exc}") from exc
        return cls(LoadType.EMPTY, None)

    @property
    def tracks(self) -> List[RawTrack]:
        """All tracks carried by this result, in order (empty for empty/error)."""
        if isinstance(self.data, RawTrack):
            return [self.data]
        if isinstance(self.data, Playlist):
            return list(self.data.tracks)
        if isinstance(self.data, list):
            return list(self.data)
        return []


def _track_shape(data: Any) -> LoadType:
    if isinstance(data, list):
        return LoadType.SEARCH
    if not data:
        return LoadType.EMPTY
    if isinstance(data, dict):
        if "tracks" in data:
            return LoadType.PLAYLIST
        if "encoded" not in data and ("severity" in data or "message" in data):
            return LoadType.ERROR
    return LoadType.TRACK


@dataclass
class RequesterOptions:
    """Description of one REST call issued through a driver.

    Attributes:
        path: Path relative to the dialect base URL, e.g. "/loadtracks".
        method: HTTP method.
        params: Query parameters, as a mapping or a pre-encoded string.
        data: Structured body, serialized as JSON.
        headers: Extra headers; may override User-Agent but never Authorization.
        use_session_id: The call needs an active session token.
    """

    path: str
    method: str = "GET"
    params: Union[Dict[str, str], str, None] = None
    data: Optional[Dict[str, Any]] = None
    headers: Optional[Dict[str, str]] = None
    use_session_id: bool = False
