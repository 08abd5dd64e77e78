"""Typed control-plane operations on top of a driver's requester.

WHY: Player and queue code should call load_tracks() or update_player()
and get typed results back, not assemble paths and query strings by hand.

HOW: NodeRest wraps one driver. Each method builds a RequesterOptions,
calls driver.requester() and parses the body into the models from
api.models where a canonical shape exists. Session-scoped endpoints set
use_session_id so the driver raises SessionError before any I/O.

RULES:
- None from the requester (204 / soft failure) is passed through as None
- Query parameter names follow the node's REST API exactly
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from nodebridge.api.models import LoadResult, RawTrack, RequesterOptions

if TYPE_CHECKING:
    from nodebridge.drivers.base import AbstractDriver


class NodeRest:
    def __init__(self, driver: AbstractDriver) -> None:
        self.driver = driver

    def _players_path(self, guild_id: Optional[str] = None) -> str:
        path = f"/sessions/{self.driver.session_id}/players"
        return f"{path}/{guild_id}" if guild_id else path

    async def load_tracks(self, identifier: str) -> Optional[LoadResult]:
        """Resolve a URL or search query ("ytsearch:...") into tracks."""
        data = await self.driver.requester(
            RequesterOptions(path="/loadtracks", params={"identifier": identifier})
        )
        return LoadResult.from_dict(data) if data is not None else None

    async def decode_track(self, encoded: str) -> Optional[RawTrack]:
        data = await self.driver.requester(
            RequesterOptions(path="/decodetrack", params={"encodedTrack": encoded})
        )
        return RawTrack.from_dict(data) if data is not None else None

    async def get_info(self) -> Optional[Dict[str, Any]]:
        return await self.driver.requester(RequesterOptions(path="/info"))

    async def get_stats(self) -> Optional[Dict[str, Any]]:
        return await self.driver.requester(RequesterOptions(path="/stats"))

    async def get_players(self) -> List[Dict[str, Any]]:
        data = await self.driver.requester(
            RequesterOptions(path=self._players_path(), use_session_id=True)
        )
        return data or []

    async def get_player(self, guild_id: str) -> Optional[Dict[str, Any]]:
        return await self.driver.requester(
            RequesterOptions(path=self._players_path(guild_id), use_session_id=True)
        )

    async def update_player(
        self,
        guild_id: str,
        player_options: Dict[str, Any],
        no_replace: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """PATCH a player (track, position, volume, paused, filters, voice).

        player_options is sent as-is; keys use the wire's camelCase names.
        """
        return await self.driver.requester(
            RequesterOptions(
                path=self._players_path(guild_id),
                method="PATCH",
                params={"noReplace": "true" if no_replace else "false"},
                data=player_options,
                use_session_id=True,
            )
        )

    async def destroy_player(self, guild_id: str) -> None:
        await self.driver.requester(
            RequesterOptions(
                path=self._players_path(guild_id),
                method="DELETE",
                use_session_id=True,
            )
        )
