"""Driver for the v2 dialect.

WHY: v2 servers serve v3-compatible paths but report an extended load-type
vocabulary (shorts, album, artist, podcast...) and cannot resume sessions.
They also offer lyrics, which no other dialect has.

HOW: Every response carrying a loadType goes through the v2 translation
table. update_session() only warns. The "getLyric" capability is
registered in the driver's function registry.

RULES:
- Unrecognized load types become "track"
- Resume is best-effort: asking for it is a warning, never an error
- The session state stays in no-session for the driver's whole life
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from nodebridge.api.models import RequesterOptions
from nodebridge.core.translator import nodelink2_to_canonical, translate_load_result
from nodebridge.drivers.base import AbstractDriver, PlayerLike

logger = logging.getLogger(__name__)


class Nodelink2(AbstractDriver):
    id = "nodelink@2"
    api_version = "v3"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.functions["getLyric"] = self.get_lyric

    def convert_load_result(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return translate_load_result(payload, nodelink2_to_canonical)

    async def update_session(self, session_id: str, mode: bool, timeout: int) -> None:
        self._require_registered()
        logger.warning(
            "[%s] Nodelink doesn't support resuming, set resume to true is useless in this driver",
            self.id,
        )

    async def get_lyric(self, player: PlayerLike, language: str) -> Optional[Dict[str, Any]]:
        """Fetch lyrics for the player's current track.

        Returns None when nothing is playing or the node has no lyrics.
        """
        track = player.current_track
        if track is None:
            logger.warning("[%s] No current track on player %s; cannot load lyrics", self.id, player.guild_id)
            return None
        return await self.requester(
            RequesterOptions(
                path="/loadlyrics",
                params={"encodedTrack": track.encoded, "language": language},
                headers={"Content-Type": "application/json"},
            )
        )
