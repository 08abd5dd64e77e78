"""Driver for the v4 dialect (REST + WebSocket under /v4).

WHY: v4 servers already speak the canonical load-type vocabulary and
support resuming, so this driver only has to implement the session update.

HOW: update_session() records the token in SessionState and PATCHes
/sessions/{id} with {"resuming": mode, "timeout": timeout}.

RULES:
- Load results are returned unchanged (identity translation)
- The token is recorded even if the PATCH comes back as a soft failure;
  the server-side resume flag is then simply not set
"""

from __future__ import annotations

import logging

from nodebridge.api.models import RequesterOptions
from nodebridge.drivers.base import AbstractDriver

logger = logging.getLogger(__name__)


class Lavalink4(AbstractDriver):
    id = "lavalink@4"
    api_version = "v4"

    async def update_session(self, session_id: str, mode: bool, timeout: int) -> None:
        self._require_registered()
        self.session.update(session_id, mode, timeout)
        await self.requester(
            RequesterOptions(
                path=f"/sessions/{session_id}",
                method="PATCH",
                headers={"Content-Type": "application/json"},
                data={"resuming": mode, "timeout": timeout},
            )
        )
        logger.debug("[%s] Session updated! resume: %s, timeout: %s", self.id, mode, timeout)
