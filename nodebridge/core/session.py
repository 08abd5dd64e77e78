"""Resume-token state for one driver.

WHY: A server that supports resuming lets a new socket reattach to the
state of a previous one, identified by a session id. The driver must
remember that id, whether resuming was enabled for it, and gate
session-scoped REST calls on its presence.

HOW: SessionState is a two-state machine:
  no-session  — initial; session_id is None
  resumable   — after update(id, True, timeout)
update(id, False, timeout) records the id without making it resumable.
reset() is only called when the whole driver is re-registered.

RULES:
- update() is the only writer; last write wins
- header_value() is "" unless there is an id, it is resumable and the
  client configuration enables resume
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SessionState:
    session_id: Optional[str] = None
    resuming: bool = False
    timeout: int = 0

    @property
    def has_session(self) -> bool:
        return self.session_id is not None

    @property
    def is_resumable(self) -> bool:
        return self.session_id is not None and self.resuming

    def update(self, session_id: str, resuming: bool, timeout: int) -> None:
        self.session_id = session_id
        self.resuming = resuming
        self.timeout = timeout

    def reset(self) -> None:
        self.session_id = None
        self.resuming = False
        self.timeout = 0

    def header_value(self, resume_enabled: bool) -> str:
        """Value of the Session-Id header for the next socket."""
        if resume_enabled and self.is_resumable:
            return self.session_id or ""
        return ""
