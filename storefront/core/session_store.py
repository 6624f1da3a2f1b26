"""
Server-side session state
Sessions live in process memory with an idle expiry; the cookie only names them
"""

from typing import Any, Dict, Optional
import copy
import secrets
import time
import logging

logger = logging.getLogger(__name__)


class ServerSession(dict):
    """Request-scoped copy of one stored session"""

    def __init__(self, session_id: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        super().__init__(data or {})
        self.session_id = session_id
        self.rotated = False

    def clear(self) -> None:
        # The old id must not survive a clear, whatever is written afterwards
        super().clear()
        self.rotated = True


class SessionStore:
    """In-memory session store with idle expiry"""

    def __init__(self, max_age: int):
        self.max_age = max_age
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return self.load(session_id) is not None

    @staticmethod
    def new_id() -> str:
        return secrets.token_urlsafe(32)

    def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Copy of the stored state, or None if unknown or expired"""
        item = self._sessions.get(session_id)
        if item is None:
            return None

        if time.monotonic() > item["expires_at"]:
            del self._sessions[session_id]
            return None

        return copy.deepcopy(item["value"])

    def save(self, session_id: str, data: Dict[str, Any]) -> None:
        if session_id not in self._sessions:
            self.purge_expired()

        self._sessions[session_id] = {
            "value": copy.deepcopy(dict(data)),
            "expires_at": time.monotonic() + self.max_age,
        }

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        now = time.monotonic()
        expired = [key for key, item in self._sessions.items() if now > item["expires_at"]]
        for key in expired:
            del self._sessions[key]

        if expired:
            logger.debug(f"Purged {len(expired)} expired sessions")
        return len(expired)
