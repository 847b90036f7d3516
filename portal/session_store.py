"""
In-memory store of summary sessions, keyed by the id kept in the signed
session cookie. Nothing is persisted; idle sessions are dropped after the TTL.
"""
import logging
import time
import uuid
from typing import Dict, Optional, Tuple

from engagement.config import SESSION_TTL_MINUTES
from engagement.state import SummarySession

logger = logging.getLogger(__name__)


class SummarySessionStore:
    def __init__(self, ttl_minutes: int = SESSION_TTL_MINUTES):
        self.ttl_seconds = ttl_minutes * 60
        self._sessions: Dict[str, Tuple[SummarySession, float]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get_or_create(self, session_id: Optional[str], now: Optional[float] = None) -> Tuple[str, SummarySession]:
        """Return the live session for session_id, or start a new one."""
        now = time.monotonic() if now is None else now
        self.evict_expired(now)

        entry = self._sessions.get(session_id) if session_id else None
        if entry is None:
            session_id = uuid.uuid4().hex
            summary = SummarySession()
            logger.info(f"Started summary session {session_id[:8]}")
        else:
            summary = entry[0]
        self._sessions[session_id] = (summary, now)
        return session_id, summary

    def evict_expired(self, now: Optional[float] = None) -> int:
        now = time.monotonic() if now is None else now
        expired = [sid for sid, (_, touched) in self._sessions.items() if now - touched > self.ttl_seconds]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info(f"Dropped {len(expired)} idle summary session(s)")
        return len(expired)

    def clear(self) -> None:
        self._sessions.clear()


summary_sessions = SummarySessionStore()
