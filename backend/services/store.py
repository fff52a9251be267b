"""In-memory session registry. Keyed by session ID, insertion ordered."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

from models.session import GameSession, SessionStatus
from services.errors import SessionNotFound

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    Owns every session for the life of the process.

    Mutations go through ``locked()``, which holds a per-session asyncio.Lock so
    two requests against the same session never interleave. Reads return the
    live objects; callers must not mutate them outside ``locked()``.

    With ``concluded_ttl_seconds`` set, concluded sessions older than the TTL
    are dropped lazily on the next registry access. ``None`` keeps them forever.
    """

    def __init__(self, *, concluded_ttl_seconds: float | None = None) -> None:
        self._sessions: dict[str, GameSession] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self.concluded_ttl_seconds = concluded_ttl_seconds

    def __contains__(self, session_id: object) -> bool:
        self.prune()
        return session_id in self._sessions

    def __len__(self) -> int:
        self.prune()
        return len(self._sessions)

    def add(self, session: GameSession) -> GameSession:
        self.prune()
        if session.id in self._sessions:
            raise ValueError(f"Session {session.id} already registered")
        self._sessions[session.id] = session
        self._locks[session.id] = asyncio.Lock()
        return session

    def get(self, session_id: str) -> GameSession:
        self.prune()
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def values(self) -> list[GameSession]:
        self.prune()
        return list(self._sessions.values())

    @asynccontextmanager
    async def locked(self, session_id: str) -> AsyncIterator[GameSession]:
        """Yield the session while holding its lock."""
        self.prune()
        lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFound(session_id)
        async with lock:
            # Re-check: the session may have been evicted while we waited.
            yield self.get(session_id)

    def prune(self, now: datetime | None = None) -> list[str]:
        if self.concluded_ttl_seconds is None:
            return []
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(seconds=self.concluded_ttl_seconds)
        expired = [
            sid
            for sid, session in self._sessions.items()
            if session.status is SessionStatus.CONCLUDED
            and session.concluded_at is not None
            and session.concluded_at <= cutoff
        ]
        for sid in expired:
            self._sessions.pop(sid, None)
            self._locks.pop(sid, None)
        if expired:
            logger.info("[store] Evicted %d concluded session(s): %s", len(expired), expired)
        return expired

    def clear(self) -> None:
        self._sessions.clear()
        self._locks.clear()
