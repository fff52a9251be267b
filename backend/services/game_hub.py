from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any

logger = logging.getLogger(__name__)


class GameHub:
    """
    In-memory pubsub pushing session snapshots to WebSocket subscribers.

    - Each connection owns one asyncio.Queue and follows at most one session;
      subscribing to another session moves the queue there.
    - Publisher fans out to all queues currently following the session_id.
    - A full queue drops its oldest payload, so a stalled client never blocks
      the publisher.
    """

    def __init__(self, *, queue_size: int = 16) -> None:
        self._lock = asyncio.Lock()
        self._queue_size = queue_size
        self._subscribers: dict[str, set[asyncio.Queue[dict[str, Any]]]] = defaultdict(set)
        self._session_by_queue: dict[asyncio.Queue[dict[str, Any]], str] = {}

    def new_queue(self) -> asyncio.Queue[dict[str, Any]]:
        return asyncio.Queue(maxsize=self._queue_size)

    async def subscribe(
        self,
        session_id: str,
        q: asyncio.Queue[dict[str, Any]] | None = None,
    ) -> asyncio.Queue[dict[str, Any]]:
        q = q if q is not None else self.new_queue()
        async with self._lock:
            self._detach(q)
            self._subscribers[session_id].add(q)
            self._session_by_queue[q] = session_id
        return q

    async def unsubscribe(self, q: asyncio.Queue[dict[str, Any]]) -> None:
        async with self._lock:
            self._detach(q)

    def _detach(self, q: asyncio.Queue[dict[str, Any]]) -> None:
        previous = self._session_by_queue.pop(q, None)
        if previous is None:
            return
        subs = self._subscribers.get(previous)
        if not subs:
            return
        subs.discard(q)
        if not subs:
            self._subscribers.pop(previous, None)

    def subscription_of(self, q: asyncio.Queue[dict[str, Any]]) -> str | None:
        return self._session_by_queue.get(q)

    def subscriber_count(self, session_id: str) -> int:
        return len(self._subscribers.get(session_id, ()))

    async def publish(self, session_id: str, payload: dict[str, Any]) -> int:
        async with self._lock:
            subs = list(self._subscribers.get(session_id, set()))
        if not subs:
            return 0
        delivered = 0
        for q in subs:
            if self.offer(q, payload):
                delivered += 1
        return delivered

    @staticmethod
    def offer(q: asyncio.Queue[dict[str, Any]], payload: dict[str, Any]) -> bool:
        """Put without blocking; a full queue loses its oldest payload first."""
        if q.full():
            try:
                _ = q.get_nowait()
            except asyncio.QueueEmpty:
                pass
            logger.warning("[game_hub] Subscriber queue full; dropped oldest update")
        try:
            q.put_nowait(payload)
        except asyncio.QueueFull:
            # If we raced between full-check and put, drop silently.
            return False
        return True

    def clear(self) -> None:
        self._subscribers.clear()
        self._session_by_queue.clear()


game_hub = GameHub()
