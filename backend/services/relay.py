"""Session relay: applies client operations to sessions and broadcasts snapshots."""

from __future__ import annotations

import logging
import secrets

from models.session import GameSession, SessionStatus
from models.snapshot import SessionSnapshot
from models.stats import PlayerStats, RelayStatistics
from services import game_rules
from services.game_hub import GameHub, game_hub
from services.store import SessionRegistry

logger = logging.getLogger(__name__)

# Avoid 0/O, 1/I/l in session IDs so shared links don't get misread.
_SESSION_ALPHABET = "23456789abcdefghjkmnpqrstuvwxyz"
_SESSION_ID_LENGTH = 12


def _generate_session_id() -> str:
    return "".join(secrets.choice(_SESSION_ALPHABET) for _ in range(_SESSION_ID_LENGTH))


class GameRelay:
    """
    Mediates create/join/move/list against the registry.

    Every successful join or move publishes the full snapshot to the hub; a
    rejected operation raises a GameError and publishes nothing.
    """

    def __init__(self, registry: SessionRegistry | None = None, hub: GameHub | None = None) -> None:
        self.registry = registry if registry is not None else SessionRegistry()
        self.hub = hub if hub is not None else game_hub

    def create_session(self, participant_id: str, display_name: str) -> GameSession:
        session_id = _generate_session_id()
        while session_id in self.registry:
            logger.warning("[relay] Session id collision detected, regenerating: %s", session_id)
            session_id = _generate_session_id()

        session = game_rules.create(session_id)
        game_rules.join(session, participant_id, display_name)
        self.registry.add(session)
        logger.info("[relay] Session created session_id=%s by participant=%s", session_id, participant_id)
        return session

    def list_sessions(
        self,
        *,
        status: SessionStatus | None = None,
        participant_id: str | None = None,
        limit: int | None = None,
    ) -> list[GameSession]:
        """
        All sessions in creation order, optionally filtered.

        ``limit`` keeps only the most recent N sessions, newest first.
        """
        result = self.registry.values()
        if status is not None:
            result = [s for s in result if s.status is status]
        if participant_id is not None:
            result = [s for s in result if s.has_participant(participant_id)]
        if limit is not None:
            result = list(reversed(result))[:limit]
        return result

    def get_session(self, session_id: str) -> GameSession:
        return self.registry.get(session_id)

    async def join_session(self, session_id: str, participant_id: str, display_name: str) -> SessionSnapshot:
        async with self.registry.locked(session_id) as session:
            game_rules.join(session, participant_id, display_name)
            snapshot = SessionSnapshot.from_session(session)
        logger.info(
            "[relay] Participant joined session_id=%s participant=%s status=%s",
            session_id,
            participant_id,
            snapshot.status.value,
        )
        await self.broadcast(snapshot)
        return snapshot

    async def submit_move(self, session_id: str, participant_id: str, position: int) -> SessionSnapshot:
        async with self.registry.locked(session_id) as session:
            game_rules.move(session, participant_id, position)
            snapshot = SessionSnapshot.from_session(session)
        logger.info(
            "[relay] Move accepted session_id=%s participant=%s position=%d status=%s",
            session_id,
            participant_id,
            position,
            snapshot.status.value,
        )
        if snapshot.status is SessionStatus.CONCLUDED:
            logger.info("[relay] Session concluded session_id=%s outcome=%s", session_id, snapshot.outcome)
        await self.broadcast(snapshot)
        return snapshot

    async def broadcast(self, snapshot: SessionSnapshot) -> int:
        delivered = await self.hub.publish(snapshot.id, snapshot.to_message())
        logger.debug("[relay] Broadcast session_id=%s to %d subscriber(s)", snapshot.id, delivered)
        return delivered

    def player_stats(self, participant_id: str) -> PlayerStats:
        # Results are not persisted anywhere; every player reads as zero.
        return PlayerStats(player_id=participant_id)

    def statistics(self) -> RelayStatistics:
        sessions = self.registry.values()
        concluded = [s for s in sessions if s.status is SessionStatus.CONCLUDED]
        durations = [
            (s.concluded_at - s.created_at).total_seconds()
            for s in concluded
            if s.concluded_at is not None
        ]
        players = {p.participant_id for s in sessions for p in s.players}
        return RelayStatistics(
            total_sessions=len(sessions),
            active_sessions=len(sessions) - len(concluded),
            concluded_sessions=len(concluded),
            total_players=len(players),
            average_duration_seconds=sum(durations) / len(durations) if durations else None,
        )


relay = GameRelay()
