"""Wire shapes sent to clients. JSON keys are camelCase."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.session import GameSession, Mark, SessionStatus
from models.stats import PlayerStats, RelayStatistics


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerSnapshot(CamelModel):
    id: str
    display_name: str
    mark: Mark


class SessionSnapshot(CamelModel):
    id: str
    board: list[Mark | None]
    current_mark: Mark
    players: list[PlayerSnapshot]
    status: SessionStatus
    outcome: str | None = None
    created_at: datetime
    concluded_at: datetime | None = None

    @classmethod
    def from_session(cls, session: GameSession) -> SessionSnapshot:
        outcome = session.outcome.value if isinstance(session.outcome, Mark) else session.outcome
        return cls(
            id=session.id,
            board=list(session.board),
            current_mark=session.turn,
            players=[
                PlayerSnapshot(id=p.participant_id, display_name=p.display_name, mark=p.mark)
                for p in session.players
            ],
            status=session.status,
            outcome=outcome,
            created_at=session.created_at,
            concluded_at=session.concluded_at,
        )

    def to_message(self) -> dict[str, Any]:
        """Push-channel payload for subscribers of this session."""
        return {"type": "game_update", "session": self.model_dump(mode="json", by_alias=True)}


class PlayerStatsSnapshot(CamelModel):
    player_id: str
    games_played: int
    wins: int
    losses: int
    draws: int

    @classmethod
    def from_stats(cls, stats: PlayerStats) -> PlayerStatsSnapshot:
        return cls(
            player_id=stats.player_id,
            games_played=stats.games_played,
            wins=stats.wins,
            losses=stats.losses,
            draws=stats.draws,
        )


class StatisticsSnapshot(CamelModel):
    total_sessions: int
    active_sessions: int
    concluded_sessions: int
    total_players: int
    average_duration_seconds: float | None = None

    @classmethod
    def from_statistics(cls, statistics: RelayStatistics) -> StatisticsSnapshot:
        return cls(
            total_sessions=statistics.total_sessions,
            active_sessions=statistics.active_sessions,
            concluded_sessions=statistics.concluded_sessions,
            total_players=statistics.total_players,
            average_duration_seconds=statistics.average_duration_seconds,
        )
