from dataclasses import dataclass


@dataclass
class PlayerStats:
    player_id: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0


@dataclass
class RelayStatistics:
    total_sessions: int
    active_sessions: int                   # awaiting + in progress
    concluded_sessions: int
    total_players: int                     # distinct participant ids
    average_duration_seconds: float | None
