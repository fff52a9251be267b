from .session import BOARD_SIZE, DRAW, GameSession, Mark, PlayerEntry, SessionStatus
from .stats import PlayerStats, RelayStatistics

__all__ = [
    "GameSession",
    "SessionStatus",
    "Mark",
    "PlayerEntry",
    "DRAW",
    "BOARD_SIZE",
    "PlayerStats",
    "RelayStatistics",
]
