from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Mark(str, Enum):
    X = "X"
    O = "O"  # noqa: E741

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X


class SessionStatus(str, Enum):
    AWAITING_SECOND_PLAYER = "awaiting-second-player"
    IN_PROGRESS = "in-progress"
    CONCLUDED = "concluded"


DRAW = "draw"                              # outcome marker when no line completes

BOARD_SIZE = 9


@dataclass
class PlayerEntry:
    participant_id: str
    display_name: str
    mark: Mark


@dataclass
class GameSession:
    id: str                                # url-safe token, immutable
    board: list[Mark | None] = field(default_factory=lambda: [None] * BOARD_SIZE)
    players: list[PlayerEntry] = field(default_factory=list)
    turn: Mark = Mark.X
    status: SessionStatus = SessionStatus.AWAITING_SECOND_PLAYER
    outcome: Mark | str | None = None      # Mark or DRAW once concluded
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    concluded_at: datetime | None = None

    def player(self, participant_id: str) -> PlayerEntry | None:
        for entry in self.players:
            if entry.participant_id == participant_id:
                return entry
        return None

    def has_participant(self, participant_id: str) -> bool:
        return self.player(participant_id) is not None
