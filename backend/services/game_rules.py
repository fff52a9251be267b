"""Tic Tac Toe session state machine: create, join, move."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from models.session import BOARD_SIZE, DRAW, GameSession, Mark, PlayerEntry, SessionStatus
from services.errors import (
    CellOccupied,
    InvalidPosition,
    NotAParticipant,
    NotPlaying,
    NotYourTurn,
    SessionFull,
)

MAX_PLAYERS = 2

# 3 rows, 3 columns, 2 diagonals
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def create(session_id: str) -> GameSession:
    """Fresh session: empty board, no players, X to move."""
    return GameSession(id=session_id)


def join(session: GameSession, participant_id: str, display_name: str) -> GameSession:
    """
    Seat a participant with the next unassigned mark.

    The first joiner plays X and the second O; seating the second player starts
    the game. Raises SessionFull once both seats are taken.
    """
    if len(session.players) >= MAX_PLAYERS:
        raise SessionFull()

    # Seats are not deduplicated by participant id: one participant may hold both.
    mark = Mark.X if not session.players else Mark.O
    session.players.append(
        PlayerEntry(participant_id=participant_id, display_name=display_name, mark=mark)
    )
    if len(session.players) == MAX_PLAYERS:
        session.status = SessionStatus.IN_PROGRESS
    return session


def winning_mark(board: Sequence[Mark | None]) -> Mark | None:
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


def completes_line(board: Sequence[Mark | None], mark: Mark) -> bool:
    return any(board[a] == board[b] == board[c] == mark for a, b, c in WINNING_LINES)


def is_full(board: Sequence[Mark | None]) -> bool:
    return all(cell is not None for cell in board)


def move(
    session: GameSession,
    participant_id: str,
    position: int,
    *,
    now: datetime | None = None,
) -> GameSession:
    """
    Place the participant's mark at ``position``.

    All checks run before the board is touched, so a rejected move leaves the
    session exactly as it was. Order: position range, status, occupancy,
    membership, turn.
    """
    if not 0 <= position < BOARD_SIZE:
        raise InvalidPosition(position)
    if session.status is not SessionStatus.IN_PROGRESS:
        raise NotPlaying()
    if session.board[position] is not None:
        raise CellOccupied(position)
    player = session.player(participant_id)
    if player is None:
        raise NotAParticipant(participant_id)
    if player.mark is not session.turn:
        raise NotYourTurn()

    session.board[position] = player.mark

    # Only the mark just played can have completed a line.
    if completes_line(session.board, player.mark):
        _conclude(session, player.mark, now)
    elif is_full(session.board):
        _conclude(session, DRAW, now)
    else:
        session.turn = session.turn.other
    return session


def _conclude(session: GameSession, outcome: Mark | str, now: datetime | None) -> None:
    session.status = SessionStatus.CONCLUDED
    session.outcome = outcome
    session.concluded_at = now or datetime.now(timezone.utc)
