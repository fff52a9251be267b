"""
Domain errors raised by the game rules and the relay.

Every error carries the HTTP status and a short machine code so the API layer
can surface it as {"success": false, "error": ..., "code": ...} in one place.
"""


class GameError(Exception):
    """Base class for all rejected session operations."""

    status_code = 400
    code = "game_error"


class SessionNotFound(GameError):
    status_code = 404
    code = "not_found"

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class SessionFull(GameError):
    code = "session_full"

    def __init__(self) -> None:
        super().__init__("Session is full")


# ============ Move errors ============

class InvalidMove(GameError):
    """A move was rejected; the session is left untouched."""

    code = "invalid_move"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid move: {reason}")


class InvalidPosition(InvalidMove):
    code = "invalid_position"

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"position {position} is out of range")


class NotPlaying(InvalidMove):
    code = "not_playing"

    def __init__(self) -> None:
        super().__init__("session is not in progress")


class CellOccupied(InvalidMove):
    code = "cell_occupied"

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"cell {position} is already occupied")


class NotAParticipant(InvalidMove):
    code = "not_a_participant"

    def __init__(self, participant_id: str) -> None:
        self.participant_id = participant_id
        super().__init__("participant is not in this session")


class NotYourTurn(InvalidMove):
    code = "not_your_turn"

    def __init__(self) -> None:
        super().__init__("not your turn")
