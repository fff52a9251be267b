from datetime import datetime, timezone

from models import DRAW, GameSession, Mark, PlayerEntry, PlayerStats, SessionStatus
from models.snapshot import SessionSnapshot


def test_game_session_defaults() -> None:
    session = GameSession(id="abc123")
    assert session.status is SessionStatus.AWAITING_SECOND_PLAYER
    assert session.board == [None] * 9
    assert session.turn is Mark.X
    assert isinstance(session.created_at, datetime)
    assert session.concluded_at is None
    assert session.outcome is None
    assert session.players == []


def test_sessions_do_not_share_boards() -> None:
    first = GameSession(id="a")
    second = GameSession(id="b")
    first.board[0] = Mark.X
    assert second.board[0] is None


def test_mark_other() -> None:
    assert Mark.X.other is Mark.O
    assert Mark.O.other is Mark.X


def test_player_stats_default_to_zero() -> None:
    stats = PlayerStats(player_id="p1")
    assert (stats.games_played, stats.wins, stats.losses, stats.draws) == (0, 0, 0, 0)


def test_snapshot_serializes_camel_case() -> None:
    session = GameSession(id="abc123", created_at=datetime(2024, 5, 1, tzinfo=timezone.utc))
    session.players.append(PlayerEntry(participant_id="p1", display_name="Alice", mark=Mark.X))
    session.board[4] = Mark.X

    body = SessionSnapshot.from_session(session).model_dump(mode="json", by_alias=True)

    assert body["id"] == "abc123"
    assert body["board"] == [None, None, None, None, "X", None, None, None, None]
    assert body["currentMark"] == "X"
    assert body["players"] == [{"id": "p1", "displayName": "Alice", "mark": "X"}]
    assert body["status"] == "awaiting-second-player"
    assert body["outcome"] is None
    assert body["createdAt"].startswith("2024-05-01T00:00:00")
    assert body["concludedAt"] is None


def test_snapshot_outcome_for_win_and_draw() -> None:
    won = GameSession(id="w", status=SessionStatus.CONCLUDED, outcome=Mark.O)
    drawn = GameSession(id="d", status=SessionStatus.CONCLUDED, outcome=DRAW)
    assert SessionSnapshot.from_session(won).outcome == "O"
    assert SessionSnapshot.from_session(drawn).outcome == "draw"


def test_snapshot_is_detached_from_live_board() -> None:
    session = GameSession(id="abc")
    snapshot = SessionSnapshot.from_session(session)
    session.board[0] = Mark.X
    assert snapshot.board[0] is None


def test_snapshot_message_envelope() -> None:
    message = SessionSnapshot.from_session(GameSession(id="abc")).to_message()
    assert message["type"] == "game_update"
    assert message["session"]["id"] == "abc"
