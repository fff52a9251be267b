from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from models import GameSession, SessionStatus
from services.errors import SessionNotFound
from services.store import SessionRegistry


def _concluded(session_id: str, at: datetime) -> GameSession:
    return GameSession(id=session_id, status=SessionStatus.CONCLUDED, outcome="draw", concluded_at=at)


def test_registry_keeps_insertion_order() -> None:
    registry = SessionRegistry()
    for sid in ("c", "a", "b"):
        registry.add(GameSession(id=sid))
    assert [s.id for s in registry.values()] == ["c", "a", "b"]
    assert len(registry) == 3
    assert "a" in registry
    assert "zzz" not in registry


def test_get_unknown_raises_not_found() -> None:
    registry = SessionRegistry()
    with pytest.raises(SessionNotFound) as exc_info:
        registry.get("missing")
    assert exc_info.value.session_id == "missing"


def test_duplicate_id_is_rejected() -> None:
    registry = SessionRegistry()
    registry.add(GameSession(id="a"))
    with pytest.raises(ValueError):
        registry.add(GameSession(id="a"))


def test_values_returns_a_copy() -> None:
    registry = SessionRegistry()
    registry.add(GameSession(id="a"))
    registry.values().clear()
    assert len(registry) == 1


def test_without_ttl_concluded_sessions_are_kept() -> None:
    registry = SessionRegistry()
    registry.add(_concluded("old", datetime(2000, 1, 1, tzinfo=timezone.utc)))
    assert registry.prune() == []
    assert "old" in registry


def test_ttl_evicts_only_expired_concluded_sessions() -> None:
    now = datetime.now(timezone.utc)
    registry = SessionRegistry(concluded_ttl_seconds=60)
    registry.add(_concluded("expired", now - timedelta(seconds=120)))
    registry.add(_concluded("fresh", now - timedelta(seconds=10)))
    registry.add(GameSession(id="waiting", created_at=now - timedelta(days=1)))

    assert [s.id for s in registry.values()] == ["fresh", "waiting"]
    with pytest.raises(SessionNotFound):
        registry.get("expired")


@pytest.mark.asyncio
async def test_locked_unknown_session_raises_not_found() -> None:
    registry = SessionRegistry()
    with pytest.raises(SessionNotFound):
        async with registry.locked("missing"):
            pass


@pytest.mark.asyncio
async def test_locked_serializes_access_per_session() -> None:
    registry = SessionRegistry()
    registry.add(GameSession(id="a"))
    events: list[str] = []

    async def worker(name: str) -> None:
        async with registry.locked("a"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(worker("one"), worker("two"))

    assert events in (
        ["one-in", "one-out", "two-in", "two-out"],
        ["two-in", "two-out", "one-in", "one-out"],
    )


@pytest.mark.asyncio
async def test_locks_are_independent_across_sessions() -> None:
    registry = SessionRegistry()
    registry.add(GameSession(id="a"))
    registry.add(GameSession(id="b"))

    async with registry.locked("a") as first:
        async with registry.locked("b") as second:
            assert (first.id, second.id) == ("a", "b")
