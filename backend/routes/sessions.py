"""Game session REST API: create, list, read, join, move."""

import logging

from fastapi import APIRouter, Query
from pydantic import Field, StrictInt

from models.session import SessionStatus
from models.snapshot import CamelModel, SessionSnapshot, StatisticsSnapshot
from services.relay import relay

router = APIRouter(tags=["games"])
logger = logging.getLogger(__name__)


class ParticipantRequest(CamelModel):
    participant_id: str = Field(..., min_length=1, max_length=128)
    display_name: str = Field(..., min_length=1, max_length=64)


class MoveRequest(CamelModel):
    participant_id: str = Field(..., min_length=1, max_length=128)
    # Strict: JSON true or "4" is malformed, not cell 1 or 4.
    # Range is enforced by the game rules so it reports as an invalid move.
    position: StrictInt


class SessionResponse(CamelModel):
    success: bool = True
    session: SessionSnapshot


class SessionListResponse(CamelModel):
    success: bool = True
    sessions: list[SessionSnapshot]


class StatisticsResponse(CamelModel):
    success: bool = True
    statistics: StatisticsSnapshot


@router.post("/games", response_model=SessionResponse)
async def create_session(body: ParticipantRequest) -> SessionResponse:
    """Create a session with the caller seated as X."""
    logger.info("[sessions] POST /api/games participant=%s", body.participant_id)
    session = relay.create_session(body.participant_id, body.display_name)
    return SessionResponse(session=SessionSnapshot.from_session(session))


@router.get("/games", response_model=SessionListResponse)
async def list_sessions(
    status: SessionStatus | None = Query(None, description="Only sessions in this status"),
    participant_id: str | None = Query(None, alias="participantId", description="Only sessions with this player"),
    limit: int | None = Query(None, ge=1, description="Most recent N sessions, newest first"),
) -> SessionListResponse:
    """Lobby listing. Creation order unless ``limit`` is given."""
    sessions = relay.list_sessions(status=status, participant_id=participant_id, limit=limit)
    return SessionListResponse(sessions=[SessionSnapshot.from_session(s) for s in sessions])


@router.get("/games/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str) -> SessionResponse:
    session = relay.get_session(session_id)
    return SessionResponse(session=SessionSnapshot.from_session(session))


@router.post("/games/{session_id}/join", response_model=SessionResponse)
async def join_session(session_id: str, body: ParticipantRequest) -> SessionResponse:
    logger.info("[sessions] POST /api/games/%s/join participant=%s", session_id, body.participant_id)
    snapshot = await relay.join_session(session_id, body.participant_id, body.display_name)
    return SessionResponse(session=snapshot)


@router.post("/games/{session_id}/move", response_model=SessionResponse)
async def submit_move(session_id: str, body: MoveRequest) -> SessionResponse:
    logger.info(
        "[sessions] POST /api/games/%s/move participant=%s position=%d",
        session_id,
        body.participant_id,
        body.position,
    )
    snapshot = await relay.submit_move(session_id, body.participant_id, body.position)
    return SessionResponse(session=snapshot)


@router.get("/stats", response_model=StatisticsResponse)
async def relay_statistics() -> StatisticsResponse:
    """Aggregate counts over every session currently held."""
    return StatisticsResponse(statistics=StatisticsSnapshot.from_statistics(relay.statistics()))
