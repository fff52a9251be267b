from __future__ import annotations

from fastapi import APIRouter

from models.snapshot import CamelModel, PlayerStatsSnapshot
from services.relay import relay

router = APIRouter(tags=["players"])


class PlayerStatsResponse(CamelModel):
    success: bool = True
    stats: PlayerStatsSnapshot


@router.get("/players/{participant_id}/stats", response_model=PlayerStatsResponse)
async def get_player_stats(participant_id: str) -> PlayerStatsResponse:
    return PlayerStatsResponse(stats=PlayerStatsSnapshot.from_stats(relay.player_stats(participant_id)))
