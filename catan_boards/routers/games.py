from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..auth_utils import board_secret
from ..schemas import GameRecord, PlayerStats, RecordGameRequest
from ..state import BoardServices, get_services

router = APIRouter(prefix="/api/boards/{slug}", tags=["games"])


@router.post("/games", response_model=GameRecord, status_code=status.HTTP_201_CREATED)
async def record_game(
    slug: str,
    req: RecordGameRequest,
    secret: Optional[str] = Depends(board_secret),
    services: BoardServices = Depends(get_services),
):
    return await services.ledger.record_game(slug, req.players, secret)


@router.get("/games", response_model=List[GameRecord])
async def list_games(slug: str, services: BoardServices = Depends(get_services)):
    keyspace = await services.boards.require(slug)
    return await services.ledger.list_games(keyspace)


@router.get("/leaderboard", response_model=List[PlayerStats])
async def get_leaderboard(slug: str, services: BoardServices = Depends(get_services)):
    keyspace = await services.boards.require(slug)
    return await services.stats.leaderboard(keyspace)
