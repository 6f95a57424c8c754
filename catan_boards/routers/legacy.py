"""Read-only routes for the pre-board single leaderboard.

Its data sits in the ungrouped namespace (``game:*``, ``player:*``,
``profile:*``). It has no password record, so nothing here mutates.
"""
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..keyspace import KeySpace
from ..schemas import GameRecord, PlayerStats, ProfileLinks
from ..state import BoardServices, get_services

router = APIRouter(prefix="/api", tags=["legacy"])


@router.get("/games", response_model=List[GameRecord])
async def list_legacy_games(services: BoardServices = Depends(get_services)):
    return await services.ledger.list_games(KeySpace.legacy())


@router.get("/leaderboard", response_model=List[PlayerStats])
async def get_legacy_leaderboard(services: BoardServices = Depends(get_services)):
    return await services.stats.leaderboard(KeySpace.legacy())


@router.get("/player-profiles", response_model=ProfileLinks)
async def get_legacy_profile_links(services: BoardServices = Depends(get_services)):
    return await services.profiles.list_all(KeySpace.legacy())
