from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ..auth_utils import board_secret
from ..schemas import ProfileLinkRequest, ProfileLinkResponse, ProfileLinks
from ..state import BoardServices, get_services

router = APIRouter(prefix="/api/boards/{slug}", tags=["profiles"])


@router.get("/player-profiles", response_model=ProfileLinks)
async def get_profile_links(slug: str, services: BoardServices = Depends(get_services)):
    keyspace = await services.boards.require(slug)
    return await services.profiles.list_all(keyspace)


@router.put("/player-profiles", response_model=ProfileLinkResponse)
async def set_profile_link(
    slug: str,
    req: ProfileLinkRequest,
    secret: Optional[str] = Depends(board_secret),
    services: BoardServices = Depends(get_services),
):
    player_name = await services.profiles.set(slug, req.player_name, req.asset_url, secret)
    return ProfileLinkResponse(player_name=player_name, asset_url=req.asset_url.strip())
