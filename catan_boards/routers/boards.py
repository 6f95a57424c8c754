from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from ..auth_utils import board_secret
from ..schemas import (
    AuthRequest,
    AuthResponse,
    BoardResponse,
    CreateBoardRequest,
    DeleteBoardResponse,
)
from ..state import BoardServices, get_services

router = APIRouter(prefix="/api/boards", tags=["boards"])


@router.post("", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
async def create_board(req: CreateBoardRequest, services: BoardServices = Depends(get_services)):
    return await services.boards.create(req.name, req.slug, req.password)


@router.get("", response_model=List[BoardResponse])
async def list_boards(services: BoardServices = Depends(get_services)):
    return await services.boards.list()


@router.get("/{slug}", response_model=BoardResponse)
async def get_board(slug: str, services: BoardServices = Depends(get_services)):
    return await services.boards.get(slug)


@router.delete("/{slug}", response_model=DeleteBoardResponse)
async def delete_board(
    slug: str,
    secret: Optional[str] = Depends(board_secret),
    services: BoardServices = Depends(get_services),
):
    deleted = await services.boards.delete(slug, secret)
    return DeleteBoardResponse(
        message=f'Board "{slug}" and all associated data has been deleted',
        deleted_keys=deleted,
    )


@router.post("/{slug}/auth", response_model=AuthResponse)
async def authenticate(slug: str, req: AuthRequest, services: BoardServices = Depends(get_services)):
    await services.gate.authenticate(slug, req.password)
    return AuthResponse(success=True, message="Authentication successful")
