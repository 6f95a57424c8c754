"""Pydantic data schemas used across the service.

This module centralises all models so that other packages can import
from a single location instead of sprinkling the definitions across
multiple files. Attributes are snake_case in Python and camelCase on the
wire (``createdAt``, ``totalPoints`` ...), matching what existing clients
send and expect.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------
# Stored documents
# -----------------------------

class Board(CamelModel):
    """Board record as stored at ``board:{slug}:info``. Never returned as-is."""

    name: str
    slug: str
    # Records written before the rename keep the hash under "password"
    password_hash: str = Field(
        validation_alias=AliasChoices("passwordHash", "password", "password_hash"),
        serialization_alias="passwordHash",
    )
    created_at: datetime

    def projection(self) -> "BoardResponse":
        return BoardResponse(name=self.name, slug=self.slug, created_at=self.created_at)


class Participant(CamelModel):
    name: str = ""
    points: int = 0


class GameRecord(CamelModel):
    """Immutable result of one finished game."""

    id: str
    board_slug: Optional[str] = None  # None for the legacy board
    date: datetime
    players: List[Participant]
    winner: str


class PlayerStats(CamelModel):
    """One leaderboard row. ``average_points`` is derived, never stored."""

    name: str
    total_points: int = 0
    games_played: int = 0
    wins: int = 0
    average_points: float = 0.0


# -----------------------------
# REST request / response models
# -----------------------------

class CreateBoardRequest(CamelModel):
    name: str
    slug: str
    password: str


class BoardResponse(CamelModel):
    name: str
    slug: str
    created_at: datetime


class DeleteBoardResponse(CamelModel):
    success: bool = True
    message: str
    deleted_keys: int


class AuthRequest(CamelModel):
    password: str


class AuthResponse(CamelModel):
    success: bool
    message: str


class RecordGameRequest(CamelModel):
    players: List[Participant] = Field(default_factory=list)


class ProfileLinkRequest(CamelModel):
    player_name: str
    asset_url: str


class ProfileLinkResponse(CamelModel):
    success: bool = True
    player_name: str
    asset_url: str


ProfileLinks = Dict[str, str]


__all__ = [
    # stored
    "Board",
    "Participant",
    "GameRecord",
    "PlayerStats",
    # rest
    "CreateBoardRequest",
    "BoardResponse",
    "DeleteBoardResponse",
    "AuthRequest",
    "AuthResponse",
    "RecordGameRequest",
    "ProfileLinkRequest",
    "ProfileLinkResponse",
    "ProfileLinks",
]
