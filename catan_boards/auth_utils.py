from __future__ import annotations

import logging
from typing import Optional

import redis.asyncio as redis
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from .exceptions import NotFound, Unauthorized
from .registry import load_board
from .schemas import Board

logger = logging.getLogger(__name__)

# -----------------------------
# Password hashing helpers
# -----------------------------

def make_pwd_context(rounds: int = 10) -> CryptContext:
    """Return a bcrypt context hashing with *rounds* log rounds."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class AuthGate:
    """Checks a presented board password against the stored bcrypt hash.

    Stateless: every mutating request carries the plaintext password as a
    bearer credential and is verified again from scratch.
    """

    def __init__(self, client: redis.Redis, pwd_context: CryptContext):
        self.client = client
        self.pwd_context = pwd_context

    async def hash_secret(self, secret: str) -> str:
        """Return a secure bcrypt hash of *secret*."""
        return await run_in_threadpool(self.pwd_context.hash, secret)

    async def _matches(self, board: Board, secret: Optional[str]) -> bool:
        if not secret:
            return False
        try:
            # bcrypt comparison is constant time; keep it off the event loop
            return await run_in_threadpool(self.pwd_context.verify, secret, board.password_hash)
        except ValueError as e:
            logger.error(f"Unreadable password hash on board '{board.slug}': {e}")
            return False

    async def verify(self, slug: str, secret: Optional[str]) -> bool:
        """Return *True* if *secret* opens board *slug*.

        A missing board and a wrong password both give *False*.
        """
        board = await load_board(self.client, slug)
        if board is None:
            return False
        return await self._matches(board, secret)

    async def require(self, slug: str, secret: Optional[str]) -> Board:
        """Return the board if *secret* opens it.

        Raises
        ------
        Unauthorized
            If the board is missing or the password is wrong; the two are
            not told apart.
        """
        board = await load_board(self.client, slug)
        if board is None or not await self._matches(board, secret):
            logger.warning(f"Rejected credentials for board '{slug}'")
            raise Unauthorized()
        return board

    async def authenticate(self, slug: str, secret: Optional[str]) -> Board:
        """Like :meth:`require` but reports a missing board as ``NotFound``."""
        board = await load_board(self.client, slug)
        if board is None:
            raise NotFound(slug)
        if not await self._matches(board, secret):
            logger.warning(f"Invalid password for board '{slug}'")
            raise Unauthorized("Invalid password")
        return board


# -----------------------------
# FastAPI dependency helpers
# -----------------------------

security = HTTPBearer(auto_error=False)


def board_secret(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Optional[str]:
    """Extract the board password from an ``Authorization: Bearer`` header."""
    if credentials is None:
        return None
    return credentials.credentials


__all__ = [
    "make_pwd_context",
    "AuthGate",
    "security",
    "board_secret",
]
