"""Key naming for everything the service keeps in Redis.

Every other module asks a :class:`KeySpace` for its keys instead of
formatting strings itself, so listing, reading and deleting always agree on
the layout::

    board:{slug}:info
    board:{slug}:game:{game_id}
    board:{slug}:player:{name}
    board:{slug}:profile:{name}

The legacy single-board namespace predates boards and keeps its entities at
the top level (``game:*``, ``player:*``, ``profile:*``). None of those keys
start with ``board:`` so the two layouts never overlap.
"""
from __future__ import annotations

from typing import Optional

from .constants import ENTITY_KINDS, SLUG_PATTERN

BOARD_PREFIX = "board"
INFO_SUFFIX = "info"


def info_pattern() -> str:
    """Glob matching every board record (and possibly a few entity keys, see below)."""
    return f"{BOARD_PREFIX}:*:{INFO_SUFFIX}"


def slug_from_info_key(key: str) -> Optional[str]:
    """Return the slug of a genuine ``board:{slug}:info`` key, else ``None``.

    ``board:*:info`` also matches ``board:x:player:info`` for a player
    literally called "info"; those are rejected here.
    """
    parts = key.split(":")
    if len(parts) != 3 or parts[0] != BOARD_PREFIX or parts[2] != INFO_SUFFIX:
        return None
    slug = parts[1]
    return slug if SLUG_PATTERN.match(slug) else None


class KeySpace:
    """Key builder bound to one board (or to the legacy namespace)."""

    def __init__(self, slug: Optional[str]):
        self.slug = slug
        self._prefix = f"{BOARD_PREFIX}:{slug}:" if slug is not None else ""

    @classmethod
    def for_board(cls, slug: str) -> "KeySpace":
        if not SLUG_PATTERN.match(slug or ""):
            raise ValueError(f"Invalid board slug: {slug!r}")
        return cls(slug)

    @classmethod
    def legacy(cls) -> "KeySpace":
        return cls(None)

    @property
    def is_legacy(self) -> bool:
        return self.slug is None

    # ------------------------------------------------------------------
    # Single keys
    # ------------------------------------------------------------------

    def info(self) -> str:
        if self.is_legacy:
            raise ValueError("The legacy namespace has no board record")
        return f"{self._prefix}{INFO_SUFFIX}"

    def entity(self, kind: str, entity_id: str) -> str:
        if kind not in ENTITY_KINDS:
            raise ValueError(f"Unknown entity kind: {kind!r}")
        return f"{self._prefix}{kind}:{entity_id}"

    def game(self, game_id: str) -> str:
        return self.entity("game", game_id)

    def player(self, name: str) -> str:
        return self.entity("player", name)

    def profile(self, name: str) -> str:
        return self.entity("profile", name)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def pattern(self, kind: str) -> str:
        """Glob matching exactly the entities of *kind* in this namespace."""
        return self.entity(kind, "*")

    def namespace_pattern(self) -> str:
        """Glob matching every key of the board, its record included."""
        if self.is_legacy:
            raise ValueError("The legacy namespace cannot be enumerated as a whole")
        return f"{self._prefix}*"

    def entity_id(self, kind: str, key: str) -> str:
        """Strip the namespace and kind back off *key*."""
        prefix = self.entity(kind, "")
        if not key.startswith(prefix):
            raise ValueError(f"{key!r} is not a {kind} key of this namespace")
        return key[len(prefix):]

    def __repr__(self) -> str:
        return f"KeySpace({self.slug!r})"


__all__ = ["KeySpace", "info_pattern", "slug_from_info_key"]
