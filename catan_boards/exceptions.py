"""
Error taxonomy shared by every board component.

Components raise these; the HTTP layer is the only place that turns them
into responses.
"""

from typing import Optional


class BoardError(Exception):
    """Base exception for board-related errors."""

    status_code = 500
    kind = "BoardError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class ValidationError(BoardError):
    """Raised when a slug, a board field or a game result breaks the rules."""

    status_code = 400
    kind = "ValidationError"

    def __init__(self, message: str, rule: Optional[str] = None):
        super().__init__(message)
        self.rule = rule

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.rule:
            payload["rule"] = self.rule
        return payload


class NotFound(BoardError):
    """Raised when a board does not exist."""

    status_code = 404
    kind = "NotFound"

    def __init__(self, slug: str):
        super().__init__("Board not found")
        self.slug = slug


class Unauthorized(BoardError):
    """Raised when the presented board password is missing or wrong."""

    status_code = 401
    kind = "Unauthorized"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ConflictError(BoardError):
    """Raised when a board with the requested slug already exists."""

    status_code = 409
    kind = "ConflictError"

    def __init__(self, slug: str):
        super().__init__("A board with this slug already exists")
        self.slug = slug


class UpstreamError(BoardError):
    """Raised when the backing store fails or times out.

    ``partial`` is set when a multi-step operation had already changed
    something before failing, so callers can tell it apart from a no-op.
    """

    status_code = 503
    kind = "UpstreamError"

    def __init__(self, operation: str, details: Optional[str] = None, partial: bool = False):
        message = f"Store error during {operation}"
        if details:
            message = f"{message}: {details}"
        super().__init__(message)
        self.operation = operation
        self.partial = partial

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["partial"] = self.partial
        return payload


__all__ = [
    "BoardError",
    "ValidationError",
    "NotFound",
    "Unauthorized",
    "ConflictError",
    "UpstreamError",
]
