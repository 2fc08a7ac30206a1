from __future__ import annotations

from typing import List, Optional


class GamelogDbError(Exception):
    """Base class for fatal pipeline errors."""


class SourceFileError(GamelogDbError):
    """Raised when an input file is missing, unreadable or lacks required columns."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(self.message)


class DuplicateGameIdError(GamelogDbError):
    """Raised when two game log rows resolve to the same game_id."""

    def __init__(self, game_ids: List[str]):
        self.game_ids = game_ids
        shown = ", ".join(game_ids[:10])
        more = f" (+{len(game_ids) - 10} more)" if len(game_ids) > 10 else ""
        super().__init__(f"Duplicate game_id values: {shown}{more}")


class VerificationError(GamelogDbError):
    """Raised by the finalizer when the normalized tables are not fit to keep."""
