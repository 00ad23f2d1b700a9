"""
Structured outcomes of draft operations.

Pick legality failures are a small closed set returned as values,
never raised, so the API layer can map them straight to a message.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .draft_state import DraftState


class DraftError(str, Enum):
    NOT_IN_PROGRESS = "NotInProgress"
    WRONG_TURN = "WrongTurn"
    PLAYER_UNAVAILABLE = "PlayerUnavailable"
    ALREADY_DRAFTED = "AlreadyDrafted"
    TEAM_NOT_FOUND = "TeamNotFound"
    PLAYER_NOT_FOUND = "PlayerNotFound"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    DraftError.NOT_IN_PROGRESS: "Draft is not in progress",
    DraftError.WRONG_TURN: "Not this team's turn",
    DraftError.PLAYER_UNAVAILABLE: "Player not available",
    DraftError.ALREADY_DRAFTED: "Player already drafted",
    DraftError.TEAM_NOT_FOUND: "Team not found",
    DraftError.PLAYER_NOT_FOUND: "Player not found",
}


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[DraftError] = None

    @classmethod
    def ok(cls) -> 'ValidationResult':
        return cls(valid=True)

    @classmethod
    def fail(cls, error: DraftError) -> 'ValidationResult':
        return cls(valid=False, error=error)


@dataclass(frozen=True)
class PickResult:
    success: bool
    error: Optional[DraftError] = None
    updated_state: Optional[DraftState] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None
