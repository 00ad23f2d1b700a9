"""
Data models for the draft simulator.

This module exports all the core data structures used throughout the application.
Keeping exports centralized here allows for easy imports and future refactoring.
"""

from .player import ALL_POSITIONS, InjuryStatus, Player, PlayerAPI, Position
from .ai_profile import AIProfile
from .draft_state import (
    DraftPick, DraftSettings, DraftState, DraftStatus, RosterSlots,
    ScoringFormat, Team
)
from .results import DraftError, PickResult, ValidationResult
from .scoring import (
    DraftInsights, PickScore, PositionScarcity, RunInfo, ScoreBreakdown,
    ScoredCandidate
)

__all__ = [
    "ALL_POSITIONS",
    "InjuryStatus",
    "Player",
    "PlayerAPI",
    "Position",
    "AIProfile",

    "DraftPick",
    "DraftSettings",
    "DraftState",
    "DraftStatus",
    "RosterSlots",
    "ScoringFormat",
    "Team",

    "DraftError",
    "PickResult",
    "ValidationResult",

    "DraftInsights",
    "PickScore",
    "PositionScarcity",
    "RunInfo",
    "ScoreBreakdown",
    "ScoredCandidate",
]
