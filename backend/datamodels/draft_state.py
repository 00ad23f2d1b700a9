"""
Draft state management models.

Represents the current state of a snake draft: teams, picks made,
the remaining player pool and the precomputed pick order. Every model
here is frozen; state transitions build a new snapshot with
``model_copy(update=...)`` so older snapshots can be kept for undo
and diffing.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .ai_profile import AIProfile
from .player import ALL_POSITIONS, Player, Position


class DraftStatus(str, Enum):
    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ScoringFormat(str, Enum):
    STANDARD = "standard"
    PPR = "ppr"
    HALF_PPR = "half_ppr"


RECEPTION_POINTS = {
    ScoringFormat.STANDARD: 0.0,
    ScoringFormat.PPR: 1.0,
    ScoringFormat.HALF_PPR: 0.5,
}


def _neutral_needs() -> Dict[Position, float]:
    return {position: 100.0 for position in ALL_POSITIONS}


class RosterSlots(BaseModel):
    model_config = ConfigDict(frozen=True)

    QB: int = Field(1, ge=0)
    RB: int = Field(2, ge=0)
    WR: int = Field(2, ge=0)
    TE: int = Field(1, ge=0)
    FLEX: int = Field(1, ge=0, description="RB/WR/TE")
    K: int = Field(1, ge=0)
    DEF: int = Field(1, ge=0)
    BENCH: int = Field(6, ge=0)

    @property
    def total_roster_spots(self) -> int:
        return self.QB + self.RB + self.WR + self.TE + self.FLEX + self.K + self.DEF + self.BENCH

    @property
    def starting_spots(self) -> int:
        return self.total_roster_spots - self.BENCH


class DraftSettings(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    num_teams: int = Field(12, ge=2, le=16)
    num_rounds: int = Field(15, ge=1, le=25)
    pick_time_limit: int = Field(0, ge=0, description="Seconds per pick, 0 = no limit")
    scoring_type: ScoringFormat = ScoringFormat.PPR
    roster_slots: RosterSlots = Field(default_factory=RosterSlots)

    @property
    def total_picks(self) -> int:
        return self.num_teams * self.num_rounds


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    is_user: bool
    ai_profile: Optional[AIProfile] = None
    roster: Tuple[Player, ...] = ()
    # 100 everywhere means "unassessed"; real needs come from the need calculator
    needs: Dict[Position, float] = Field(default_factory=_neutral_needs)
    bye_week_count: Dict[int, int] = Field(default_factory=dict)
    draft_position: int = Field(..., ge=1)

    def has_position(self, position: Position) -> bool:
        return any(player.position == position for player in self.roster)


class DraftPick(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    draft_id: str
    team_id: str
    player_id: str
    pick_number: int = Field(..., ge=1)
    round: int = Field(..., ge=1)
    pick_in_round: int = Field(..., ge=1)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_ai_pick: bool


class DraftState(BaseModel):
    """
    Aggregate root of a draft.

    Invariants kept by the draft engine:
    - current_pick_index == len(picks)
    - status is COMPLETED iff len(picks) == num_teams * num_rounds
    - every picked player is absent from available_players and on exactly one roster
    - available_players stays sorted by ADP ascending
    """

    model_config = ConfigDict(frozen=True)

    id: str
    teams: Tuple[Team, ...]
    picks: Tuple[DraftPick, ...] = ()
    current_pick_index: int = Field(0, ge=0)
    available_players: Tuple[Player, ...] = ()
    draft_order: Tuple[str, ...]
    settings: DraftSettings
    status: DraftStatus = DraftStatus.SETUP

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def get_team(self, team_id: str) -> Optional[Team]:
        return next((team for team in self.teams if team.id == team_id), None)

    def get_available_player(self, player_id: str) -> Optional[Player]:
        return next((player for player in self.available_players if player.id == player_id), None)

    @property
    def user_team(self) -> Optional[Team]:
        return next((team for team in self.teams if team.is_user), None)

    @property
    def total_picks(self) -> int:
        return self.settings.total_picks

    @property
    def is_complete(self) -> bool:
        return self.status == DraftStatus.COMPLETED

    @property
    def completion_percentage(self) -> float:
        return min(100.0, (len(self.picks) / self.total_picks) * 100)
