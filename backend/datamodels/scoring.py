"""
AI scoring models and draft insight structures.

These capture how the decision engine ranked a candidate so a pick
can be explained after the fact. Clean breakdowns make tuning the
weights far easier than staring at a single total.
"""

from dataclasses import dataclass
from typing import List, Optional
from pydantic import BaseModel, Field

from .player import Player, PlayerAPI, Position


@dataclass(frozen=True)
class RunInfo:
    position: Optional[Position]
    intensity: int

    @classmethod
    def none(cls) -> 'RunInfo':
        return cls(position=None, intensity=0)

    @property
    def is_active(self) -> bool:
        return self.position is not None and self.intensity > 0


class ScoreBreakdown(BaseModel):
    """Weighted contribution of each factor to a candidate's total."""

    base_score: float = Field(..., description="ADP value x positional preference")
    need_score: float = Field(..., description="Need value x 0.30")
    value_score: float = Field(..., description="ADP vs current pick x 0.25")
    run_score: float = Field(..., description="Panic bonus x 0.20")
    tier_score: float = Field(..., description="Tier urgency x 0.15")
    bye_score: float = Field(..., description="Bye-week penalty x 0.10")

    scarcity_bonus: float = Field(0.0, description="Unweighted scarcity bonus")
    favorite_team_bonus: float = Field(0.0, description="Unweighted favorite-team bonus")
    risk_adjustment: float = Field(0.0, description="Unweighted risk adjustment")
    reach_penalty: float = Field(0.0, ge=0.0, description="Subtracted from the total")

    @property
    def weighted_sum(self) -> float:
        return (self.base_score + self.need_score + self.value_score + self.run_score
                + self.tier_score + self.bye_score + self.scarcity_bonus
                + self.favorite_team_bonus + self.risk_adjustment - self.reach_penalty)


class PickScore(BaseModel):
    player_id: str
    total_score: float = Field(..., description="Weighted sum after noise")
    noise_factor: float = Field(0.0, description="Multiplicative noise applied to the sum")
    breakdown: ScoreBreakdown


class ScoredCandidate(BaseModel):
    player: PlayerAPI
    score: PickScore
    explanation: str


class PositionIntensity(BaseModel):
    position: Position
    intensity: int


class PositionScarcity(BaseModel):
    position: Position
    scarcity: int


class DraftInsights(BaseModel):
    runs_detected: List[PositionIntensity] = Field(default_factory=list)
    scarcity_warnings: List[PositionScarcity] = Field(default_factory=list)
    value_opportunities: List[PlayerAPI] = Field(default_factory=list)

    @classmethod
    def build(cls, run: RunInfo, scarcity_warnings: List[PositionScarcity],
              value_opportunities: List[Player]) -> 'DraftInsights':
        runs = [PositionIntensity(position=run.position, intensity=run.intensity)] if run.position else []
        return cls(runs_detected=runs,
                   scarcity_warnings=scarcity_warnings,
                   value_opportunities=[PlayerAPI.from_player(p) for p in value_opportunities])
