"""
Player data model and related enums.

This is the core entity representing NFL players in a draft pool.
Designed to be immutable: a player is never mutated during a draft,
it only moves from the available pool onto exactly one roster.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class Position(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DEF = "DEF"


ALL_POSITIONS = (Position.QB, Position.RB, Position.WR, Position.TE, Position.K, Position.DEF)


class InjuryStatus(str, Enum):
    HEALTHY = "healthy"
    QUESTIONABLE = "questionable"
    DOUBTFUL = "doubtful"
    OUT = "out"


@dataclass(frozen=True)
class Player:
    """
    Represents an NFL player with fantasy football relevant data.

    ADP is a real number where lower means drafted earlier. Tier is
    assigned by the player-pool collaborator from ADP (1 = best).
    Risk is 0-10 (higher = riskier), ceiling and floor are 0-100.
    """

    id: str
    name: str
    position: Position
    team: str
    bye_week: int
    adp: float
    tier: int
    projected_points: float

    risk_score: Optional[float] = None
    ceiling_score: Optional[float] = None
    floor_score: Optional[float] = None
    injury_status: Optional[InjuryStatus] = None

    age: Optional[int] = None
    experience: Optional[int] = None

    def __post_init__(self):
        if self.tier < 1:
            raise ValueError(f"Tier must be >= 1, got {self.tier}")
        if self.risk_score is not None and not (0 <= self.risk_score <= 10):
            raise ValueError(f"Risk score {self.risk_score} outside 0-10")

    def __str__(self) -> str:
        return f'{self.name} ({self.position.value}, {self.team})'

    def __repr__(self) -> str:
        return f'Player (id={self.id}, name={self.name}, position={self.position.value}, adp={self.adp})'

    @property
    def is_skill_position(self) -> bool:
        return self.position in [Position.QB, Position.RB, Position.WR, Position.TE]

    @property
    def is_injured(self) -> bool:
        return self.injury_status not in (None, InjuryStatus.HEALTHY)


class PlayerAPI(BaseModel):
    """Serialized view of a Player for API responses."""

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: str
    name: str
    position: Position
    team: str
    bye_week: int
    adp: float
    tier: int
    projected_points: float
    risk_score: Optional[float] = None
    ceiling_score: Optional[float] = None
    floor_score: Optional[float] = None
    injury_status: Optional[InjuryStatus] = None

    @classmethod
    def from_player(cls, player: Player) -> 'PlayerAPI':
        return cls.model_validate(player)
