"""
AI drafter personality model.

A profile is a fixed set of behavioral knobs consumed by the decision
engine. Profiles are immutable value objects shared between teams.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .player import Position


@dataclass(frozen=True)
class AIProfile:
    id: str
    name: str
    description: str

    risk_tolerance: float           # 0 = safe, 1 = chases upside
    positional_preferences: Dict[Position, float] = field(default_factory=dict)
    reach_threshold: float = 0.5    # how far ahead of ADP they will go
    panic_factor: float = 0.5       # how much runs affect them
    bye_week_awareness: float = 0.5
    favorite_teams: Tuple[str, ...] = ()

    def __post_init__(self):
        for name in ("risk_tolerance", "reach_threshold", "panic_factor", "bye_week_awareness"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be 0-1, got {value}")

    def preference_for(self, position: Position) -> float:
        return self.positional_preferences.get(position, 1.0)

    def is_favorite_team(self, team: str) -> bool:
        return team in self.favorite_teams
