"""
Pre-built AI personality profiles for draft opponents.

Each profile encodes a distinct drafting style. Random assignment
cycles through the registry so every style shows up before any repeats.
"""

import random
import uuid
from typing import Dict, List, Optional, Sequence

from ..datamodels.ai_profile import AIProfile
from ..datamodels.player import ALL_POSITIONS, Position


def _prefs(qb: float, rb: float, wr: float, te: float, k: float, dst: float) -> Dict[Position, float]:
    return {Position.QB: qb, Position.RB: rb, Position.WR: wr,
            Position.TE: te, Position.K: k, Position.DEF: dst}


AI_PROFILES: Dict[str, AIProfile] = {
    "analyst": AIProfile(
        id="analyst",
        name="The Analyst",
        description="Data-driven and methodical. Follows ADP closely, avoids risks, and is highly aware of bye weeks.",
        risk_tolerance=0.2,
        positional_preferences=_prefs(0.9, 1.1, 1.1, 0.95, 0.8, 0.85),
        reach_threshold=0.3,
        panic_factor=0.3,
        bye_week_awareness=0.95,
    ),
    "gambler": AIProfile(
        id="gambler",
        name="The Gambler",
        description="High-risk, high-reward player. Reaches for upside, ignores bye weeks, chases ceiling over floor.",
        risk_tolerance=0.95,
        positional_preferences=_prefs(0.8, 1.2, 1.15, 0.7, 0.5, 0.5),
        reach_threshold=0.85,
        panic_factor=0.5,
        bye_week_awareness=0.1,
    ),
    "homer": AIProfile(
        id="homer",
        name="The Homer",
        description="Loyal fan who reaches for favorite team players. Medium risk tolerance with team bias.",
        risk_tolerance=0.6,
        positional_preferences=_prefs(1.0, 1.05, 1.05, 1.0, 0.9, 1.2),
        reach_threshold=0.7,
        panic_factor=0.6,
        bye_week_awareness=0.5,
        favorite_teams=("KC", "SF", "PHI", "BUF"),
    ),
    "reactor": AIProfile(
        id="reactor",
        name="The Reactor",
        description="Highly reactive to draft trends. Panics during runs, chases positions being drafted.",
        risk_tolerance=0.5,
        positional_preferences=_prefs(1.0, 1.0, 1.0, 1.0, 1.0, 1.0),
        reach_threshold=0.6,
        panic_factor=0.95,
        bye_week_awareness=0.4,
    ),
    "valueHunter": AIProfile(
        id="valueHunter",
        name="The Value Hunter",
        description="Patient drafter who waits for value. Anti-reach mentality, tier-focused, lets players fall.",
        risk_tolerance=0.4,
        positional_preferences=_prefs(0.7, 1.0, 1.0, 0.85, 0.6, 0.65),
        reach_threshold=0.15,
        panic_factor=0.2,
        bye_week_awareness=0.7,
    ),
    "balanced": AIProfile(
        id="balanced",
        name="The Balanced",
        description="Well-rounded drafter. Middle-of-road on all factors, solid fundamentals.",
        risk_tolerance=0.5,
        positional_preferences=_prefs(1.0, 1.0, 1.0, 1.0, 1.0, 1.0),
        reach_threshold=0.5,
        panic_factor=0.5,
        bye_week_awareness=0.65,
    ),
    "bestAvailable": AIProfile(
        id="bestAvailable",
        name="Best Available",
        description="Pure value drafter. Always picks the best available player based on ADP, with smart position need awareness.",
        risk_tolerance=0.3,
        positional_preferences=_prefs(0.85, 1.1, 1.1, 0.9, 0.5, 0.5),
        reach_threshold=0.1,
        panic_factor=0.1,
        bye_week_awareness=0.8,
    ),
}


def get_profile(profile_id: str) -> Optional[AIProfile]:
    return AI_PROFILES.get(profile_id)


def get_all_profiles() -> List[AIProfile]:
    return list(AI_PROFILES.values())


def get_random_profile(rng: Optional[random.Random] = None) -> AIProfile:
    rng = rng or random.Random()
    return rng.choice(get_all_profiles())


def assign_random_profiles(num_teams: int, rng: Optional[random.Random] = None) -> List[AIProfile]:
    """
    Build one profile per team for variety in draft opponents.

    With more teams than profiles the registry repeats in order before
    the whole list is shuffled.
    """
    rng = rng or random.Random()
    profiles = get_all_profiles()
    assigned = [profiles[i % len(profiles)] for i in range(num_teams)]
    rng.shuffle(assigned)
    return assigned


def create_custom_profile(name: str,
                          risk_tolerance: float,
                          panic_factor: float,
                          bye_week_awareness: float,
                          favorite_teams: Sequence[str] = ()) -> AIProfile:
    """Custom profile with neutral positional preferences; reach threshold follows risk tolerance."""
    return AIProfile(
        id=f"custom-{uuid.uuid4().hex[:12]}",
        name=name,
        description="Custom AI profile",
        risk_tolerance=risk_tolerance,
        positional_preferences={position: 1.0 for position in ALL_POSITIONS},
        reach_threshold=risk_tolerance,
        panic_factor=panic_factor,
        bye_week_awareness=bye_week_awareness,
        favorite_teams=tuple(team.upper() for team in favorite_teams),
    )
