"""
Tier analysis utilities for positional value cliffs.

Tiers cluster players of similar perceived value at a position. A tier
break happens at an ADP gap wider than a position-specific threshold,
and the threshold widens in deeper tiers where distinctions blur.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..datamodels.player import ALL_POSITIONS, Player, Position
from ..utils.rounding import round_half_up

BASE_TIER_GAPS: Dict[Position, float] = {
    Position.QB: 15,
    Position.RB: 8,
    Position.WR: 10,
    Position.TE: 12,
    Position.K: 20,
    Position.DEF: 18,
}

TOP_TIERS = (1, 2, 3)


@dataclass(frozen=True)
class PositionTier:
    position: Position
    tier_number: int
    players: Tuple[Player, ...]
    avg_adp: float
    remaining: int


def get_tier_break_threshold(position: Position, tier_number: int) -> float:
    """ADP gap that starts a new tier; 20% wider per tier beyond the first."""
    return BASE_TIER_GAPS[position] * (1 + (tier_number - 1) * 0.2)


def _make_tier(position: Position, tier_number: int, players: List[Player]) -> PositionTier:
    return PositionTier(position=position,
                        tier_number=tier_number,
                        players=tuple(players),
                        avg_adp=float(np.mean([p.adp for p in players])),
                        remaining=len(players))


def identify_tiers(players: Sequence[Player]) -> List[PositionTier]:
    """
    Partition one position's players into ADP tiers.

    Args:
        players: Players that all share a position, in any order

    Returns:
        Tiers ordered best first, numbered from 1
    """
    if not players:
        return []

    position = players[0].position
    ordered = sorted(players, key=lambda p: p.adp)
    gaps = np.diff([p.adp for p in ordered])

    tiers: List[PositionTier] = []
    tier_number = 1
    current: List[Player] = [ordered[0]]

    for player, gap in zip(ordered[1:], gaps):
        if gap > get_tier_break_threshold(position, tier_number):
            tiers.append(_make_tier(position, tier_number, current))
            tier_number += 1
            current = [player]
        else:
            current.append(player)

    tiers.append(_make_tier(position, tier_number, current))
    return tiers


def analyze_position_tiers(players: Sequence[Player]) -> List[PositionTier]:
    """Tiers for every position present in ``players``, QB through DEF."""
    by_position: Dict[Position, List[Player]] = defaultdict(list)
    for player in players:
        by_position[player.position].append(player)

    tiers: List[PositionTier] = []
    for position in ALL_POSITIONS:
        tiers.extend(identify_tiers(by_position[position]))
    return tiers


def is_last_in_tier(player: Player, available_players: Sequence[Player]) -> bool:
    """
    True when this is the last representative of its tier still on the board.

    ``available_players`` is assumed ADP-sorted, as the draft state keeps it.
    """
    same_position = [p for p in available_players if p.position == player.position]
    index = next((i for i, p in enumerate(same_position) if p.id == player.id), -1)

    if index == -1 or index == len(same_position) - 1:
        return True

    next_player = same_position[index + 1]
    gap = next_player.adp - player.adp
    return gap > get_tier_break_threshold(player.position, player.tier)


def get_remaining_in_tier(player: Player, available_players: Sequence[Player]) -> int:
    return sum(1 for p in available_players if p.position == player.position and p.tier == player.tier)


def calculate_tier_urgency(player: Player, available_players: Sequence[Player], current_pick: int) -> int:
    """
    Urgency (0-100) to take this player now based on what is left in their tier.
    """
    same_position = [p for p in available_players if p.position == player.position]
    remaining = sum(1 for p in same_position if p.tier == player.tier)

    if remaining == 1:
        urgency = 90
    elif remaining == 2:
        urgency = 70
    elif remaining == 3:
        urgency = 50
    else:
        urgency = max(0, 40 - remaining * 5)

    next_tier = [p for p in same_position if p.tier == player.tier + 1]
    if next_tier:
        # Steep cliff to the next tier's best player
        if next_tier[0].adp - player.adp > 20:
            urgency += 15

    # Slept on relative to consensus while the tier is nearly gone
    if player.adp > current_pick + 10 and remaining <= 2:
        urgency += 10

    return min(100, round_half_up(urgency))


def get_best_in_tier(position: Position, tier: int, available_players: Sequence[Player]) -> Optional[Player]:
    candidates = [p for p in available_players if p.position == position and p.tier == tier]
    return min(candidates, key=lambda p: p.adp, default=None)


def get_tier_distribution(position: Position, available_players: Sequence[Player]) -> Dict[int, int]:
    distribution: Dict[int, int] = defaultdict(int)
    for player in available_players:
        if player.position == position:
            distribution[player.tier] += 1
    return dict(distribution)


def should_draft_position_now(position: Position, available_players: Sequence[Player], current_round: int) -> bool:
    """Whether tier availability says this position should be addressed this round."""
    distribution = get_tier_distribution(position, available_players)
    top_tier_count = sum(distribution.get(tier, 0) for tier in TOP_TIERS)

    if 0 < top_tier_count <= 3:
        return True

    if position == Position.QB and current_round <= 6 and top_tier_count <= 5:
        return True
    if position == Position.TE and current_round <= 8 and 0 < distribution.get(1, 0) <= 2:
        return True
    if position in (Position.RB, Position.WR) and top_tier_count <= 4:
        return True

    return False
