"""
Team need evaluation.

Compares a team's roster composition with a target composition derived
from the league's roster slots, then adjusts for the draft round:
kickers and defenses can wait early, and must be filled late.
"""

import math
from dataclasses import dataclass
from typing import Dict, List

from ..datamodels.draft_state import DraftSettings, Team
from ..datamodels.player import ALL_POSITIONS, Player, Position
from ..draft.queries import get_roster_composition
from ..utils.rounding import round_half_up

EARLY_ROUND_LIMIT = 5
LATE_ROUND_START = 12


@dataclass(frozen=True)
class RosterBalance:
    balanced: bool
    weak_positions: List[Position]
    strong_positions: List[Position]


def get_target_composition(settings: DraftSettings) -> Dict[Position, int]:
    slots = settings.roster_slots
    flex_share = math.ceil(slots.FLEX * 0.5)

    return {
        Position.QB: slots.QB + math.floor(slots.BENCH * 0.1),
        Position.RB: slots.RB + flex_share + math.floor(slots.BENCH * 0.35),
        Position.WR: slots.WR + flex_share + math.floor(slots.BENCH * 0.35),
        Position.TE: slots.TE + math.floor(slots.BENCH * 0.1),
        Position.K: slots.K,
        Position.DEF: slots.DEF,
    }


def _position_need(position: Position, current: int, target: int, current_round: int) -> int:
    if current == 0:
        need = 100.0
    elif current < target:
        need = 80 - (current / target) * 30
    elif current == target:
        # Depth / insurance
        need = 40.0
    else:
        need = max(0, 30 - (current - target) * 10)

    if current_round <= EARLY_ROUND_LIMIT:
        if position in (Position.K, Position.DEF):
            need *= 0.3
        elif position == Position.QB:
            need *= 0.7
    elif current_round >= LATE_ROUND_START:
        if position in (Position.K, Position.DEF) and current == 0:
            need = 100

    return round_half_up(need)


def calculate_team_needs(team: Team, settings: DraftSettings, current_round: int) -> Dict[Position, int]:
    """
    Need score (0-100) per position, higher = more needed.
    """
    composition = get_roster_composition(team)
    targets = get_target_composition(settings)

    return {position: _position_need(position, composition[position], targets[position], current_round)
            for position in ALL_POSITIONS}


def calculate_position_need(team: Team, position: Position, settings: DraftSettings, current_round: int) -> int:
    return calculate_team_needs(team, settings, current_round)[position]


def get_highest_need_position(team: Team, settings: DraftSettings, current_round: int) -> Position:
    needs = calculate_team_needs(team, settings, current_round)

    highest_position = Position.RB
    highest_need = 0
    for position in ALL_POSITIONS:
        if needs[position] > highest_need:
            highest_need = needs[position]
            highest_position = position

    return highest_position


def calculate_need_value(team: Team, player: Player, settings: DraftSettings, current_round: int) -> int:
    """How much drafting ``player`` fills this team's needs (0-100)."""
    position_need = calculate_position_need(team, player.position, settings, current_round)
    need_value = float(position_need)

    if not team.has_position(player.position):
        need_value *= 1.3

    if position_need > 70 and player.tier <= 3:
        need_value *= 1.2

    return min(100, round_half_up(need_value))


def should_reach_for_need(team: Team,
                          player: Player,
                          current_pick: int,
                          settings: DraftSettings,
                          current_round: int) -> bool:
    position_need = calculate_position_need(team, player.position, settings, current_round)
    if position_need < 80:
        return False

    reach_amount = current_pick - player.adp

    if reach_amount <= 10 and position_need >= 90:
        return True
    if reach_amount <= 5:
        return True

    # Late-round emergency for an empty K/DEF slot
    if current_round >= 13 and player.position in (Position.K, Position.DEF):
        return not team.has_position(player.position)

    return False


def evaluate_roster_balance(team: Team, settings: DraftSettings) -> RosterBalance:
    composition = get_roster_composition(team)
    targets = get_target_composition(settings)

    weak = [pos for pos in ALL_POSITIONS if composition[pos] < targets[pos] * 0.5]
    strong = [pos for pos in ALL_POSITIONS if composition[pos] > targets[pos] * 1.5]

    return RosterBalance(balanced=not weak, weak_positions=weak, strong_positions=strong)
