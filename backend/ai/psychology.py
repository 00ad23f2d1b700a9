"""
Draft psychology modeling.

Captures how real drafters react to the board: herd behavior during
positional runs, anxiety as a position thins out, reluctance to reach
far past consensus, and favorite-team bias.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..datamodels.draft_state import DraftPick, DraftState
from ..datamodels.player import ALL_POSITIONS, Player, Position
from ..datamodels.scoring import DraftInsights, PositionScarcity, RunInfo
from ..draft.queries import get_current_pick_number, get_drafted_players, get_recent_picks
from ..utils.rounding import round_half_up

RUN_WINDOW = 5

# Reference counts of top-tier (tiers 1-3) players per position at draft start
INITIAL_TOP_TIER_COUNTS: Dict[Position, int] = {
    Position.QB: 12,
    Position.RB: 24,
    Position.WR: 30,
    Position.TE: 10,
    Position.K: 12,
    Position.DEF: 12,
}

# Picks in a standard 12-team, 15-round draft
REFERENCE_DRAFT_PICKS = 180

FAVORITE_TEAM_BONUS = 25
SCARCITY_WARNING_LEVEL = 60
VALUE_FALL_PICKS = 15


def detect_positional_run(recent_picks: Sequence[DraftPick], known_players: Iterable[Player]) -> RunInfo:
    """
    Detect a positional run in the last few picks.

    Args:
        recent_picks: Most recent picks, oldest first; only the last 5 count
        known_players: Players used to resolve pick positions (rosters and pool)

    Returns:
        RunInfo with the plurality position and an intensity of 0-100
    """
    if len(recent_picks) < 2:
        return RunInfo.none()

    positions_by_id = {player.id: player.position for player in known_players}

    def positions(picks: Sequence[DraftPick]) -> List[Position]:
        return [positions_by_id[pick.player_id] for pick in picks if pick.player_id in positions_by_id]

    counts = Counter(positions(recent_picks[-RUN_WINDOW:]))
    if not counts:
        return RunInfo.none()

    # Ties go to the position seen first in the window
    run_position, max_count = counts.most_common(1)[0]

    count_last3 = positions(recent_picks[-3:]).count(run_position)
    count_last4 = positions(recent_picks[-4:]).count(run_position)

    # Later checks overwrite earlier ones
    intensity = 0
    if count_last3 >= 2:
        intensity = 40
    if count_last3 >= 3:
        intensity = 70
    if count_last4 >= 3:
        intensity = 60
    if count_last4 >= 4:
        intensity = 90
    if max_count >= 4:
        intensity = 100

    return RunInfo(position=run_position, intensity=intensity)


def calculate_panic_score(run_info: RunInfo, panic_factor: float, team_need_for_position: float) -> int:
    """Panic (0-100) an AI feels about the running position."""
    if not run_info.is_active:
        return 0

    panic = run_info.intensity * panic_factor

    if team_need_for_position > 70:
        panic *= 1.5
    elif team_need_for_position > 40:
        panic *= 1.2

    return min(100, round_half_up(panic))


def get_panic_threshold(panic_factor: float) -> float:
    # 50-80: panic-prone drafters have the lower bar
    return 50 + (1 - panic_factor) * 30


def should_panic_pick(run_info: RunInfo, panic_factor: float, team_need_for_position: float) -> bool:
    panic = calculate_panic_score(run_info, panic_factor, team_need_for_position)
    return panic >= get_panic_threshold(panic_factor)


def calculate_panic_bonus(player: Player, run_info: RunInfo, panic_factor: float) -> int:
    if run_info.position is None or player.position != run_info.position:
        return 0
    return round_half_up(run_info.intensity * panic_factor * 0.8)


def calculate_scarcity_index(position: Position, available_players: Sequence[Player], total_drafted: int) -> int:
    """
    Scarcity (0-100) of a position from top-tier depletion and draft progress.
    """
    top_tier_remaining = sum(1 for p in available_players if p.position == position and p.tier <= 3)
    percent_remaining = top_tier_remaining / INITIAL_TOP_TIER_COUNTS[position]
    draft_progress = min(1.0, total_drafted / REFERENCE_DRAFT_PICKS)

    scarcity = (1 - percent_remaining) * 70 + draft_progress * 30

    if position in (Position.RB, Position.WR):
        scarcity *= 1.2
    elif position == Position.TE:
        scarcity *= 1.3

    return min(100, round_half_up(scarcity))


def calculate_scarcity_bonus(player: Player, available_players: Sequence[Player], total_drafted: int) -> int:
    scarcity = calculate_scarcity_index(player.position, available_players, total_drafted)

    if scarcity >= 80:
        return 30
    if scarcity >= 60:
        return 20
    if scarcity >= 40:
        return 10
    return 0


def should_reach_for_scarcity(player: Player,
                              current_pick: int,
                              available_players: Sequence[Player],
                              total_drafted: int) -> bool:
    scarcity = calculate_scarcity_index(player.position, available_players, total_drafted)
    reach_amount = current_pick - player.adp

    if scarcity < 60:
        return False
    if scarcity >= 80 and reach_amount <= 15:
        return True
    if scarcity >= 70 and reach_amount <= 10:
        return True
    return reach_amount <= 5


def detect_value_falling_off(current_pick: int, available_players: Sequence[Player]) -> Optional[Player]:
    """Best-tier player sliding 15+ picks past their ADP, if any."""
    falling = [p for p in available_players
               if current_pick - p.adp >= VALUE_FALL_PICKS and p.tier <= 5]
    return min(falling, key=lambda p: p.tier, default=None)


def calculate_reach_penalty(player: Player, current_pick: int, reach_threshold: float) -> int:
    """
    Superlinear penalty for reaching beyond the AI's allowed budget.

    Small reaches inside the budget are free; the excess is penalized
    as excess^1.5 * 5.
    """
    reach_amount = current_pick - player.adp
    if reach_amount <= 0:
        return 0

    max_allowed = 20 * reach_threshold
    excess = reach_amount - max_allowed
    if excess <= 0:
        return 0

    return round_half_up(excess ** 1.5 * 5)


def calculate_favorite_team_bonus(player: Player, favorite_teams: Sequence[str]) -> int:
    return FAVORITE_TEAM_BONUS if player.team in favorite_teams else 0


def find_scarcity_warnings(available_players: Sequence[Player], total_drafted: int) -> Dict[Position, int]:
    warnings = {}
    for position in ALL_POSITIONS:
        scarcity = calculate_scarcity_index(position, available_players, total_drafted)
        if scarcity >= SCARCITY_WARNING_LEVEL:
            warnings[position] = scarcity
    return warnings


def analyze_draft_context(state: DraftState) -> DraftInsights:
    """
    Summarize the board for display: active runs, thin positions and
    players sliding past their ADP among the top 50 available.
    """
    available = state.available_players
    known_players = list(available) + get_drafted_players(state)

    run_info = detect_positional_run(get_recent_picks(state, RUN_WINDOW), known_players)

    scarcity_warnings = [PositionScarcity(position=position, scarcity=scarcity)
                         for position, scarcity in find_scarcity_warnings(available, len(state.picks)).items()]

    current_pick = get_current_pick_number(state)
    value_opportunities = [player for player in available[:50]
                           if detect_value_falling_off(current_pick, [player]) is not None]

    return DraftInsights.build(run_info, scarcity_warnings, value_opportunities)
