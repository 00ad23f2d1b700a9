"""
AI decision engine for opponent picks.

Scores every available player for an AI team with a weighted blend of
ADP value, roster need, positional runs, tier cliffs and bye-week
stacking, then layers on profile-specific modifiers and a small amount
of noise so opponents feel less mechanical.
"""

import asyncio
import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple

from ..datamodels.ai_profile import AIProfile
from ..datamodels.draft_state import DraftPick, DraftState, Team
from ..datamodels.player import Player, PlayerAPI
from ..datamodels.scoring import PickScore, RunInfo, ScoreBreakdown, ScoredCandidate
from ..draft.queries import get_current_pick_number, get_current_round, get_drafted_players, get_recent_picks
from ..utils.rounding import round_half_up
from .need_calculator import calculate_need_value
from .psychology import (
    RUN_WINDOW, calculate_favorite_team_bonus, calculate_panic_bonus,
    calculate_reach_penalty, calculate_scarcity_bonus, detect_positional_run
)
from .tier_analyzer import calculate_tier_urgency, is_last_in_tier


logger = logging.getLogger(__name__)

NEED_WEIGHT = 0.30
VALUE_WEIGHT = 0.25
RUN_WEIGHT = 0.20
TIER_WEIGHT = 0.15
BYE_WEIGHT = 0.10

DEFAULT_NOISE = 0.05
MAX_SANE_REACH = 40

BYE_STACK_PENALTIES = {0: 0, 1: -10, 2: -25}
BYE_STACK_MAX_PENALTY = -40


def calculate_bye_week_penalty(team: Team, player: Player, bye_week_awareness: float) -> int:
    """
    Penalty for stacking another player on an already crowded bye week.

    Counts teammates already rostered on the same bye: one costs 10, two
    cost 25, three or more cost 40, all scaled by awareness.
    """
    if not player.bye_week or bye_week_awareness == 0:
        return 0

    bye_count = team.bye_week_count.get(player.bye_week, 0)
    penalty = BYE_STACK_PENALTIES.get(bye_count, BYE_STACK_MAX_PENALTY)
    return round_half_up(penalty * bye_week_awareness)


def calculate_risk_adjustment(player: Player, risk_tolerance: float) -> float:
    # Unknown or zero risk carries no adjustment
    if not player.risk_score:
        return 0.0

    risk_diff = player.risk_score - 5

    if risk_tolerance > 0.7:
        return risk_diff * 3
    if risk_tolerance < 0.3:
        return -risk_diff * 4
    return 0.0


async def simulate_thinking_delay(rng: Optional[random.Random] = None,
                                  min_ms: int = 300,
                                  max_ms: int = 700) -> float:
    """
    Pause for a random human-like interval and return the delay in ms.

    There is no cancellation handling: a pick computed after an abandoned
    delay still goes through normal validation against the stored state.
    """
    rng = rng or random.Random()
    delay_ms = rng.uniform(min_ms, max_ms) if max_ms > 0 else 0.0
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)
    return delay_ms


class AIDecisionEngine:
    """
    Chooses picks for AI-controlled teams.

    The random source and noise amplitude are injected so tests can pin
    scores down exactly: with ``noise=0`` scoring is a pure function of
    the player, team and draft snapshot.
    """

    def __init__(self, rng: Optional[random.Random] = None, noise: float = DEFAULT_NOISE):
        if noise < 0:
            raise ValueError(f"Noise must be >= 0, got {noise}")

        self.rng = rng or random.Random()
        self.noise = noise

    def select_ai_pick(self, team: Team, state: DraftState,
                       available_players: Optional[Sequence[Player]] = None) -> Optional[Player]:
        """
        Highest-scoring available player for ``team``.

        Args:
            team: Team on the clock
            state: Current draft snapshot
            available_players: Pool to choose from, defaults to the snapshot's

        Returns:
            The chosen player, the best-ADP player for a team without a
            profile, or None when the pool is empty
        """
        available = list(state.available_players if available_players is None else available_players)
        if not available:
            return None

        if team.ai_profile is None:
            return available[0]

        # max() keeps the first maximal score, i.e. the better ADP on ties
        best_player, best_score = max(self._score_all(team, state, available),
                                      key=lambda scored: scored[1].total_score)

        logger.debug(f"{team.name} picks {best_player} with score {best_score.total_score:.1f}")
        return best_player

    def score_player(self,
                     player: Player,
                     team: Team,
                     state: DraftState,
                     current_round: int,
                     current_pick: int,
                     recent_picks: Sequence[DraftPick],
                     available_players: Sequence[Player]) -> PickScore:
        """Score one candidate for ``team``; requires the team to have an AI profile."""
        profile = team.ai_profile
        if profile is None:
            raise ValueError(f"Team {team.id} has no AI profile to score with")

        known_players = list(available_players) + get_drafted_players(state)
        run_info = detect_positional_run(recent_picks, known_players)

        return self._score(player, team, profile, state, current_round, current_pick,
                           run_info, available_players)

    def _score(self,
               player: Player,
               team: Team,
               profile: AIProfile,
               state: DraftState,
               current_round: int,
               current_pick: int,
               run_info: RunInfo,
               available: Sequence[Player]) -> PickScore:
        base = max(0.0, 200 - player.adp) * profile.preference_for(player.position)
        need = calculate_need_value(team, player, state.settings, current_round)
        value = (player.adp - current_pick) * 2
        run = calculate_panic_bonus(player, run_info, profile.panic_factor)
        tier = 50 if is_last_in_tier(player, available) else calculate_tier_urgency(player, available, current_pick)
        bye = calculate_bye_week_penalty(team, player, profile.bye_week_awareness)

        breakdown = ScoreBreakdown(
            base_score=base,
            need_score=need * NEED_WEIGHT,
            value_score=value * VALUE_WEIGHT,
            run_score=run * RUN_WEIGHT,
            tier_score=tier * TIER_WEIGHT,
            bye_score=bye * BYE_WEIGHT,
            scarcity_bonus=calculate_scarcity_bonus(player, available, len(state.picks)),
            favorite_team_bonus=calculate_favorite_team_bonus(player, profile.favorite_teams),
            risk_adjustment=calculate_risk_adjustment(player, profile.risk_tolerance),
            reach_penalty=calculate_reach_penalty(player, current_pick, profile.reach_threshold),
        )

        noise_factor = self.rng.uniform(-self.noise, self.noise) if self.noise else 0.0

        return PickScore(player_id=player.id,
                         total_score=breakdown.weighted_sum * (1 + noise_factor),
                         noise_factor=noise_factor,
                         breakdown=breakdown)

    def _score_all(self, team: Team, state: DraftState,
                   available: Sequence[Player]) -> Iterator[Tuple[Player, PickScore]]:
        current_round = get_current_round(state)
        current_pick = get_current_pick_number(state)
        recent_picks = get_recent_picks(state, RUN_WINDOW)

        # The run only depends on the board, resolve it once per evaluation
        known_players = list(available) + get_drafted_players(state)
        run_info = detect_positional_run(recent_picks, known_players)

        for player in available:
            yield player, self._score(player, team, team.ai_profile, state, current_round,
                                      current_pick, run_info, available)

    def get_top_candidates(self, team: Team, state: DraftState,
                           available_players: Optional[Sequence[Player]] = None,
                           count: int = 5) -> List[ScoredCandidate]:
        """Best ``count`` candidates with their breakdowns, for display."""
        if team.ai_profile is None or count <= 0:
            return []

        available = list(state.available_players if available_players is None else available_players)
        scored = sorted(self._score_all(team, state, available),
                        key=lambda item: item[1].total_score, reverse=True)

        return [ScoredCandidate(player=PlayerAPI.from_player(player),
                                score=score,
                                explanation=explain_pick(player, score, team))
                for player, score in scored[:count]]


def explain_pick(player: Player, score: PickScore, team: Team) -> str:
    breakdown = score.breakdown
    position = player.position.value
    reasons = []

    if breakdown.need_score > 20:
        reasons.append(f"filled team need at {position}")
    if breakdown.value_score > 15:
        reasons.append("great value pick")
    if breakdown.run_score > 15:
        reasons.append(f"reacted to {position} run")
    if breakdown.tier_score > 15:
        reasons.append("last in tier")
    if breakdown.base_score > 150:
        reasons.append("elite player")

    summary = f"{team.name} selected {player.name} ({position})"
    if not reasons:
        return summary
    return f"{summary} - {', '.join(reasons)}"


def validate_ai_pick(player: Player, team: Team, state: DraftState) -> bool:
    """
    Advisory sanity check on an AI choice; never blocks a legal pick.

    Flags picks of unavailable players and reaches of more than 40 picks.
    """
    if state.get_available_player(player.id) is None:
        return False

    reach_amount = get_current_pick_number(state) - player.adp
    if reach_amount > MAX_SANE_REACH:
        logger.warning(f"{team.name} reached {reach_amount:.0f} picks past ADP for {player}")
        return False

    return True
