import asyncio
import logging
from typing import Iterator, Tuple, get_type_hints

import pytest

from backend.ai.decision_engine import (
    AIDecisionEngine, calculate_bye_week_penalty, calculate_risk_adjustment, explain_pick,
    simulate_thinking_delay, validate_ai_pick
)
from backend.datamodels.draft_state import Team
from backend.datamodels.player import Player, Position
from backend.datamodels.scoring import PickScore, RunInfo, ScoreBreakdown
from backend.draft.engine import USER_TEAM_ID, execute_pick
from backend.draft.queries import get_current_team
from tests.helpers import make_draft, make_player, make_pool, pick_best_available, quiet_engine


def _team(bye_week_count=None, name: str = "Sharks") -> Team:
    return Team(id="team-9", name=name, is_user=False, bye_week_count=bye_week_count or {}, draft_position=1)


def _breakdown(**overrides) -> ScoreBreakdown:
    values = dict(base_score=0.0, need_score=0.0, value_score=0.0, run_score=0.0,
                  tier_score=0.0, bye_score=0.0)
    values.update(overrides)
    return ScoreBreakdown(**values)


class TestByeWeekPenalty:
    def test_stack_sizes(self) -> None:
        player = make_player(bye_week=7)
        assert calculate_bye_week_penalty(_team(), player, 1.0) == 0
        assert calculate_bye_week_penalty(_team({7: 1}), player, 1.0) == -10
        assert calculate_bye_week_penalty(_team({7: 2}), player, 1.0) == -25
        assert calculate_bye_week_penalty(_team({7: 5}), player, 1.0) == -40

    def test_scaled_by_awareness(self) -> None:
        player = make_player(bye_week=7)
        assert calculate_bye_week_penalty(_team({7: 1}), player, 0.5) == -5
        assert calculate_bye_week_penalty(_team({7: 3}), player, 0.0) == 0

    def test_other_bye_weeks_ignored(self) -> None:
        assert calculate_bye_week_penalty(_team({9: 3}), make_player(bye_week=7), 1.0) == 0


class TestRiskAdjustment:
    def test_gambler_likes_risk(self) -> None:
        assert calculate_risk_adjustment(make_player(risk_score=8.0), 0.95) == 9.0

    def test_safe_drafter_avoids_risk(self) -> None:
        assert calculate_risk_adjustment(make_player(risk_score=8.0), 0.2) == -12.0
        assert calculate_risk_adjustment(make_player(risk_score=2.0), 0.2) == 12.0

    def test_neutral_tolerance(self) -> None:
        assert calculate_risk_adjustment(make_player(risk_score=9.0), 0.5) == 0.0

    def test_unknown_risk(self) -> None:
        assert calculate_risk_adjustment(make_player(risk_score=None), 0.95) == 0.0
        assert calculate_risk_adjustment(make_player(risk_score=0.0), 0.95) == 0.0


class TestThinkingDelay:
    def test_zero_max_skips_sleep(self) -> None:
        assert asyncio.run(simulate_thinking_delay(min_ms=0, max_ms=0)) == 0.0

    def test_delay_within_bounds(self) -> None:
        delay = asyncio.run(simulate_thinking_delay(min_ms=1, max_ms=3))
        assert 1 <= delay <= 3


class TestSelectAIPick:
    def test_negative_noise_rejected(self) -> None:
        with pytest.raises(ValueError):
            AIDecisionEngine(noise=-0.1)

    def test_empty_pool(self, draft, engine) -> None:
        team = draft.get_team("team-2")
        assert engine.select_ai_pick(team, draft, []) is None

    def test_team_without_profile_takes_best_adp(self, draft, engine) -> None:
        user = draft.get_team(USER_TEAM_ID)
        assert engine.select_ai_pick(user, draft).id == "p1"

    def test_quiet_engines_agree(self, draft) -> None:
        state = pick_best_available(draft, 1)
        team = get_current_team(state)
        first = quiet_engine(seed=1).select_ai_pick(team, state)
        second = quiet_engine(seed=99).select_ai_pick(team, state)
        assert first.id == second.id

    def test_picks_from_supplied_pool(self, draft, engine) -> None:
        team = draft.get_team("team-2")
        pool = [p for p in draft.available_players if p.position == Position.WR]
        assert engine.select_ai_pick(team, draft, pool).position == Position.WR

    def test_full_ai_draft_completes(self, engine) -> None:
        state = make_draft(num_teams=6, num_rounds=8, profile_ids=[], seed=3)
        while (team := get_current_team(state)) is not None:
            player = engine.select_ai_pick(team, state)
            state = execute_pick(state, team.id, player.id).updated_state

        rostered = [p.id for t in state.teams for p in t.roster]
        assert state.is_complete
        assert len(rostered) == len(set(rostered)) == 48
        assert all(len(t.roster) == 8 for t in state.teams)


class TestScorePlayer:
    def test_requires_profile(self, draft, engine) -> None:
        user = draft.get_team(USER_TEAM_ID)
        with pytest.raises(ValueError):
            engine.score_player(draft.available_players[0], user, draft, 1, 1, [], draft.available_players)

    def test_breakdown_components(self, draft, engine) -> None:
        team = draft.get_team("team-2")
        qb = draft.get_available_player("p5")
        score = engine.score_player(qb, team, draft, 1, 1, [], draft.available_players)

        assert score.player_id == "p5"
        assert score.noise_factor == 0.0
        assert score.breakdown.base_score == pytest.approx(195.0)
        assert score.breakdown.value_score == pytest.approx(2.0)
        # Early QB need of 70, boosted for an empty position
        assert score.breakdown.need_score == pytest.approx(91 * 0.3)
        assert score.total_score == pytest.approx(score.breakdown.weighted_sum)

    def test_noise_is_bounded(self, draft) -> None:
        noisy = AIDecisionEngine(noise=0.05)
        team = draft.get_team("team-2")
        for candidate in noisy.get_top_candidates(team, draft, count=10):
            score = candidate.score
            assert -0.05 <= score.noise_factor <= 0.05
            assert score.total_score == pytest.approx(score.breakdown.weighted_sum * (1 + score.noise_factor))

    def test_scoring_helpers_are_typed(self) -> None:
        hints = get_type_hints(AIDecisionEngine._score)
        assert hints["run_info"] is RunInfo
        assert hints["return"] is PickScore
        assert get_type_hints(AIDecisionEngine._score_all)["return"] == Iterator[Tuple[Player, PickScore]]


class TestTopCandidates:
    def test_sorted_and_limited(self, draft, engine) -> None:
        candidates = engine.get_top_candidates(draft.get_team("team-2"), draft, count=3)
        totals = [c.score.total_score for c in candidates]
        assert len(candidates) == 3
        assert totals == sorted(totals, reverse=True)
        assert candidates[0].explanation.startswith("The Balanced selected")

    def test_best_candidate_matches_selection(self, draft, engine) -> None:
        team = draft.get_team("team-2")
        best = engine.get_top_candidates(team, draft, count=1)[0]
        assert best.player.id == engine.select_ai_pick(team, draft).id

    def test_no_profile_no_candidates(self, draft, engine) -> None:
        assert engine.get_top_candidates(draft.get_team(USER_TEAM_ID), draft) == []


class TestExplainPick:
    def test_reasons_listed(self) -> None:
        player = make_player(position=Position.RB, name="Joe Back")
        score = PickScore(player_id=player.id, total_score=1.0,
                          breakdown=_breakdown(need_score=25.0, base_score=160.0))
        assert explain_pick(player, score, _team()) == \
            "Sharks selected Joe Back (RB) - filled team need at RB, elite player"

    def test_no_reasons(self) -> None:
        player = make_player(position=Position.K, name="Leg")
        score = PickScore(player_id=player.id, total_score=1.0, breakdown=_breakdown())
        assert explain_pick(player, score, _team()) == "Sharks selected Leg (K)"


class TestValidateAIPick:
    def test_reasonable_pick(self, draft) -> None:
        assert validate_ai_pick(draft.available_players[0], _team(), draft)

    def test_unavailable_player(self, draft) -> None:
        assert not validate_ai_pick(make_player("ghost"), _team(), draft)

    def test_huge_reach_is_flagged(self, caplog: pytest.LogCaptureFixture) -> None:
        players = [make_player("slider", adp=1)] + make_pool(80)[1:]
        state = make_draft(num_teams=4, num_rounds=15, players=players)
        for _ in range(45):
            team = get_current_team(state)
            state = execute_pick(state, team.id, state.available_players[1].id).updated_state

        with caplog.at_level(logging.WARNING):
            assert not validate_ai_pick(state.get_available_player("slider"), _team(), state)
        assert "reached 45 picks" in caplog.text
