from backend.ai.need_calculator import (
    calculate_need_value, calculate_position_need, calculate_team_needs, evaluate_roster_balance,
    get_highest_need_position, get_target_composition, should_reach_for_need
)
from backend.datamodels.draft_state import DraftSettings, RosterSlots, Team
from backend.datamodels.player import Position
from tests.helpers import make_player

SETTINGS = DraftSettings()


def _team(*positions: Position) -> Team:
    roster = tuple(make_player(f"r{i}", position, adp=i + 1) for i, position in enumerate(positions))
    return Team(id="team-2", name="Team", is_user=False, roster=roster, draft_position=2)


class TestTargetComposition:
    def test_default_slots(self) -> None:
        targets = get_target_composition(SETTINGS)
        assert targets == {Position.QB: 1, Position.RB: 5, Position.WR: 5,
                           Position.TE: 1, Position.K: 1, Position.DEF: 1}

    def test_deep_bench_adds_backups(self) -> None:
        settings = DraftSettings(roster_slots=RosterSlots(BENCH=10, FLEX=2))
        targets = get_target_composition(settings)
        assert targets[Position.QB] == 2
        assert targets[Position.RB] == 2 + 1 + 3


class TestCalculateTeamNeeds:
    def test_empty_roster_early(self) -> None:
        needs = calculate_team_needs(_team(), SETTINGS, current_round=1)
        assert needs == {Position.QB: 70, Position.RB: 100, Position.WR: 100,
                         Position.TE: 100, Position.K: 30, Position.DEF: 30}

    def test_empty_kicker_late_is_urgent(self) -> None:
        needs = calculate_team_needs(_team(), SETTINGS, current_round=12)
        assert needs[Position.K] == 100
        assert needs[Position.DEF] == 100

    def test_partially_filled(self) -> None:
        team = _team(Position.RB, Position.RB)
        assert calculate_position_need(team, Position.RB, SETTINGS, current_round=6) == 68

    def test_filled_and_overfilled(self) -> None:
        assert calculate_position_need(_team(*[Position.RB] * 5), Position.RB, SETTINGS, 6) == 40
        assert calculate_position_need(_team(*[Position.RB] * 6), Position.RB, SETTINGS, 6) == 20
        assert calculate_position_need(_team(*[Position.RB] * 9), Position.RB, SETTINGS, 6) == 0

    def test_filled_kicker_stays_low_late(self) -> None:
        assert calculate_position_need(_team(Position.K), Position.K, SETTINGS, 14) == 40


class TestNeedValue:
    def test_empty_position_boost_capped(self) -> None:
        player = make_player(position=Position.RB, tier=1)
        assert calculate_need_value(_team(), player, SETTINGS, current_round=6) == 100

    def test_early_qb(self) -> None:
        player = make_player(position=Position.QB, tier=1)
        # 70 * 1.3; need of exactly 70 gets no tier boost
        assert calculate_need_value(_team(), player, SETTINGS, current_round=1) == 91

    def test_filled_position(self) -> None:
        player = make_player(position=Position.QB, tier=1)
        assert calculate_need_value(_team(Position.QB), player, SETTINGS, current_round=6) == 40


class TestNeedHelpers:
    def test_highest_need_keeps_position_order(self) -> None:
        assert get_highest_need_position(_team(), SETTINGS, current_round=1) == Position.RB

    def test_highest_need_late_kicker(self) -> None:
        team = _team(Position.QB, *[Position.RB] * 5, *[Position.WR] * 5, Position.TE)
        assert get_highest_need_position(team, SETTINGS, current_round=13) == Position.K

    def test_reach_for_need(self) -> None:
        player = make_player(position=Position.RB, adp=30)
        assert should_reach_for_need(_team(), player, 38, SETTINGS, current_round=6)
        assert not should_reach_for_need(_team(), player, 45, SETTINGS, current_round=6)

    def test_late_kicker_emergency(self) -> None:
        kicker = make_player(position=Position.K, adp=150)
        assert should_reach_for_need(_team(), kicker, 200, SETTINGS, current_round=13)

    def test_low_need_never_reaches(self) -> None:
        qb = make_player(position=Position.QB, adp=30)
        assert not should_reach_for_need(_team(), qb, 31, SETTINGS, current_round=1)

    def test_roster_balance(self) -> None:
        empty = evaluate_roster_balance(_team(), SETTINGS)
        assert not empty.balanced
        assert Position.RB in empty.weak_positions

        stacked = evaluate_roster_balance(_team(*[Position.RB] * 8), SETTINGS)
        assert stacked.strong_positions == [Position.RB]
