import pytest

from backend.utils.rounding import clamp, round_half_up
from backend.utils.snake_draft import SnakeDraftCalculator, generate_draft_order


class TestGenerateDraftOrder:
    def test_four_teams_three_rounds(self) -> None:
        order = generate_draft_order(["1", "2", "3", "4"], 3)
        assert order == ["1", "2", "3", "4", "4", "3", "2", "1", "1", "2", "3", "4"]

    def test_length_is_teams_times_rounds(self) -> None:
        teams = [f"t{i}" for i in range(12)]
        assert len(generate_draft_order(teams, 15)) == 180

    def test_odd_rounds_are_reversed(self) -> None:
        teams = [f"t{i}" for i in range(10)]
        order = generate_draft_order(teams, 4)
        for round_index in range(4):
            chunk = order[round_index * 10:(round_index + 1) * 10]
            expected = teams if round_index % 2 == 0 else list(reversed(teams))
            assert chunk == expected

    def test_zero_rounds_is_empty(self) -> None:
        assert generate_draft_order(["a", "b"], 0) == []

    def test_negative_rounds_rejected(self) -> None:
        with pytest.raises(ValueError):
            generate_draft_order(["a", "b"], -1)


class TestDraftPositionInfo:
    def test_first_pick(self) -> None:
        assert SnakeDraftCalculator().get_draft_position_info(1, 12) == (1, 1, 0)

    def test_round_two_reverses(self) -> None:
        calculator = SnakeDraftCalculator()
        assert calculator.get_draft_position_info(13, 12) == (2, 1, 11)
        assert calculator.get_draft_position_info(24, 12) == (2, 12, 0)

    def test_invalid_pick_number(self) -> None:
        with pytest.raises(ValueError):
            SnakeDraftCalculator().get_draft_position_info(0, 12)


class TestPicksUntilTeamTurn:
    def test_on_the_clock_is_zero(self) -> None:
        assert SnakeDraftCalculator().picks_until_team_turn(1, 4, 0, 12) == 0

    def test_turn_wraps_around_the_snake(self) -> None:
        # Team 1 picks 1st, then 8th in a 4-team draft
        assert SnakeDraftCalculator().picks_until_team_turn(2, 4, 0, 12) == 6

    def test_no_picks_left(self) -> None:
        # Pick 12 belongs to team 4; team 1 has nothing left
        assert SnakeDraftCalculator().picks_until_team_turn(12, 4, 0, 12) == -1


class TestRounding:
    def test_half_rounds_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(-2.5) == -2

    def test_regular_rounding(self) -> None:
        assert round_half_up(2.49) == 2
        assert round_half_up(7.0) == 7

    def test_clamp(self) -> None:
        assert clamp(12, 0, 10) == 10
        assert clamp(-3, 0, 10) == 0
        assert clamp(4, 0, 10) == 4
