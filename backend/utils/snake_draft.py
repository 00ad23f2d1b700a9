"""
Snake draft order calculation utilities.

Handles the logic of determining pick orders in snake drafts, which
the draft engine precomputes once and then indexes pick by pick.
"""

from typing import List, Sequence, Tuple


class SnakeDraftCalculator:
    """
    Utility class for snake draft order calculations.

    Snake drafts reverse direction each round:
    Round 1: 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12
    Round 2: 12, 11, 10, 9, 8, 7, 6, 5, 4, 3, 2, 1
    Round 3: 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12
    """

    def generate_draft_order(self, team_ids: Sequence[str], num_rounds: int) -> List[str]:
        """
        Build the full pick order for a draft.

        Args:
            team_ids: Team IDs in ascending draft-position order
            num_rounds: Number of rounds

        Returns:
            List of team IDs, one per pick, length len(team_ids) * num_rounds
        """
        if num_rounds < 0:
            raise ValueError("Number of rounds must be >= 0")

        draft_order: List[str] = []
        for round_index in range(num_rounds):
            # Even round indexes go forward, odd ones snake back
            if round_index % 2 == 0:
                draft_order.extend(team_ids)
            else:
                draft_order.extend(reversed(team_ids))

        return draft_order

    def get_draft_position_info(self, pick_number: int, team_count: int) -> Tuple[int, int, int]:
        """
        Get detailed position information for a pick.

        Args:
            pick_number: Overall pick number (1-based)
            team_count: Number of teams

        Returns:
            Tuple of (round_number, pick_in_round, team_index) with team_index 0-based
        """
        if pick_number < 1:
            raise ValueError("Pick number must be >= 1")

        round_number = ((pick_number - 1) // team_count) + 1
        pick_in_round = ((pick_number - 1) % team_count) + 1

        if round_number % 2 == 1:
            team_index = pick_in_round - 1
        else:
            team_index = team_count - pick_in_round

        return round_number, pick_in_round, team_index

    def picks_until_team_turn(self,
                              current_pick: int,
                              team_count: int,
                              target_team_index: int,
                              total_picks: int) -> int:
        """
        Calculate how many picks until a specific team's next turn.

        Args:
            current_pick: Pick number currently on the clock (1-based)
            team_count: Number of teams
            target_team_index: Target team index (0-based draft position)
            total_picks: Total picks in the draft

        Returns:
            0 if the team is on the clock, -1 if it has no picks left
        """
        # The next turn is at most two rounds away
        last_pick = min(total_picks, current_pick + team_count * 2)

        for check_pick in range(current_pick, last_pick + 1):
            _, _, team_index = self.get_draft_position_info(check_pick, team_count)
            if team_index == target_team_index:
                return check_pick - current_pick

        return -1


_calculator = SnakeDraftCalculator()


def generate_draft_order(team_ids: Sequence[str], num_rounds: int) -> List[str]:
    return _calculator.generate_draft_order(team_ids, num_rounds)
