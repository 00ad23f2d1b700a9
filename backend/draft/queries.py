"""
Read-only queries over a draft snapshot.

Used by the engine, the AI modules and the API layer to answer
"who is on the clock" style questions without mutating anything.
"""

from collections import Counter
from typing import Dict, List, Optional, Sequence

from ..datamodels.draft_state import DraftPick, DraftState, DraftStatus, Team
from ..datamodels.player import ALL_POSITIONS, Player, Position
from ..utils.snake_draft import SnakeDraftCalculator

_calculator = SnakeDraftCalculator()


def bye_week_counts(roster: Sequence[Player]) -> Dict[int, int]:
    return dict(Counter(player.bye_week for player in roster if player.bye_week))


def is_draft_complete(state: DraftState) -> bool:
    return len(state.picks) >= state.total_picks


def get_current_round(state: DraftState) -> int:
    return state.current_pick_index // state.settings.num_teams + 1


def get_current_pick_in_round(state: DraftState) -> int:
    return state.current_pick_index % state.settings.num_teams + 1


def get_current_pick_number(state: DraftState) -> int:
    return state.current_pick_index + 1


def get_remaining_picks(state: DraftState) -> int:
    return state.total_picks - len(state.picks)


def get_current_team(state: DraftState) -> Optional[Team]:
    if state.current_pick_index >= len(state.draft_order):
        return None
    return state.get_team(state.draft_order[state.current_pick_index])


def is_user_turn(state: DraftState) -> bool:
    team = get_current_team(state)
    return bool(team and team.is_user and state.status == DraftStatus.IN_PROGRESS)


def get_recent_picks(state: DraftState, count: int = 5) -> List[DraftPick]:
    if count <= 0:
        return []
    return list(state.picks[-count:])


def get_roster_composition(team: Team) -> Dict[Position, int]:
    composition = {position: 0 for position in ALL_POSITIONS}
    for player in team.roster:
        composition[player.position] += 1
    return composition


def get_bye_week_distribution(team: Team) -> Dict[int, int]:
    return bye_week_counts(team.roster)


def get_drafted_players(state: DraftState) -> List[Player]:
    """All rostered players in pick order."""
    by_id = {player.id: player for team in state.teams for player in team.roster}
    return [by_id[pick.player_id] for pick in state.picks if pick.player_id in by_id]


def picks_until_team_turn(state: DraftState, team_id: str) -> int:
    """0 when the team is on the clock, -1 when it has no picks left."""
    team = state.get_team(team_id)
    if team is None or state.status != DraftStatus.IN_PROGRESS:
        return -1

    return _calculator.picks_until_team_turn(current_pick=get_current_pick_number(state),
                                             team_count=state.settings.num_teams,
                                             target_team_index=team.draft_position - 1,
                                             total_picks=state.total_picks)
