from .engine import (
    USER_TEAM_ID, execute_pick, initialize_draft, undo_last_pick, validate_pick
)
from .queries import (
    get_bye_week_distribution, get_current_pick_in_round, get_current_pick_number,
    get_current_round, get_current_team, get_drafted_players, get_recent_picks,
    get_remaining_picks, get_roster_composition, is_draft_complete, is_user_turn,
    picks_until_team_turn
)

__all__ = [
    "USER_TEAM_ID",
    "execute_pick",
    "initialize_draft",
    "undo_last_pick",
    "validate_pick",

    "get_bye_week_distribution",
    "get_current_pick_in_round",
    "get_current_pick_number",
    "get_current_round",
    "get_current_team",
    "get_drafted_players",
    "get_recent_picks",
    "get_remaining_picks",
    "get_roster_composition",
    "is_draft_complete",
    "is_user_turn",
    "picks_until_team_turn",
]
