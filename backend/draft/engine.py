"""
Snake draft state machine.

Every state-changing operation takes a DraftState snapshot and returns
a new one; nothing here touches global state or storage. Validation
failures come back as ValidationResult / PickResult values so the
same legality rules apply to human and AI picks alike.
"""

import bisect
import logging
import random
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from ..ai.profiles import assign_random_profiles, get_profile
from ..datamodels.ai_profile import AIProfile
from ..datamodels.draft_state import DraftPick, DraftSettings, DraftState, DraftStatus, Team
from ..datamodels.player import Player
from ..datamodels.results import DraftError, PickResult, ValidationResult
from ..utils.snake_draft import generate_draft_order
from .queries import bye_week_counts, get_current_pick_in_round, get_current_round


logger = logging.getLogger(__name__)

USER_TEAM_ID = "team-user"
RANDOM_PROFILE = "random"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def initialize_draft(user_name: str,
                     user_draft_position: int,
                     settings: DraftSettings,
                     ai_profile_ids: Sequence[Optional[str]],
                     available_players: Sequence[Player],
                     draft_id: Optional[str] = None,
                     rng: Optional[random.Random] = None) -> DraftState:
    """
    Create a new draft with the user at ``user_draft_position`` and an AI
    team in every other seat.

    Args:
        user_name: Display name of the human team
        user_draft_position: 1-based seat of the user
        settings: League settings
        ai_profile_ids: One entry per AI seat in draft-position order, or one
            entry per draft position (length num_teams) with the user's
            entry ignored; None, "random" or an unknown id draws from a
            shuffled profile cycle
        available_players: Player pool, will be sorted by ADP
        draft_id: Optional explicit identifier
        rng: Random source for profile assignment

    Returns:
        DraftState with status IN_PROGRESS
    """
    if not 1 <= user_draft_position <= settings.num_teams:
        raise ValueError(f"Draft position {user_draft_position} outside 1-{settings.num_teams}")

    rng = rng or random.Random()
    random_pool = assign_random_profiles(settings.num_teams - 1, rng)
    random_index = 0

    by_position = len(ai_profile_ids) == settings.num_teams

    teams: List[Team] = []
    ai_seat = 0
    for position in range(1, settings.num_teams + 1):
        if position == user_draft_position:
            teams.append(Team(id=USER_TEAM_ID, name=user_name, is_user=True, draft_position=position))
            continue

        seat = position - 1 if by_position else ai_seat
        requested = ai_profile_ids[seat] if seat < len(ai_profile_ids) else None
        ai_seat += 1

        profile: Optional[AIProfile] = None
        if requested and requested != RANDOM_PROFILE:
            profile = get_profile(requested)
            if profile is None:
                logger.warning(f"Unknown AI profile '{requested}' for seat {position}, assigning random")

        if profile is None:
            profile = random_pool[random_index % len(random_pool)]
            random_index += 1

        teams.append(Team(id=f"team-{position}",
                          name=profile.name,
                          is_user=False,
                          ai_profile=profile,
                          draft_position=position))

    draft_order = generate_draft_order([team.id for team in teams], settings.num_rounds)
    created = _now()

    state = DraftState(id=draft_id or uuid.uuid4().hex,
                       teams=tuple(teams),
                       picks=(),
                       current_pick_index=0,
                       available_players=tuple(sorted(available_players, key=lambda p: p.adp)),
                       draft_order=tuple(draft_order),
                       settings=settings,
                       status=DraftStatus.IN_PROGRESS,
                       created_at=created,
                       updated_at=created)

    logger.info(f"Initialized draft {state.id}: {settings.num_teams} teams, "
                f"{settings.num_rounds} rounds, user at pick {user_draft_position}, "
                f"{len(state.available_players)} players")
    return state


def _replace_team(teams: Tuple[Team, ...], updated: Team) -> Tuple[Team, ...]:
    """Swap in ``updated``; every other team gets its own copy of its dicts so snapshots never share one."""
    return tuple(updated if t.id == updated.id else
                 t.model_copy(update={"needs": dict(t.needs), "bye_week_count": dict(t.bye_week_count)})
                 for t in teams)


def validate_pick(state: DraftState, team_id: str, player_id: str) -> ValidationResult:
    """Read-only legality check for ``team_id`` taking ``player_id`` now."""
    if state.status != DraftStatus.IN_PROGRESS:
        return ValidationResult.fail(DraftError.NOT_IN_PROGRESS)

    if state.current_pick_index >= len(state.draft_order) or state.draft_order[state.current_pick_index] != team_id:
        return ValidationResult.fail(DraftError.WRONG_TURN)

    if state.get_available_player(player_id) is None:
        return ValidationResult.fail(DraftError.PLAYER_UNAVAILABLE)

    if any(pick.player_id == player_id for pick in state.picks):
        return ValidationResult.fail(DraftError.ALREADY_DRAFTED)

    return ValidationResult.ok()


def execute_pick(state: DraftState, team_id: str, player_id: str) -> PickResult:
    validation = validate_pick(state, team_id, player_id)
    if not validation.valid:
        return PickResult(success=False, error=validation.error)

    player = state.get_available_player(player_id)
    if player is None:
        return PickResult(success=False, error=DraftError.PLAYER_NOT_FOUND)

    team = state.get_team(team_id)
    if team is None:
        return PickResult(success=False, error=DraftError.TEAM_NOT_FOUND)

    pick_number = state.current_pick_index + 1
    new_pick = DraftPick(id=f"pick-{pick_number}",
                         draft_id=state.id,
                         team_id=team_id,
                         player_id=player_id,
                         pick_number=pick_number,
                         round=get_current_round(state),
                         pick_in_round=get_current_pick_in_round(state),
                         timestamp=_now(),
                         is_ai_pick=not team.is_user)

    updated_team = team.model_copy(update={
        "roster": team.roster + (player,),
        "needs": dict(team.needs),
        "bye_week_count": bye_week_counts(team.roster + (player,)),
    })

    picks = state.picks + (new_pick,)
    completed = len(picks) >= state.total_picks

    updated = state.model_copy(update={
        "teams": _replace_team(state.teams, updated_team),
        "picks": picks,
        "available_players": tuple(p for p in state.available_players if p.id != player_id),
        "current_pick_index": state.current_pick_index + 1,
        "status": DraftStatus.COMPLETED if completed else DraftStatus.IN_PROGRESS,
        "updated_at": _now(),
    })

    logger.info(f"Draft {state.id}: pick {pick_number} (R{new_pick.round}.{new_pick.pick_in_round}) "
                f"{team.name} took {player}")
    if completed:
        logger.info(f"Draft {state.id} completed after {len(picks)} picks")

    return PickResult(success=True, updated_state=updated)


def undo_last_pick(state: DraftState) -> DraftState:
    """Roll back exactly one pick; a draft with no picks is returned unchanged."""
    if not state.picks:
        return state

    last_pick = state.picks[-1]
    team = state.get_team(last_pick.team_id)
    player = None

    teams = state.teams
    if team is not None:
        player = next((p for p in team.roster if p.id == last_pick.player_id), None)
        roster = tuple(p for p in team.roster if p.id != last_pick.player_id)
        restored = team.model_copy(update={
            "roster": roster,
            "needs": dict(team.needs),
            "bye_week_count": bye_week_counts(roster),
        })
        teams = _replace_team(state.teams, restored)

    available = list(state.available_players)
    if player is not None:
        # bisect_right keeps equal-ADP players in their existing relative order
        index = bisect.bisect_right([p.adp for p in available], player.adp)
        available.insert(index, player)
    else:
        logger.warning(f"Draft {state.id}: undo could not find player {last_pick.player_id} on a roster")

    logger.info(f"Draft {state.id}: undid pick {last_pick.pick_number}")

    return state.model_copy(update={
        "teams": teams,
        "picks": state.picks[:-1],
        "available_players": tuple(available),
        "current_pick_index": max(0, state.current_pick_index - 1),
        "status": DraftStatus.IN_PROGRESS,
        "updated_at": _now(),
    })


