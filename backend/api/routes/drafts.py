"""
Draft lifecycle API endpoints.

Creating a draft, human and AI picks, undo, and the read-only views
(candidates, insights) over a stored snapshot.
"""

import logging
import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...ai.need_calculator import calculate_team_needs
from ...ai.profiles import get_profile
from ...ai.psychology import analyze_draft_context
from ...config import AppConfig
from ...datamodels.api_models import AdvanceRequest, AIPickRequest, CreateDraftRequest, MakePickRequest
from ...datamodels.player import PlayerAPI
from ...datamodels.results import DraftError, PickResult
from ...draft.engine import initialize_draft
from ...draft.queries import get_current_round, get_current_team, picks_until_team_turn
from ...external.player_pool import PlayerPoolService
from ...simulation.auto_draft import AutoDraftRunner, NoPlayerSelectedError, NotAnAITeamError
from ...storage.draft_store import DraftNotFoundError, DraftStore
from ..dependencies import get_config, get_player_pool, get_rng, get_runner, get_store
from ..responses import serialize_draft, success


router = APIRouter()
logger = logging.getLogger(__name__)

# Advises the user's own team, which has no AI profile
ADVISOR_PROFILE = "balanced"


async def _load(store: DraftStore, draft_id: str):
    try:
        return await store.get(draft_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _pick_response(result: PickResult):
    if not result.success:
        status_code = 404 if result.error in (DraftError.TEAM_NOT_FOUND, DraftError.PLAYER_NOT_FOUND) else 400
        raise HTTPException(status_code=status_code, detail=result.error_message)

    state = result.updated_state
    pick = state.picks[-1]
    player = next(p for p in state.get_team(pick.team_id).roster if p.id == pick.player_id)

    return success({
        "draft": serialize_draft(state),
        "pick": {**pick.model_dump(mode="json"), "player": PlayerAPI.from_player(player)},
    })


@router.post("/drafts", status_code=201)
async def create_draft(request: CreateDraftRequest,
                       store: DraftStore = Depends(get_store),
                       pool: PlayerPoolService = Depends(get_player_pool),
                       config: AppConfig = Depends(get_config),
                       rng: random.Random = Depends(get_rng)):
    """
    Create a draft with the user's team and AI opponents in every other seat.
    """
    settings = request.settings
    limit = request.player_limit or config.player_limit

    players = await pool.get_players(settings.scoring_type, limit)
    if len(players) < settings.total_picks:
        logger.warning(f"Player pool of {len(players)} is smaller than {settings.total_picks} picks")

    try:
        state = initialize_draft(user_name=request.user_name,
                                 user_draft_position=request.user_draft_position,
                                 settings=settings,
                                 ai_profile_ids=request.ai_profile_ids,
                                 available_players=players,
                                 rng=rng)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await store.save(state)
    return success(serialize_draft(state))


@router.get("/drafts/{draft_id}")
async def get_draft(draft_id: str, store: DraftStore = Depends(get_store)):
    state = await _load(store, draft_id)
    return success(serialize_draft(state))


@router.post("/drafts/{draft_id}/picks")
async def make_pick(draft_id: str, request: MakePickRequest, runner: AutoDraftRunner = Depends(get_runner)):
    try:
        result = await runner.make_user_pick(draft_id, request.team_id, request.player_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _pick_response(result)


@router.post("/drafts/{draft_id}/ai-pick")
async def make_ai_pick(draft_id: str,
                       request: Optional[AIPickRequest] = None,
                       runner: AutoDraftRunner = Depends(get_runner)):
    team_id = request.team_id if request else None

    try:
        result = await runner.make_ai_pick(draft_id, team_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotAnAITeamError:
        raise HTTPException(status_code=400, detail="Cannot make AI pick for user team")
    except NoPlayerSelectedError:
        raise HTTPException(status_code=500, detail="AI could not select a player")

    return _pick_response(result)


@router.post("/drafts/{draft_id}/advance")
async def advance_draft(draft_id: str,
                        request: Optional[AdvanceRequest] = None,
                        runner: AutoDraftRunner = Depends(get_runner)):
    """Run AI picks until the user is on the clock or the draft completes."""
    max_picks = request.max_picks if request else None

    try:
        picks = await runner.advance_until_user_turn(draft_id, max_picks)
        state = await runner.store.get(draft_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NoPlayerSelectedError:
        raise HTTPException(status_code=500, detail="AI could not select a player")

    return success({"draft": serialize_draft(state), "picks": [pick.model_dump(mode="json") for pick in picks]})


@router.post("/drafts/{draft_id}/undo")
async def undo_pick(draft_id: str, runner: AutoDraftRunner = Depends(get_runner)):
    try:
        state = await runner.undo(draft_id)
    except DraftNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return success(serialize_draft(state))


@router.get("/drafts/{draft_id}/candidates")
async def get_candidates(draft_id: str,
                         team_id: Optional[str] = Query(None, description="Defaults to the team on the clock"),
                         count: int = Query(5, ge=1, le=50),
                         store: DraftStore = Depends(get_store),
                         runner: AutoDraftRunner = Depends(get_runner)):
    """
    Top scored candidates for a team with their breakdowns.

    The user's team is scored with the balanced profile as an advisor.
    """
    state = await _load(store, draft_id)

    team = state.get_team(team_id) if team_id else get_current_team(state)
    if team is None:
        raise HTTPException(status_code=404, detail=DraftError.TEAM_NOT_FOUND.message)

    if team.ai_profile is None:
        team = team.model_copy(update={"ai_profile": get_profile(ADVISOR_PROFILE)})

    candidates = runner.engine.get_top_candidates(team, state, state.available_players, count)
    return success({"team_id": team.id, "candidates": candidates})


@router.get("/drafts/{draft_id}/insights")
async def get_insights(draft_id: str, store: DraftStore = Depends(get_store)):
    """Runs, scarcity warnings, falling values and the user's positional needs."""
    state = await _load(store, draft_id)
    insights = analyze_draft_context(state)

    user_team = state.user_team
    needs = calculate_team_needs(user_team, state.settings, get_current_round(state)) if user_team else {}

    return success({
        **insights.model_dump(mode="json"),
        "user_needs": {position.value: need for position, need in needs.items()},
        "picks_until_user_turn": picks_until_team_turn(state, user_team.id) if user_team else -1,
    })
