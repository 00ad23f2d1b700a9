"""
Player pool and AI profile listing endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from ...ai.profiles import get_all_profiles
from ...datamodels.draft_state import ScoringFormat
from ...datamodels.player import PlayerAPI
from ...external.player_pool import PlayerPoolService
from ..dependencies import get_player_pool
from ..responses import success


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/players")
async def list_players(scoring_format: str = Query("ppr", description="standard, ppr or half_ppr"),
                       limit: int = Query(300, ge=1, le=1000),
                       pool: PlayerPoolService = Depends(get_player_pool)):
    """Draftable players sorted by ADP."""
    try:
        scoring = ScoringFormat(scoring_format)
    except ValueError:
        raise HTTPException(status_code=400,
                            detail="Invalid scoring format. Must be standard, ppr, or half_ppr")

    players = await pool.get_players(scoring, limit)
    logger.info(f"Serving {len(players)} {scoring.value} players")

    return success([PlayerAPI.from_player(player) for player in players])


@router.get("/profiles")
async def list_profiles():
    """The registry of AI drafter personalities."""
    return success([
        {
            "id": profile.id,
            "name": profile.name,
            "description": profile.description,
            "risk_tolerance": profile.risk_tolerance,
            "reach_threshold": profile.reach_threshold,
            "panic_factor": profile.panic_factor,
            "bye_week_awareness": profile.bye_week_awareness,
            "positional_preferences": {pos.value: pref for pos, pref in profile.positional_preferences.items()},
            "favorite_teams": list(profile.favorite_teams),
        }
        for profile in get_all_profiles()
    ])
