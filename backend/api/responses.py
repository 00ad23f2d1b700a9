"""
JSON envelope helpers shared by routes and exception handlers.

Every response body is ``{"success": bool, "data": ..., "error": ...}``.
"""

from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ..datamodels.draft_state import DraftState
from ..draft.queries import (
    get_current_pick_in_round, get_current_pick_number, get_current_round,
    get_current_team, get_remaining_picks, is_user_turn
)


def success(data: Any = None) -> Dict[str, Any]:
    return {"success": True, "data": jsonable_encoder(data)}


def error_response(status_code: int, error_type: str, message: Any, details: Optional[Any] = None) -> JSONResponse:
    error = {"type": error_type, "message": message, "status_code": status_code}
    if details is not None:
        error["details"] = details

    return JSONResponse(status_code=status_code,
                        content=jsonable_encoder({"success": False, "data": None, "error": error}))


def serialize_draft(state: DraftState) -> Dict[str, Any]:
    """Snapshot plus the derived turn information a client needs to render it."""
    current_team = get_current_team(state)

    payload = state.model_dump(mode="json")
    payload.update({
        "current_team_id": current_team.id if current_team else None,
        "current_round": get_current_round(state),
        "current_pick_in_round": get_current_pick_in_round(state),
        "current_pick_number": get_current_pick_number(state),
        "remaining_picks": get_remaining_picks(state),
        "is_user_turn": is_user_turn(state),
    })
    return payload
