"""
Request and response models for the HTTP API.

Request bodies accept both snake_case and camelCase keys so a
JavaScript front end can post its own field names.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .draft_state import DraftSettings


class APIRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateDraftRequest(APIRequest):
    user_name: str = Field("You", min_length=1, max_length=50, description="Display name of the human team")
    user_draft_position: int = Field(..., ge=1, le=16, description="1-based seat of the user")
    settings: DraftSettings = Field(default_factory=DraftSettings)
    ai_profile_ids: List[Optional[str]] = Field(default_factory=list,
                                                description="Profile per AI seat in order, or per draft position "
                                                            "when numTeams entries are sent (the user's entry "
                                                            "is ignored); None or 'random' to draw")
    player_limit: Optional[int] = Field(None, ge=1, le=1000, description="Players loaded into the pool")


class MakePickRequest(APIRequest):
    team_id: str = Field(..., description="Team making the pick")
    player_id: str = Field(..., description="Player being drafted")


class AIPickRequest(APIRequest):
    team_id: Optional[str] = Field(None, description="AI team to pick for, defaults to the team on the clock")


class AdvanceRequest(APIRequest):
    max_picks: Optional[int] = Field(None, ge=1, description="Stop after this many AI picks")


class APIResponse(BaseModel):
    success: bool = Field(..., description="Whether the request succeeded")
    data: Optional[Any] = Field(None, description="Payload on success")
    error: Optional[Any] = Field(None, description="Error details on failure")
