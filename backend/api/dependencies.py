"""
FastAPI dependencies resolving the shared services on ``app.state``.

create_app wires the services once; routes only ever reach them
through these functions so tests can swap them via dependency_overrides.
"""

import random

from fastapi import Request

from ..config import AppConfig
from ..external.player_pool import PlayerPoolService
from ..simulation.auto_draft import AutoDraftRunner
from ..storage.draft_store import DraftStore


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_store(request: Request) -> DraftStore:
    return request.app.state.draft_store


def get_runner(request: Request) -> AutoDraftRunner:
    return request.app.state.runner


def get_player_pool(request: Request) -> PlayerPoolService:
    return request.app.state.player_pool


def get_rng(request: Request) -> random.Random:
    return request.app.state.rng
