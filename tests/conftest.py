import os

import pytest

from backend.datamodels.draft_state import DraftState
from tests.helpers import make_draft, quiet_engine


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove FANTASY_DRAFT_ env vars so tests never pick up a developer's settings."""
    for key in list(os.environ):
        if key.startswith("FANTASY_DRAFT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def draft() -> DraftState:
    """4 teams, 3 rounds, user picking first, balanced AI opponents."""
    return make_draft()


@pytest.fixture
def engine():
    return quiet_engine()
