"""
Draft snapshot storage.

Drafts live in process memory keyed by draft id, with no durability
across restarts. Writers serialize on a per-draft asyncio lock and
publish new snapshots with compare-and-swap so a pick computed against
an outdated snapshot can never overwrite a newer one.
"""

import asyncio
import logging
from typing import Dict, List

from ..datamodels.draft_state import DraftState


logger = logging.getLogger(__name__)


class DraftStoreError(Exception):
    """Base class for draft storage failures."""
    pass


class DraftNotFoundError(DraftStoreError):
    """Raised when no draft is stored under the requested id."""

    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id} not found")
        self.draft_id = draft_id


class StaleDraftStateError(DraftStoreError):
    """Raised when a swap is attempted against a snapshot that was replaced."""

    def __init__(self, draft_id: str):
        super().__init__(f"Draft {draft_id} changed since it was read")
        self.draft_id = draft_id


class DraftStore:
    """
    Interface every draft store implements.

    Callers that read, compute and write back should hold ``lock(draft_id)``
    for the whole sequence and finish with ``compare_and_swap``.
    ``lock`` raises DraftNotFoundError for ids that were never saved.
    """

    async def get(self, draft_id: str) -> DraftState:
        raise NotImplementedError

    async def save(self, state: DraftState) -> None:
        raise NotImplementedError

    async def compare_and_swap(self, draft_id: str, expected: DraftState, new: DraftState) -> None:
        raise NotImplementedError

    async def delete(self, draft_id: str) -> None:
        raise NotImplementedError

    def lock(self, draft_id: str) -> asyncio.Lock:
        raise NotImplementedError

    async def list_ids(self) -> List[str]:
        raise NotImplementedError


class InMemoryDraftStore(DraftStore):

    def __init__(self):
        self._drafts: Dict[str, DraftState] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    async def get(self, draft_id: str) -> DraftState:
        try:
            return self._drafts[draft_id]
        except KeyError:
            raise DraftNotFoundError(draft_id) from None

    async def save(self, state: DraftState) -> None:
        self._drafts[state.id] = state
        self._locks.setdefault(state.id, asyncio.Lock())
        logger.debug(f"Stored draft {state.id} at pick index {state.current_pick_index}")

    async def compare_and_swap(self, draft_id: str, expected: DraftState, new: DraftState) -> None:
        current = await self.get(draft_id)
        # Snapshots are immutable, so identity means "unchanged since read"
        if current is not expected:
            raise StaleDraftStateError(draft_id)
        self._drafts[draft_id] = new

    async def delete(self, draft_id: str) -> None:
        if self._drafts.pop(draft_id, None) is None:
            raise DraftNotFoundError(draft_id)
        self._locks.pop(draft_id, None)
        logger.info(f"Deleted draft {draft_id}")

    def lock(self, draft_id: str) -> asyncio.Lock:
        try:
            return self._locks[draft_id]
        except KeyError:
            raise DraftNotFoundError(draft_id) from None

    async def list_ids(self) -> List[str]:
        return list(self._drafts)

    def __len__(self) -> int:
        return len(self._drafts)
