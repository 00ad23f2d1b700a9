"""
Async driver for stored drafts.

Wraps the pure draft engine and the AI decision engine with storage:
every operation loads the current snapshot under the draft's lock,
computes the next snapshot, and publishes it with compare-and-swap.
"""

import logging
import random
import time
from typing import List, Optional

from ..ai.decision_engine import AIDecisionEngine, simulate_thinking_delay, validate_ai_pick
from ..datamodels.draft_state import DraftPick, DraftState, DraftStatus
from ..datamodels.results import DraftError, PickResult
from ..draft.engine import execute_pick, undo_last_pick
from ..draft.queries import get_current_team
from ..storage.draft_store import DraftStore


logger = logging.getLogger(__name__)


class AutoDraftError(Exception):
    """Raised when an AI pick cannot be attempted at all."""
    pass


class NotAnAITeamError(AutoDraftError):
    """Raised when an AI pick is requested for the human team."""
    pass


class NoPlayerSelectedError(AutoDraftError):
    """Raised when the decision engine has nothing to choose from."""
    pass


class AutoDraftRunner:
    """
    Runs human and AI picks against a draft store.

    A single runner is shared by all requests; per-draft serialization
    comes from the store's locks.
    """

    def __init__(self,
                 store: DraftStore,
                 engine: Optional[AIDecisionEngine] = None,
                 thinking_delay_min_ms: int = 300,
                 thinking_delay_max_ms: int = 700,
                 rng: Optional[random.Random] = None):
        """
        Args:
            store: Where draft snapshots live
            engine: Decision engine for AI teams
            thinking_delay_min_ms: Lower bound of the AI "thinking" pause
            thinking_delay_max_ms: Upper bound of the pause, 0 disables it
            rng: Random source for the pause length
        """
        if thinking_delay_min_ms > thinking_delay_max_ms:
            raise ValueError("thinking_delay_min_ms must not exceed thinking_delay_max_ms")

        self.store = store
        self.engine = engine or AIDecisionEngine()
        self.thinking_delay_min_ms = thinking_delay_min_ms
        self.thinking_delay_max_ms = thinking_delay_max_ms
        self.rng = rng or random.Random()

    async def make_ai_pick(self, draft_id: str, team_id: Optional[str] = None) -> PickResult:
        """
        Let an AI team pick; ``team_id`` defaults to the team on the clock.

        Raises:
            DraftNotFoundError: Unknown draft id
            NotAnAITeamError: The team is the human team
            NoPlayerSelectedError: No player left to choose
        """
        async with self.store.lock(draft_id):
            state = await self.store.get(draft_id)

            if team_id is None:
                team = get_current_team(state)
                if team is None:
                    return PickResult(success=False, error=DraftError.NOT_IN_PROGRESS)
            else:
                team = state.get_team(team_id)
                if team is None:
                    return PickResult(success=False, error=DraftError.TEAM_NOT_FOUND)

            if team.is_user:
                raise NotAnAITeamError(f"Cannot make AI pick for user team {team.id}")

            start_time = time.time()
            await simulate_thinking_delay(self.rng, self.thinking_delay_min_ms, self.thinking_delay_max_ms)

            player = self.engine.select_ai_pick(team, state, state.available_players)
            if player is None:
                raise NoPlayerSelectedError(f"{team.name} could not select a player in draft {draft_id}")

            if not validate_ai_pick(player, team, state):
                logger.warning(f"Draft {draft_id}: {team.name} pick of {player} failed the AI sanity check")

            result = execute_pick(state, team.id, player.id)
            if result.success:
                await self.store.compare_and_swap(draft_id, state, result.updated_state)
                logger.info(f"Draft {draft_id}: AI {team.name} decided on {player} "
                            f"in {(time.time() - start_time) * 1000:.0f}ms")
            else:
                logger.warning(f"Draft {draft_id}: AI pick rejected for {team.name}: {result.error_message}")

            return result

    async def make_user_pick(self, draft_id: str, team_id: str, player_id: str) -> PickResult:
        async with self.store.lock(draft_id):
            state = await self.store.get(draft_id)

            result = execute_pick(state, team_id, player_id)
            if result.success:
                await self.store.compare_and_swap(draft_id, state, result.updated_state)
            else:
                logger.info(f"Draft {draft_id}: pick by {team_id} rejected: {result.error_message}")

            return result

    async def undo(self, draft_id: str) -> DraftState:
        async with self.store.lock(draft_id):
            state = await self.store.get(draft_id)
            updated = undo_last_pick(state)
            if updated is not state:
                await self.store.compare_and_swap(draft_id, state, updated)
            return updated

    async def advance_until_user_turn(self, draft_id: str, max_picks: Optional[int] = None) -> List[DraftPick]:
        """
        Run AI picks until the human team is on the clock or the draft ends.

        Each pick takes the lock separately, so a concurrent undo or human
        pick is seen before the next AI decision.

        Returns:
            The picks made, in order
        """
        made: List[DraftPick] = []

        while max_picks is None or len(made) < max_picks:
            state = await self.store.get(draft_id)
            if state.status != DraftStatus.IN_PROGRESS:
                break

            team = get_current_team(state)
            if team is None or team.is_user:
                break

            result = await self.make_ai_pick(draft_id, team.id)
            if not result.success:
                logger.warning(f"Draft {draft_id}: stopped advancing after {len(made)} picks: "
                               f"{result.error_message}")
                break

            made.append(result.updated_state.picks[-1])

        logger.info(f"Draft {draft_id}: advanced {len(made)} AI picks")
        return made
