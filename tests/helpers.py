import random
from typing import List, Optional, Sequence

from backend.ai.decision_engine import AIDecisionEngine
from backend.datamodels.draft_state import DraftSettings, DraftState
from backend.datamodels.player import Player, Position
from backend.draft.engine import execute_pick, initialize_draft
from backend.draft.queries import get_current_team


def make_player(
    player_id: str = "p1",
    position: Position = Position.RB,
    adp: float = 1.0,
    tier: int = 1,
    team: str = "DAL",
    bye_week: int = 7,
    name: Optional[str] = None,
    risk_score: Optional[float] = 5.0,
    projected_points: float = 200.0,
) -> Player:
    return Player(
        id=player_id,
        name=name or f"Player {player_id}",
        position=position,
        team=team,
        bye_week=bye_week,
        adp=adp,
        tier=tier,
        projected_points=projected_points,
        risk_score=risk_score,
    )


POSITION_CYCLE = (
    Position.RB, Position.WR, Position.RB, Position.WR, Position.QB, Position.TE,
    Position.WR, Position.RB, Position.WR, Position.RB, Position.K, Position.DEF,
)

TEAMS = ("DAL", "KC", "SF", "PHI", "BUF", "DET", "MIA", "CIN", "BAL", "GB", "NYJ", "LAR")
BYES = {"DAL": 7, "KC": 6, "SF": 9, "PHI": 5, "BUF": 12, "DET": 5,
        "MIA": 6, "CIN": 12, "BAL": 14, "GB": 10, "NYJ": 12, "LAR": 6}


def make_pool(size: int) -> List[Player]:
    """Pool with ADP 1..size, a realistic position mix and tiers of 18."""
    players = []
    for index in range(size):
        team = TEAMS[index % len(TEAMS)]
        players.append(make_player(
            player_id=f"p{index + 1}",
            position=POSITION_CYCLE[index % len(POSITION_CYCLE)],
            adp=float(index + 1),
            tier=index // 18 + 1,
            team=team,
            bye_week=BYES[team],
        ))
    return players


def make_settings(num_teams: int = 4, num_rounds: int = 3) -> DraftSettings:
    return DraftSettings(num_teams=num_teams, num_rounds=num_rounds)


def make_draft(
    num_teams: int = 4,
    num_rounds: int = 3,
    user_position: int = 1,
    players: Optional[Sequence[Player]] = None,
    profile_ids: Optional[Sequence[Optional[str]]] = None,
    seed: int = 7,
) -> DraftState:
    settings = make_settings(num_teams, num_rounds)
    if players is None:
        players = make_pool(num_teams * num_rounds + 20)
    if profile_ids is None:
        profile_ids = ["balanced"] * (num_teams - 1)

    return initialize_draft(
        user_name="Tester",
        user_draft_position=user_position,
        settings=settings,
        ai_profile_ids=profile_ids,
        available_players=players,
        draft_id="draft-test",
        rng=random.Random(seed),
    )


def quiet_engine(seed: int = 1) -> AIDecisionEngine:
    return AIDecisionEngine(rng=random.Random(seed), noise=0.0)


def pick_best_available(state: DraftState, count: int) -> DraftState:
    """Advance ``count`` picks with each team taking the top-ADP player."""
    for _ in range(count):
        team = get_current_team(state)
        result = execute_pick(state, team.id, state.available_players[0].id)
        assert result.success, result.error
        state = result.updated_state
    return state
