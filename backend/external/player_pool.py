"""
Player pool provider for drafts.

Fetches NFL players from Sleeper's REST API and converts them into
draft-ready Player records with ADP, tier, projection and risk values.
Sleeper publishes no ADP, so those numbers are derived from each
player's rank at their position. When Sleeper is unreachable the
service serves its last good copy, then a synthetic mock pool.
"""

import asyncio
import math
import random
import time
from typing import Any, Dict, List, Optional, Tuple
import httpx
import logging

from ..datamodels.draft_state import ScoringFormat
from ..datamodels.player import ALL_POSITIONS, InjuryStatus, Player, Position
from ..utils.rounding import clamp, round_half_up


logger = logging.getLogger(__name__)

# 2025 NFL bye weeks
BYE_WEEKS: Dict[str, int] = {
    "ARI": 11, "ATL": 12, "BAL": 14, "BUF": 12, "CAR": 11,
    "CHI": 7, "CIN": 12, "CLE": 10, "DAL": 7, "DEN": 14,
    "DET": 5, "GB": 10, "HOU": 14, "IND": 14, "JAX": 12,
    "KC": 6, "LAC": 5, "LAR": 6, "LV": 10, "MIA": 6,
    "MIN": 6, "NE": 14, "NO": 12, "NYG": 11, "NYJ": 12,
    "PHI": 5, "PIT": 9, "SEA": 10, "SF": 9, "TB": 11,
    "TEN": 5, "WAS": 14,
}

# Later-drafted positions get larger multipliers
ADP_MULTIPLIERS: Dict[Position, float] = {
    Position.QB: 1.8,
    Position.RB: 0.8,
    Position.WR: 1.0,
    Position.TE: 1.5,
    Position.K: 3.0,
    Position.DEF: 2.5,
}

BASE_PROJECTIONS: Dict[Position, float] = {
    Position.QB: 320,
    Position.RB: 250,
    Position.WR: 220,
    Position.TE: 180,
    Position.K: 140,
    Position.DEF: 150,
}

PROJECTION_DECLINE = 0.07
PLAYERS_PER_TIER = 18

RECEPTION_BOOST = {
    ScoringFormat.STANDARD: 0.0,
    ScoringFormat.PPR: 0.08,
    ScoringFormat.HALF_PPR: 0.04,
}
RECEIVING_POSITIONS = (Position.RB, Position.WR, Position.TE)

# Mock roster built for every NFL team
MOCK_DEPTH: Dict[Position, int] = {
    Position.QB: 1,
    Position.RB: 3,
    Position.WR: 4,
    Position.TE: 1,
    Position.K: 1,
    Position.DEF: 1,
}

CACHE_TTL_SECONDS = 60 * 60


class SleeperAPIError(Exception):
    """Custom exception for Sleeper API errors."""
    pass


class SleeperRateLimitError(SleeperAPIError):
    """Raised when hitting Sleeper API rate limits."""
    pass


def calculate_mock_adp(position: Position, rank: int) -> int:
    return round_half_up(rank * ADP_MULTIPLIERS[position])


def calculate_tier(adp: float) -> int:
    return max(1, math.ceil(adp / PLAYERS_PER_TIER))


def calculate_projection(position: Position, rank: int, scoring_format: ScoringFormat) -> int:
    projection = BASE_PROJECTIONS[position] * (1 - PROJECTION_DECLINE) ** (rank - 1)
    if position in RECEIVING_POSITIONS:
        projection *= 1 + RECEPTION_BOOST[scoring_format]
    return round_half_up(projection)


def map_injury_status(status: Optional[str]) -> InjuryStatus:
    if not status:
        return InjuryStatus.HEALTHY
    try:
        return InjuryStatus(status.lower())
    except ValueError:
        return InjuryStatus.HEALTHY


def calculate_risk_score(injury: InjuryStatus, age: Optional[int], experience: Optional[int]) -> float:
    """Risk 0-10, higher = riskier."""
    risk = 5
    if injury == InjuryStatus.OUT:
        risk += 3
    elif injury == InjuryStatus.DOUBTFUL:
        risk += 2
    elif injury == InjuryStatus.QUESTIONABLE:
        risk += 1

    if experience == 0:
        risk += 2
    if age and age > 30:
        risk += 1

    return clamp(risk, 0, 10)


def calculate_ceiling_score(rank: int, age: Optional[int], experience: Optional[int]) -> float:
    ceiling = 100 - rank * 3
    if experience == 0:
        ceiling += 10
    if age and age < 25:
        ceiling += 5
    return clamp(ceiling, 0, 100)


def calculate_floor_score(rank: int, injury: InjuryStatus, experience: Optional[int]) -> float:
    floor = 100 - rank * 3
    if experience and experience > 5:
        floor += 10
    if injury != InjuryStatus.HEALTHY:
        floor -= 15
    return clamp(floor, 0, 100)


def build_player(player_id: str,
                 name: str,
                 position: Position,
                 team: str,
                 rank: int,
                 scoring_format: ScoringFormat,
                 injury: InjuryStatus = InjuryStatus.HEALTHY,
                 age: Optional[int] = None,
                 experience: Optional[int] = None) -> Player:
    """Convert a position rank plus bio data into a draft-ready Player."""
    adp = calculate_mock_adp(position, rank)

    return Player(id=player_id,
                  name=name,
                  position=position,
                  team=team,
                  bye_week=BYE_WEEKS.get(team, 0),
                  adp=adp,
                  tier=calculate_tier(adp),
                  projected_points=calculate_projection(position, rank, scoring_format),
                  risk_score=calculate_risk_score(injury, age, experience),
                  ceiling_score=calculate_ceiling_score(rank, age, experience),
                  floor_score=calculate_floor_score(rank, injury, experience),
                  injury_status=injury,
                  age=age,
                  experience=experience)


def _sort_and_limit(players: List[Player], limit: Optional[int]) -> List[Player]:
    players = sorted(players, key=lambda p: p.adp)
    return players if limit is None else players[:limit]


def generate_mock_players(scoring_format: ScoringFormat = ScoringFormat.PPR,
                          limit: Optional[int] = None,
                          seed: int = 2025) -> List[Player]:
    """
    Deterministic synthetic pool covering every NFL team.

    Position ranks are shuffled with ``seed`` so teams don't line up in
    alphabetical order on the board.
    """
    rng = random.Random(seed)
    players: List[Player] = []

    for position in ALL_POSITIONS:
        slots: List[Tuple[str, int]] = [(team, depth)
                                        for team in sorted(BYE_WEEKS)
                                        for depth in range(1, MOCK_DEPTH[position] + 1)]
        rng.shuffle(slots)
        # Keep depth charts consistent: a team's RB1 outranks its RB2
        slots.sort(key=lambda slot: slot[1])

        for rank, (team, depth) in enumerate(slots, start=1):
            if position == Position.DEF:
                name, age, experience = f"{team} Defense", None, None
            else:
                name = f"{team} {position.value}{depth}"
                experience = rng.randint(0, 12)
                age = 21 + experience + rng.randint(0, 2)

            players.append(build_player(player_id=f"mock_{position.value}_{rank}",
                                        name=name,
                                        position=position,
                                        team=team,
                                        rank=rank,
                                        scoring_format=scoring_format,
                                        age=age,
                                        experience=experience))

    return _sort_and_limit(players, limit)


class SleeperClient:
    """
    Async client for Sleeper API with rate limiting and error handling.

    Sleeper's API is generally reliable but has rate limits.
    This client handles retries, backoff, and data transformation.
    """

    BASE_URL = "https://api.sleeper.app/v1"

    def __init__(self,
                 timeout: float = 10.0,
                 max_retries: int = 3,
                 rate_limit_delay: float = 1.0,
                 backoff_base: float = 2.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize Sleeper API client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retries for failed requests
            rate_limit_delay: Delay between requests to respect rate limits
            backoff_base: Base of the exponential backoff, 0 retries immediately
            transport: Optional httpx transport, used by tests
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.rate_limit_delay = rate_limit_delay
        self.backoff_base = backoff_base
        self._last_request_time = 0.0

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "FantasyDraftSimulator/1.0.0",
                "Accept": "application/json",
            },
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.client.aclose()

    def _backoff(self, attempt: int) -> float:
        return self.backoff_base ** attempt if self.backoff_base else 0.0

    async def _make_request(self, endpoint: str, **kwargs) -> Any:
        """
        Make a request to Sleeper API with rate limiting and retries.

        Raises:
            SleeperAPIError: For API errors
            SleeperRateLimitError: For rate limit errors
        """
        now = time.time()
        time_since_last = now - self._last_request_time
        if time_since_last < self.rate_limit_delay:
            await asyncio.sleep(self.rate_limit_delay - time_since_last)

        url = f"{self.BASE_URL}{endpoint}"

        for attempt in range(self.max_retries + 1):
            try:
                self._last_request_time = time.time()

                response = await self.client.get(url, **kwargs)

                if response.status_code == 429:
                    if attempt < self.max_retries:
                        wait_time = self._backoff(attempt)
                        logger.warning(f"Rate limited, waiting {wait_time}s before retry")
                        await asyncio.sleep(wait_time)
                        continue
                    raise SleeperRateLimitError("Rate limit exceeded")

                response.raise_for_status()

                return response.json()

            except httpx.HTTPStatusError as e:
                if attempt < self.max_retries and e.response.status_code >= 500:
                    wait_time = self._backoff(attempt)
                    logger.warning(f"Server error {e.response.status_code}, retrying in {wait_time}s")
                    await asyncio.sleep(wait_time)
                    continue
                raise SleeperAPIError(f"HTTP {e.response.status_code}: {e.response.text}") from e

            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    wait_time = self._backoff(attempt)
                    logger.warning(f"Request error {e}, retrying in {wait_time}s")
                    await asyncio.sleep(wait_time)
                    continue
                raise SleeperAPIError(f"Request failed: {e}") from e

        raise SleeperAPIError("Max retries exceeded")

    async def get_raw_players(self) -> Dict[str, Dict[str, Any]]:
        """
        Get all NFL players from Sleeper, keyed by player id.

        This is a large response (~5MB) so callers should cache it.
        """
        logger.info("Fetching all NFL players from Sleeper")

        players_data = await self._make_request("/players/nfl")
        if not isinstance(players_data, dict):
            raise SleeperAPIError("Unexpected players payload")

        logger.info(f"Found {len(players_data)} players")
        return players_data

    async def get_players(self, scoring_format: ScoringFormat = ScoringFormat.PPR) -> List[Player]:
        """Fantasy-relevant players converted to Player records, sorted by ADP."""
        raw_players = await self.get_raw_players()
        return convert_sleeper_players(raw_players, scoring_format)


def _is_draftable(data: Dict[str, Any]) -> bool:
    if data.get("position") not in Position.__members__:
        return False
    if not data.get("team"):
        return False
    return data.get("active", True) is not False


def _player_name(data: Dict[str, Any]) -> str:
    if data.get("full_name"):
        return data["full_name"]
    return f"{data.get('first_name', '')} {data.get('last_name', '')}".strip()


def convert_sleeper_players(raw_players: Dict[str, Dict[str, Any]],
                            scoring_format: ScoringFormat) -> List[Player]:
    """
    Rank Sleeper players within their position and derive draft values.

    Players without a ``search_rank`` go to the back of their position.
    """
    by_position: Dict[Position, List[Tuple[str, Dict[str, Any]]]] = {position: [] for position in ALL_POSITIONS}
    for player_id, data in raw_players.items():
        if _is_draftable(data):
            by_position[Position(data["position"])].append((player_id, data))

    players: List[Player] = []
    for position, entries in by_position.items():
        entries.sort(key=lambda entry: entry[1].get("search_rank") or math.inf)

        for rank, (player_id, data) in enumerate(entries, start=1):
            players.append(build_player(player_id=str(data.get("player_id") or player_id),
                                        name=_player_name(data),
                                        position=position,
                                        team=data["team"],
                                        rank=rank,
                                        scoring_format=scoring_format,
                                        injury=map_injury_status(data.get("injury_status")),
                                        age=data.get("age"),
                                        experience=data.get("years_exp")))

    return _sort_and_limit(players, None)


class PlayerPoolService:
    """
    Cached source of draft pools.

    ``source`` is "sleeper" to fetch live data or "mock" to always serve
    the synthetic pool. Live data is cached per scoring format for an hour.
    """

    def __init__(self,
                 source: str = "mock",
                 client: Optional[SleeperClient] = None,
                 cache_ttl: float = CACHE_TTL_SECONDS,
                 mock_seed: int = 2025):
        if source not in ("mock", "sleeper"):
            raise ValueError(f"Unknown player source '{source}'")

        self.source = source
        self.client = client
        self.cache_ttl = cache_ttl
        self.mock_seed = mock_seed
        self._cache: Dict[ScoringFormat, Tuple[float, List[Player]]] = {}

    async def get_players(self,
                          scoring_format: ScoringFormat = ScoringFormat.PPR,
                          limit: Optional[int] = None,
                          force_refresh: bool = False) -> List[Player]:
        if self.source == "mock":
            return generate_mock_players(scoring_format, limit, self.mock_seed)

        cached = self._cache.get(scoring_format)
        if cached and not force_refresh and time.time() - cached[0] < self.cache_ttl:
            return _sort_and_limit(cached[1], limit)

        try:
            if self.client is None:
                self.client = SleeperClient()
            players = await self.client.get_players(scoring_format)
        except SleeperAPIError as e:
            if cached:
                logger.warning(f"Sleeper unavailable ({e}), serving cached {scoring_format.value} players")
                return _sort_and_limit(cached[1], limit)
            logger.warning(f"Sleeper unavailable ({e}), falling back to mock players")
            return generate_mock_players(scoring_format, limit, self.mock_seed)

        self._cache[scoring_format] = (time.time(), players)
        logger.info(f"Cached {len(players)} {scoring_format.value} players from Sleeper")
        return _sort_and_limit(players, limit)

    async def close(self):
        if self.client is not None:
            await self.client.close()
