from .player_pool import (
    BYE_WEEKS, PlayerPoolService, SleeperAPIError, SleeperClient,
    SleeperRateLimitError, convert_sleeper_players, generate_mock_players
)

__all__ = [
    "BYE_WEEKS",
    "PlayerPoolService",
    "SleeperAPIError",
    "SleeperClient",
    "SleeperRateLimitError",
    "convert_sleeper_players",
    "generate_mock_players",
]
