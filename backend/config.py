"""
Application configuration.

Defaults live on AppConfig; environment variables prefixed with
FANTASY_DRAFT_ override them, and an explicit dict passed to
create_app overrides both.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

ENV_PREFIX = "FANTASY_DRAFT_"


class ConfigurationError(Exception):
    """Raised when a configuration value cannot be parsed."""
    pass


@dataclass(frozen=True)
class AppConfig:
    title: str = "Fantasy Draft Simulator"
    description: str = "Snake draft simulator with AI opponents"
    version: str = "1.0.0"
    debug: bool = False
    cors_origins: Tuple[str, ...] = ("http://localhost:3000", "http://localhost:8080")

    player_source: str = "mock"     # "mock" or "sleeper"
    player_limit: int = 250
    thinking_delay_min_ms: int = 300
    thinking_delay_max_ms: int = 700
    random_seed: Optional[int] = None
    ai_noise: float = 0.05

    def __post_init__(self):
        if self.player_source not in ("mock", "sleeper"):
            raise ConfigurationError(f"player_source must be 'mock' or 'sleeper', got '{self.player_source}'")
        if self.thinking_delay_min_ms > self.thinking_delay_max_ms:
            raise ConfigurationError("thinking_delay_min_ms must not exceed thinking_delay_max_ms")
        if self.ai_noise < 0:
            raise ConfigurationError(f"ai_noise must be >= 0, got {self.ai_noise}")

    def with_overrides(self, overrides: Mapping[str, Any]) -> 'AppConfig':
        """Copy with known keys replaced; unknown keys are ignored."""
        known = {f.name for f in fields(self)}
        values = {key: value for key, value in overrides.items() if key in known}
        if "cors_origins" in values:
            values["cors_origins"] = tuple(values["cors_origins"])
        return replace(self, **values)


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _parse(name: str, raw: str, kind: type) -> Any:
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be {kind.__name__}: {e}") from e


def load_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build configuration from environment variables.

    Environment variables (all optional):
        FANTASY_DRAFT_DEBUG: true/false
        FANTASY_DRAFT_CORS_ORIGINS: Comma-separated origins
        FANTASY_DRAFT_PLAYER_SOURCE: mock or sleeper
        FANTASY_DRAFT_PLAYER_LIMIT: Players loaded into a new draft
        FANTASY_DRAFT_THINKING_DELAY_MIN_MS / _MAX_MS: AI pause bounds
        FANTASY_DRAFT_RANDOM_SEED: Seed for reproducible drafts
        FANTASY_DRAFT_AI_NOISE: Score noise amplitude, 0 disables it
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    def env(name: str) -> Optional[str]:
        raw = environ.get(f"{ENV_PREFIX}{name}")
        return raw if raw not in (None, "") else None

    if env("DEBUG") is not None:
        values["debug"] = _parse_bool(env("DEBUG"))
    if env("CORS_ORIGINS") is not None:
        values["cors_origins"] = tuple(o.strip() for o in env("CORS_ORIGINS").split(",") if o.strip())
    if env("PLAYER_SOURCE") is not None:
        values["player_source"] = env("PLAYER_SOURCE").strip().lower()

    for name, kind in (("PLAYER_LIMIT", int),
                       ("THINKING_DELAY_MIN_MS", int),
                       ("THINKING_DELAY_MAX_MS", int),
                       ("RANDOM_SEED", int),
                       ("AI_NOISE", float)):
        if env(name) is not None:
            values[name.lower()] = _parse(name, env(name), kind)

    return AppConfig(**values)
