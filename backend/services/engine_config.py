"""Centralized configuration for the probability engine and API.

Settings come from environment variables (optionally loaded from a ``.env``
file) and are cached after the first read.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# Inclusion-exclusion enumerates 2^m subsets; 2^20 is the interactive ceiling
DEFAULT_MAX_COMBINATIONS = 20
DEFAULT_BACKGROUND_THRESHOLD = 12
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173",)  # Vite default port

# Defaults the deck form starts with
DEFAULT_DECK_SIZE = 40
DEFAULT_DRAW_SIZE = 5

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the probability engine and its HTTP surface."""

    max_combinations: int
    background_threshold: int
    timeout_seconds: float
    log_level: str
    log_to_file: bool
    cors_origins: tuple[str, ...]


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@lru_cache(maxsize=1)
def get_engine_config() -> EngineConfig:
    """Load engine configuration from environment variables.

    Returns:
        EngineConfig with combination bounds, timeouts and logging options.

    Raises:
        ValueError: If a variable holds a value of the wrong type.
    """
    return EngineConfig(
        max_combinations=_env_int(
            "DECKCALC_MAX_COMBINATIONS", DEFAULT_MAX_COMBINATIONS, minimum=1
        ),
        background_threshold=_env_int(
            "DECKCALC_BACKGROUND_THRESHOLD", DEFAULT_BACKGROUND_THRESHOLD, minimum=1
        ),
        timeout_seconds=_env_float("DECKCALC_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        log_level=os.getenv("DECKCALC_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_to_file=_env_bool("DECKCALC_LOG_TO_FILE", True),
        cors_origins=_env_list("DECKCALC_CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
    )


def clear_config_cache() -> None:
    """Clear the cached engine configuration.

    Useful for testing when environment variables change.
    """
    get_engine_config.cache_clear()
