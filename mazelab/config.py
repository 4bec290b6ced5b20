# mazelab/config.py
import os
from typing import Optional

# --- Maze size ---
DEFAULT_HEIGHT = 21
DEFAULT_WIDTH = 21

# --- Generation ---
CYCLE_PROBABILITY = 0.1

# Surface distribution on a d100 roll (upper bounds, exclusive).
# Anything at or above the last bound is NORMAL.
SWAMP_CHANCE = 5
SAND_CHANCE = 15
COIN_CHANCE = 20
ROAD_CHANCE = 30
MAX_CHANCE = 100

# --- Viewer ---
PANEL_W = 320
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
CELL_SIZE_MIN = 4
STEPS_PER_SEC = 12


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """An environment override holds a value that cannot be used."""


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def resolve_seed() -> Optional[int]:
    raw = os.getenv("MAZELAB_SEED")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"MAZELAB_SEED must be an integer, got {raw!r}") from None


def resolve_cycle_probability() -> float:
    p = _env_float("MAZELAB_CYCLE_PROBABILITY", CYCLE_PROBABILITY)
    if not 0.0 <= p <= 1.0:
        raise ConfigError(f"MAZELAB_CYCLE_PROBABILITY must be within [0, 1], got {p}")
    return p


def resolve_log_level() -> str:
    level = os.getenv("MAZELAB_LOG_LEVEL", "WARNING").upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"MAZELAB_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level
