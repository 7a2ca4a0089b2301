from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

# ----- Grid & board -----
GRID_SIZE = 20
CELL_SIZE = 20
PANEL_HEIGHT = 64

# ----- Page -----
TITLE = "Intuition Snake"
HINT = "Use arrow keys to move. Eat the logo to grow."
FOOD_IMAGE = "intuition-logo.png"

# ----- Colors -----
BG         = (11, 11, 11)
HEAD_COLOR = (76, 175, 239)
BODY_COLOR = (51, 255, 119)
FOOD_COLOR = (255, 0, 0)
TEXT       = (255, 255, 255)
PANEL_BG   = (24, 24, 28)
BUTTON_BG  = (37, 99, 235)
BUTTON_ALT = (75, 85, 99)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Timing & placement -----
TICK_MS = 120
MAX_FOOD_ATTEMPTS = 500


class ConfigError(ValueError):
    """Raised when a setting is missing a usable value."""


@dataclass
class Config:
    grid_size: int = GRID_SIZE
    cell_size: int = CELL_SIZE
    tick_ms: int = TICK_MS
    max_food_attempts: int = MAX_FOOD_ATTEMPTS
    seed: Optional[int] = None
    food_image: Optional[str] = FOOD_IMAGE
    log_level: str = "INFO"

    @property
    def board_px(self) -> int:
        return self.grid_size * self.cell_size


def _get_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _validate(cfg: Config) -> Config:
    for name in ("grid_size", "cell_size", "tick_ms", "max_food_attempts"):
        if getattr(cfg, name) < 1:
            raise ConfigError(f"{name} must be positive, got {getattr(cfg, name)}")
    return cfg


def load_config(**overrides) -> Config:
    """
    Build a Config from SNAKE_* environment variables, then apply any
    keyword overrides that are not None (CLI flags pass through here).
    """
    cfg = Config(
        grid_size=_get_int("SNAKE_GRID_SIZE", GRID_SIZE),
        cell_size=_get_int("SNAKE_CELL_SIZE", CELL_SIZE),
        tick_ms=_get_int("SNAKE_TICK_MS", TICK_MS),
        max_food_attempts=_get_int("SNAKE_MAX_FOOD_ATTEMPTS", MAX_FOOD_ATTEMPTS),
        seed=_get_int("SNAKE_SEED", None),
        food_image=os.getenv("SNAKE_FOOD_IMAGE", FOOD_IMAGE) or None,
        log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO"),
    )
    unknown = set(overrides) - set(Config.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
    return _validate(cfg)
