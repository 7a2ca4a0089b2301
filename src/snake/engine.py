# engine.py
from __future__ import annotations

import enum
import logging

from .config import MAX_FOOD_ATTEMPTS
from .food import place
from .model import GameState, GridModel, is_opposite

logger = logging.getLogger(__name__)


class TickResult(enum.Enum):
    CONTINUE = "continue"
    ATE = "ate"
    COLLIDED = "collided"


def in_bounds(x: int, y: int, grid_size: int) -> bool:
    return 0 <= x < grid_size and 0 <= y < grid_size


def tick(model: GridModel, rng=None, max_food_attempts: int = MAX_FOOD_ATTEMPTS) -> TickResult:
    """
    Advance the game by one cell.
    - COLLIDED: wall or body hit; the model is left exactly as it was.
    - ATE: head landed on food; snake grew, score +1, food respawned.
    - CONTINUE: plain move.
    """
    if model.state is GameState.GAME_OVER:
        return TickResult.COLLIDED
    if model.state is GameState.PAUSED:
        return TickResult.CONTINUE

    # Adopt the pending direction, re-checking the reversal rule
    direction = model.direction
    if not is_opposite(model.pending, model.direction):
        direction = model.pending

    hx, hy = model.head
    dx, dy = direction
    new_head = (hx + dx, hy + dy)

    # Wall collision
    if not in_bounds(new_head[0], new_head[1], model.grid_size):
        logger.debug("wall collision at %s", new_head)
        return TickResult.COLLIDED

    # Self collision
    if new_head in model.snake:
        logger.debug("self collision at %s", new_head)
        return TickResult.COLLIDED

    model.direction = direction
    model.pending = direction
    model.snake.insert(0, new_head)

    # Move / grow
    if new_head == model.food:
        model.score += 1
        model.food = None
        model.food = place(model.occupied(), model.grid_size, rng=rng, max_attempts=max_food_attempts)
        return TickResult.ATE

    model.snake.pop()
    return TickResult.CONTINUE
