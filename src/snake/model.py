# model.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .config import GRID_SIZE, MAX_FOOD_ATTEMPTS, RIGHT
from .food import place

Cell = Tuple[int, int]
Direction = Tuple[int, int]


class GameState(enum.Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


@dataclass
class GridModel:
    grid_size: int
    snake: List[Cell]              # head at index 0
    direction: Direction
    pending: Direction             # adopted at the start of the next tick
    food: Optional[Cell]
    score: int = 0
    state: GameState = GameState.RUNNING

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def occupied(self) -> Set[Cell]:
        return set(self.snake)


def new_grid_model(grid_size: int = GRID_SIZE, rng=None,
                   max_food_attempts: int = MAX_FOOD_ATTEMPTS) -> GridModel:
    """Fresh session: one centered segment heading right, score 0, new food."""
    snake = [(grid_size // 2, grid_size // 2)]
    return GridModel(
        grid_size=grid_size,
        snake=snake,
        direction=RIGHT,
        pending=RIGHT,
        food=place(set(snake), grid_size, rng=rng, max_attempts=max_food_attempts),
    )
