# food.py
from __future__ import annotations

import logging
import random
from typing import Set, Tuple

from .config import MAX_FOOD_ATTEMPTS

logger = logging.getLogger(__name__)


def place(occupied: Set[Tuple[int, int]], grid_size: int, rng=None,
          max_attempts: int = MAX_FOOD_ATTEMPTS) -> Tuple[int, int]:
    """
    Sample random cells until one is free of the snake.

    Gives up after max_attempts samples and returns the last one drawn, so a
    (nearly) full board yields a best-effort cell that may overlap the snake
    instead of spinning forever.
    """
    rng = rng if rng is not None else random
    cell = (0, 0)
    for _ in range(max(max_attempts, 1)):
        cell = (rng.randrange(grid_size), rng.randrange(grid_size))
        if cell not in occupied:
            return cell
    logger.warning("no free cell after %d attempts, placing food at %s", max_attempts, cell)
    return cell
