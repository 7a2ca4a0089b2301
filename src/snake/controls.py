# controls.py
from __future__ import annotations

from typing import Dict

import pygame  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT
from .model import Direction, GridModel, is_opposite

KEY_DIRECTIONS: Dict[int, Direction] = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
}


class InputController:
    """Turns arrow keys into the model's pending direction (no 180° turns)."""

    def __init__(self, keymap: Dict[int, Direction] = KEY_DIRECTIONS):
        self.keymap = dict(keymap)

    def on_key(self, model: GridModel, key: int) -> bool:
        cand = self.keymap.get(key)
        if cand is None:
            return False
        # Compare with the committed direction, not the pending one.
        if is_opposite(cand, model.direction):
            return False
        model.pending = cand
        return True
