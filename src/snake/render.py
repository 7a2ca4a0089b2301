# render.py
from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

import pygame  # type: ignore

from .config import (
    BG, HEAD_COLOR, BODY_COLOR, FOOD_COLOR, TEXT,
    PANEL_BG, BUTTON_BG, BUTTON_ALT, HINT,
)
from .model import GameState, GridModel

logger = logging.getLogger(__name__)


class FoodImage:
    """
    Food sprite loaded off the main loop. `surface` stays None until the file
    is decoded, and for good if it cannot be read.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.surface: Optional[pygame.Surface] = None
        self._thread: Optional[threading.Thread] = None
        if path:
            self._thread = threading.Thread(target=self._load, name="food-image", daemon=True)
            self._thread.start()

    def _load(self) -> None:
        try:
            image = pygame.image.load(self.path)
        except (pygame.error, OSError) as exc:
            logger.warning("could not load food image %s: %s", self.path, exc)
            return
        self.surface = image
        logger.info("food image loaded from %s", self.path)

    def wait(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)


def draw_cell(surface: pygame.Surface, gx: int, gy: int, size: int, color: Tuple[int, int, int]) -> None:
    rect = pygame.Rect(gx * size, gy * size, size - 1, size - 1)
    pygame.draw.rect(surface, color, rect)


class Renderer:
    def __init__(self, surface: pygame.Surface, cell_size: int,
                 food_image: Optional[FoodImage] = None,
                 font: Optional[pygame.font.Font] = None,
                 panel: Optional[pygame.Surface] = None):
        if not pygame.font.get_init():
            pygame.font.init()
        if font is None:
            font = pygame.font.Font(None, 22)
        self.surface = surface
        self.cell_size = cell_size
        self.food_image = food_image
        self.font = font
        self.small_font = pygame.font.Font(None, 18)
        self.panel = panel
        self._scaled: Optional[pygame.Surface] = None

    def _food_sprite(self) -> Optional[pygame.Surface]:
        if self.food_image is None or self.food_image.surface is None:
            return None
        if self._scaled is None:
            self._scaled = pygame.transform.scale(
                self.food_image.surface, (self.cell_size, self.cell_size)
            )
        return self._scaled

    def render(self, model: GridModel) -> None:
        size = self.cell_size
        self.surface.fill(BG)

        # snake
        for idx, (x, y) in enumerate(model.snake):
            draw_cell(self.surface, x, y, size, HEAD_COLOR if idx == 0 else BODY_COLOR)

        # food (image if loaded, else red square)
        if model.food is not None:
            fx, fy = model.food
            sprite = self._food_sprite()
            if sprite is not None:
                self.surface.blit(sprite, (fx * size, fy * size))
            else:
                draw_cell(self.surface, fx, fy, size, FOOD_COLOR)

        # score
        txt = self.font.render(f"Score: {model.score}", True, TEXT)
        self.surface.blit(txt, (8, 6))

    def _centered(self, lines) -> None:
        width, height = self.surface.get_size()
        top = height // 2 - 16 * (len(lines) - 1)
        for i, (text, color) in enumerate(lines):
            img = self.font.render(text, True, color)
            self.surface.blit(img, img.get_rect(center=(width // 2, top + 30 * i)))

    def render_game_over(self, score: int) -> None:
        # Dim the retained final frame
        overlay = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        self.surface.blit(overlay, (0, 0))
        self._centered([
            ("GAME OVER", (240, 240, 250)),
            (f"Final score: {score}", (220, 220, 230)),
            ("Press R or Restart", (220, 220, 230)),
        ])

    def render_paused(self) -> None:
        self._centered([("PAUSED", (240, 240, 250))])

    def render_panel(self, state: GameState) -> Dict[str, pygame.Rect]:
        """Draw the command buttons; returns their rects in window coordinates."""
        if self.panel is None:
            return {}
        self.panel.fill(PANEL_BG)
        width, height = self.panel.get_size()
        ox, oy = self.panel.get_abs_offset()
        label = "Resume" if state is GameState.PAUSED else "Pause"
        buttons = {}
        for i, (name, text, color) in enumerate((
            ("restart", "Restart", BUTTON_BG),
            ("pause", label, BUTTON_ALT),
        )):
            rect = pygame.Rect(0, 0, 90, 28)
            rect.center = (width // 2 + (i * 2 - 1) * 55, 20)
            pygame.draw.rect(self.panel, color, rect, border_radius=4)
            img = self.font.render(text, True, TEXT)
            self.panel.blit(img, img.get_rect(center=rect.center))
            buttons[name] = rect.move(ox, oy)
        hint = self.small_font.render(HINT, True, TEXT)
        self.panel.blit(hint, hint.get_rect(center=(width // 2, height - 12)))
        return buttons
