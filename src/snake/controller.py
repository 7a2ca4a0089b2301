# controller.py
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, Optional

import pygame  # type: ignore

from .config import Config
from .controls import InputController
from .engine import TickResult, tick
from .model import GameState, GridModel, new_grid_model
from .render import Renderer

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1
PAUSE_KEYS = (pygame.K_p, pygame.K_SPACE)


class TickTimer:
    """
    Repeating pygame timer that posts `event_type` every `interval_ms`.
    Each posted event carries the `generation` it was started with.
    """

    def __init__(self, event_type: int = TICK_EVENT, interval_ms: int = 120):
        self.event_type = event_type
        self.interval_ms = interval_ms
        self.running = False

    def start(self, generation: int = 0) -> None:
        if self.running:
            return
        event = pygame.event.Event(self.event_type, generation=generation)
        pygame.time.set_timer(event, self.interval_ms)
        self.running = True

    def stop(self) -> None:
        if not self.running:
            return
        pygame.time.set_timer(self.event_type, 0)
        # Drop ticks still queued; ones already pulled off the queue are
        # rejected by generation in GameController.handle_event.
        pygame.event.clear(self.event_type)
        self.running = False


class GameController:
    """
    Owns the model and the tick timer. Every change to game state goes
    through tick(), on_key(), pause(), resume() or restart().
    """

    def __init__(self, config: Config, renderer: Renderer, timer: TickTimer,
                 rng=None, on_game_over: Optional[Callable[[int], None]] = None,
                 inputs: Optional[InputController] = None):
        self.config = config
        self.renderer = renderer
        self.timer = timer
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.on_game_over = on_game_over
        self.inputs = inputs if inputs is not None else InputController()
        self.model = self._new_model()
        self.buttons: Dict[str, pygame.Rect] = {}
        self.generation = 0

    def _new_model(self) -> GridModel:
        return new_grid_model(self.config.grid_size, rng=self.rng,
                              max_food_attempts=self.config.max_food_attempts)

    @property
    def state(self) -> GameState:
        return self.model.state

    def start(self) -> None:
        logger.info("new game on a %dx%d grid", self.config.grid_size, self.config.grid_size)
        self.redraw()
        self._arm()

    def _arm(self) -> None:
        # Ticks posted under an older generation are ignored.
        self.generation += 1
        self.timer.start(self.generation)

    def redraw(self) -> None:
        self.renderer.render(self.model)
        if self.model.state is GameState.PAUSED:
            self.renderer.render_paused()
        elif self.model.state is GameState.GAME_OVER:
            self.renderer.render_game_over(self.model.score)
        self.buttons = self.renderer.render_panel(self.model.state)

    # ----- Simulation -----
    def tick(self) -> Optional[TickResult]:
        if self.model.state is not GameState.RUNNING:
            return None  # stale timer event
        result = tick(self.model, rng=self.rng, max_food_attempts=self.config.max_food_attempts)
        logger.debug("tick -> %s (score=%d, length=%d)", result.value, self.model.score, len(self.model.snake))
        if result is TickResult.COLLIDED:
            self._game_over()
        else:
            self.redraw()
        return result

    def _game_over(self) -> None:
        self.timer.stop()
        self.model.state = GameState.GAME_OVER
        self.redraw()
        logger.info("game over, final score %d", self.model.score)
        if self.on_game_over is not None:
            self.on_game_over(self.model.score)

    # ----- Commands -----
    def on_key(self, key: int) -> bool:
        if self.model.state is not GameState.RUNNING:
            return False
        return self.inputs.on_key(self.model, key)

    def pause(self) -> None:
        if self.model.state is not GameState.RUNNING:
            return
        self.timer.stop()
        self.model.state = GameState.PAUSED
        logger.info("paused at score %d", self.model.score)
        self.redraw()

    def resume(self) -> None:
        if self.model.state is not GameState.PAUSED:
            return
        self.model.state = GameState.RUNNING
        logger.info("resumed")
        self.redraw()
        self._arm()

    def toggle_pause(self) -> None:
        if self.model.state is GameState.PAUSED:
            self.resume()
        else:
            self.pause()

    def restart(self) -> None:
        """Start a fresh game. Only from PAUSED or GAME_OVER; a live game is kept."""
        if self.model.state is GameState.RUNNING:
            return
        self.timer.stop()
        self.model = self._new_model()
        logger.info("restarted")
        self.start()

    # ----- Event dispatch -----
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == self.timer.event_type:
            if getattr(event, "generation", None) == self.generation:
                self.tick()
        elif event.type == pygame.KEYDOWN:
            if event.key in PAUSE_KEYS:
                self.toggle_pause()
            elif event.key == pygame.K_r:
                self.restart()
            else:
                self.on_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if "restart" in self.buttons and self.buttons["restart"].collidepoint(event.pos):
                self.restart()
            elif "pause" in self.buttons and self.buttons["pause"].collidepoint(event.pos):
                self.toggle_pause()
