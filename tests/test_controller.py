import random

import pygame
import pytest

from snake.config import PANEL_HEIGHT, Config, DOWN, RIGHT, UP
from snake.controller import TICK_EVENT, GameController, TickTimer
from snake.engine import TickResult
from snake.model import GameState
from snake.render import Renderer


class FakeTimer:
    def __init__(self, interval_ms: int = 120) -> None:
        self.event_type = TICK_EVENT
        self.interval_ms = interval_ms
        self.running = False
        self.starts = 0
        self.stops = 0
        self.generation = None

    def start(self, generation: int = 0) -> None:
        if not self.running:
            self.starts += 1
            self.generation = generation
        self.running = True

    def stop(self) -> None:
        if self.running:
            self.stops += 1
        self.running = False


@pytest.fixture
def game():
    window = pygame.Surface((400, 400 + PANEL_HEIGHT))
    renderer = Renderer(
        window.subsurface((0, 0, 400, 400)), 20,
        panel=window.subsurface((0, 400, 400, PANEL_HEIGHT)),
    )
    reports = []
    controller = GameController(
        Config(grid_size=20), renderer, FakeTimer(), rng=random.Random(5),
        on_game_over=reports.append,
    )
    controller.start()
    controller.reports = reports
    return controller


def _tick_event(controller) -> pygame.event.Event:
    return pygame.event.Event(TICK_EVENT, generation=controller.generation)


def _place(controller, snake, direction=RIGHT, food=(0, 0)):
    controller.model.snake = list(snake)
    controller.model.direction = direction
    controller.model.pending = direction
    controller.model.food = food


def test_start_arms_timer_and_runs(game) -> None:
    assert game.state is GameState.RUNNING
    assert game.timer.running
    assert game.model.snake == [(10, 10)]
    assert set(game.buttons) == {"restart", "pause"}


def test_tick_moves_snake(game) -> None:
    _place(game, [(10, 10)])
    assert game.tick() is TickResult.CONTINUE
    assert game.model.snake == [(11, 10)]


def test_collision_stops_timer_then_reports(game) -> None:
    _place(game, [(19, 5)], food=(0, 0))
    game.model.score = 3
    assert game.tick() is TickResult.COLLIDED
    assert game.state is GameState.GAME_OVER
    assert not game.timer.running
    assert game.reports == [3]
    assert game.model.snake == [(19, 5)]


def test_pause_preserves_state_and_resume_continues(game) -> None:
    _place(game, [(10, 10)], food=(0, 0))
    game.tick()
    snapshot = (list(game.model.snake), game.model.food, game.model.score)

    game.pause()
    assert game.state is GameState.PAUSED
    assert not game.timer.running
    assert game.tick() is None  # stale timer event
    assert (game.model.snake, game.model.food, game.model.score) == snapshot

    game.resume()
    assert game.state is GameState.RUNNING
    assert game.timer.running
    assert game.timer.interval_ms == 120
    assert (game.model.snake, game.model.food, game.model.score) == snapshot
    game.tick()
    assert game.model.snake == [(12, 10)]


def test_toggle_pause(game) -> None:
    game.toggle_pause()
    assert game.state is GameState.PAUSED
    game.toggle_pause()
    assert game.state is GameState.RUNNING


def test_pause_and_resume_are_no_ops_after_game_over(game) -> None:
    _place(game, [(0, 0)], direction=UP)
    game.tick()
    assert game.state is GameState.GAME_OVER
    game.pause()
    assert game.state is GameState.GAME_OVER
    game.resume()
    assert game.state is GameState.GAME_OVER
    assert not game.timer.running


def test_keys_ignored_while_paused(game) -> None:
    game.pause()
    assert not game.on_key(pygame.K_UP)
    assert game.model.pending == RIGHT


def test_restart_builds_fresh_model(game) -> None:
    _place(game, [(10, 10)], food=(11, 10))
    game.tick()
    assert game.model.score == 1
    _place(game, [(19, 5), (18, 5)])
    game.tick()
    old = game.model

    game.restart()
    assert game.model is not old
    assert game.model.score == 0
    assert game.model.snake == [(10, 10)]
    assert game.model.food not in game.model.snake
    assert game.state is GameState.RUNNING
    assert game.timer.running
    assert old.score == 1


def test_score_never_decreases_within_session(game) -> None:
    scores = [game.model.score]
    for _ in range(60):
        head = game.model.head
        if game.model.food is not None:
            fx, fy = game.model.food
            if fx != head[0]:
                game.on_key(pygame.K_RIGHT if fx > head[0] else pygame.K_LEFT)
            else:
                game.on_key(pygame.K_DOWN if fy > head[1] else pygame.K_UP)
        game.tick()
        if game.state is GameState.GAME_OVER:
            break
        scores.append(game.model.score)
    assert scores == sorted(scores)


def test_handle_event_dispatch(game) -> None:
    _place(game, [(10, 10)])
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_DOWN))
    assert game.model.pending == DOWN
    game.handle_event(_tick_event(game))
    assert game.model.snake == [(10, 11)]

    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p))
    assert game.state is GameState.PAUSED
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
    assert game.model.snake == [(10, 10)]
    assert game.state is GameState.RUNNING


def test_restart_key_while_running_keeps_the_game(game) -> None:
    _place(game, [(10, 10)], food=(11, 10))
    game.tick()
    old = game.model
    starts = game.timer.starts

    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
    assert game.model is old
    assert game.model.score == 1
    assert game.model.snake == [(11, 10), (10, 10)]
    assert game.timer.running
    assert game.timer.starts == starts


def test_tick_from_previous_session_is_ignored_after_restart(game) -> None:
    _place(game, [(19, 5)])
    game.tick()
    assert game.state is GameState.GAME_OVER
    stale = _tick_event(game)

    # restart key and an already-dequeued tick arrive in one batch
    for event in [pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r), stale]:
        game.handle_event(event)
    assert game.model.snake == [(10, 10)]

    game.handle_event(_tick_event(game))
    assert game.model.snake == [(11, 10)]


def test_tick_queued_before_pause_is_not_replayed_on_resume(game) -> None:
    _place(game, [(10, 10)])
    stale = _tick_event(game)
    game.pause()
    game.resume()
    game.handle_event(stale)
    assert game.model.snake == [(10, 10)]
    assert game.timer.generation == game.generation


def test_tick_event_without_generation_is_ignored(game) -> None:
    _place(game, [(10, 10)])
    game.handle_event(pygame.event.Event(TICK_EVENT))
    assert game.model.snake == [(10, 10)]


def test_panel_buttons_trigger_commands(game) -> None:
    pause_at = game.buttons["pause"].center
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pause_at))
    assert game.state is GameState.PAUSED

    _place(game, [(3, 3)])
    restart_at = game.buttons["restart"].center
    game.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=restart_at))
    assert game.state is GameState.RUNNING
    assert game.model.snake == [(10, 10)]


def test_tick_timer_is_idempotent(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(pygame.time, "set_timer", lambda event, ms: calls.append((event, ms)))
    monkeypatch.setattr(pygame.event, "clear", lambda event: calls.append(("clear", event)))
    timer = TickTimer(interval_ms=120)
    timer.stop()
    timer.start(3)
    timer.start(4)
    timer.stop()
    timer.stop()
    assert len(calls) == 3
    posted, interval = calls[0]
    assert posted.type == TICK_EVENT
    assert posted.generation == 3
    assert interval == 120
    assert calls[1:] == [(TICK_EVENT, 0), ("clear", TICK_EVENT)]
