import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402

from snake.config import RIGHT  # noqa: E402
from snake.model import GridModel  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _pygame():
    pygame.init()
    pygame.font.init()
    yield
    pygame.quit()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_model():
    def _make(snake, direction=RIGHT, food=(0, 0), grid_size=20, score=0) -> GridModel:
        return GridModel(
            grid_size=grid_size,
            snake=list(snake),
            direction=direction,
            pending=direction,
            food=food,
            score=score,
        )

    return _make
