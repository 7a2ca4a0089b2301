# main.py
from __future__ import annotations

import argparse
import sys

import pygame  # type: ignore

from .config import PANEL_HEIGHT, TITLE, ConfigError, load_config
from .controller import GameController, TickTimer
from .logging_setup import setup_logging
from .model import GameState
from .render import FoodImage, Renderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Grid snake game.")
    parser.add_argument("--grid-size", type=int, default=None, help="cells per side (default 20)")
    parser.add_argument("--cell-size", type=int, default=None, help="pixels per cell (default 20)")
    parser.add_argument("--tick-ms", type=int, default=None, help="milliseconds per move (default 120)")
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument("--food-image", default=None,
                        help="image drawn for the food cell (default intuition-logo.png, \"\" for none)")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(
            grid_size=args.grid_size,
            cell_size=args.cell_size,
            tick_ms=args.tick_ms,
            seed=args.seed,
            food_image=args.food_image,
            log_level=args.log_level,
        )
    except ConfigError as exc:
        print(f"snake: {exc}", file=sys.stderr)
        return 2
    setup_logging(cfg.log_level)

    pygame.init()
    board_px = cfg.board_px
    window = pygame.display.set_mode((board_px, board_px + PANEL_HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    food_image = FoodImage(cfg.food_image)
    renderer = Renderer(
        window.subsurface((0, 0, board_px, board_px)),
        cfg.cell_size,
        food_image=food_image,
        panel=window.subsurface((0, board_px, board_px, PANEL_HEIGHT)),
    )

    def report_game_over(score: int) -> None:
        pygame.display.set_caption(f"{TITLE} - Game Over! Final Score: {score}")

    controller = GameController(
        cfg, renderer, TickTimer(interval_ms=cfg.tick_ms), on_game_over=report_game_over,
    )
    controller.start()
    image_shown = False
    running = True

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                running = False
                break
            controller.handle_event(event)

        if controller.state is not GameState.GAME_OVER and pygame.display.get_caption()[0] != TITLE:
            pygame.display.set_caption(TITLE)

        # swap the fallback square for the sprite once it arrives
        if not image_shown and food_image.surface is not None:
            controller.redraw()
            image_shown = True

        pygame.display.flip()
        clock.tick(60)

    controller.timer.stop()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
