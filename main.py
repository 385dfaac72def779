#!/usr/bin/env python3
"""
Spin and Win
An elimination wheel: names are dealt into wedges, every spin knocks some
of them out, and the last one standing wins.

Usage:
    python main.py Alice Bob Carol Dave           # Names on the command line
    python main.py -w Carol Alice Bob Carol Dave  # Carol can never be knocked out
    python main.py --mode quick --seed 7 ...      # Short spins, repeatable game

Keys: SPACE/ENTER spin, S shuffle, R reset, ESC quit.
"""

import argparse
import logging
import random

import pygame

from spinwheel.config import set_mode
from spinwheel.constants import WINDOW_WIDTH, WINDOW_HEIGHT, WHEEL_RADIUS, FPS, UI_BG
from spinwheel.engine import WheelEngine
from spinwheel.errors import SpinWheelError
from spinwheel.wheel_view import WheelView, create_fonts

logger = logging.getLogger('spinwheel')


def game_clock():
    """Seconds since pygame.init(), the engine's clock in the window."""
    return pygame.time.get_ticks() / 1000.0


def build_engine(args, clock=None):
    config = set_mode(args.mode, auto_winner_name=args.auto_winner)
    rng = random.Random(args.seed) if args.seed is not None else None
    engine = WheelEngine(config, rng=rng, clock=clock)
    if args.names:
        engine.add_entries('\n'.join(args.names))
    if args.winner:
        engine.designate_winner(args.winner)
    return engine


def run(engine):
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
    caption = "Spin and Win"
    if engine.config.mode_label:
        caption = f"{caption} - {engine.config.mode_label}"
    pygame.display.set_caption(caption)

    clock = pygame.time.Clock()
    view = WheelView(engine, create_fonts(), (WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2 + 40), WHEEL_RADIUS)
    shown = None

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                try:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                        engine.spin()
                    elif event.key == pygame.K_s:
                        engine.shuffle()
                    elif event.key == pygame.K_r:
                        engine.reset()
                except SpinWheelError as e:
                    logger.warning(f"[UI] {e}")

        engine.update()
        # Auto re-spins start inside update(), so follow the engine's latest spin
        if engine.last_result is not None and engine.last_result is not shown:
            shown = engine.last_result
            view.start_spin(shown, game_clock())
        view.update(game_clock())

        screen.fill(UI_BG)
        view.draw(screen)
        view.draw_banner(screen, 40)
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()


def main():
    parser = argparse.ArgumentParser(description='Spin and Win elimination wheel')
    parser.add_argument('names', nargs='*', help='Names to put on the wheel')
    parser.add_argument('-w', '--winner', help='Name that survives every spin')
    parser.add_argument('--auto-winner', help='Designate this name whenever it is added')
    parser.add_argument('-m', '--mode', default='default', choices=['default', 'quick'],
                        help='Spin timing mode')
    parser.add_argument('--seed', type=int, help='Seed for a repeatable game')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log engine decisions')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    engine = build_engine(args, clock=game_clock)
    if engine.config.mode_label:
        print(f"Running in {engine.config.mode_label}")
    run(engine)


if __name__ == "__main__":
    main()
