"""
Token Tetris — pygame front end
===============================

Stack crypto blocks and clear lines to earn tokens. The rules live in
``tetris_engine.BoardEngine``; this module only owns the window, the clock
and the event pump:

  • every frame the clock delta is fed to ``engine.tick``
  • key presses and finger drags become ``Command`` values (tetris_input)
  • engine events mark the cached board surface dirty

-------------------------------------------------------------
CONTROLS (default)
-------------------------------------------------------------

  • Left / Right : Move
  • Down         : Soft drop
  • Up           : Rotate
  • Space        : Hard drop
  • P            : Pause / Resume
  • R / Enter    : Start, or restart when paused / game over

Touch: swipe left/right/down to move, swipe up to rotate, double tap to
hard drop.
"""
import logging
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import BoardEngine
from tetris_events import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_PIECE_LOCKED,
    EVENT_SESSION_STARTED,
    EVENT_TOKENS_AWARDED,
)
from tetris_input import SwipeTracker, command_for_key, dispatch
from tetris_layout import compute_dims
from tetris_render import RenderAssets
from tetris_rng import UniformRandom

log = logging.getLogger("token_tetris")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except (TypeError, pygame.error):
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def build_engine() -> BoardEngine:
    return BoardEngine(rng=UniformRandom(CONFIG["SEED"]), bus=EventBus())


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.FINGERDOWN, pygame.FINGERMOTION, pygame.FINGERUP])
    pygame.key.set_repeat(CONFIG["KEY_REPEAT_DELAY_MS"], CONFIG["KEY_REPEAT_INTERVAL_MS"])

    engine = build_engine()
    dims = compute_dims(engine.cols, engine.rows)
    screen = recreate_window(dims)
    pygame.display.set_caption("Token Tetris")
    font = pygame.font.SysFont(None, 24)
    big_font = pygame.font.SysFont(None, 40)
    render = RenderAssets(dims, font, big_font, engine.colors)
    clock = pygame.time.Clock()
    swipe = SwipeTracker()

    board_dirty = True

    def mark_dirty(sender, **payload):
        nonlocal board_dirty
        board_dirty = True

    engine.bus.subscribe(EVENT_SESSION_STARTED, mark_dirty)
    engine.bus.subscribe(EVENT_PIECE_LOCKED, mark_dirty)
    engine.bus.subscribe(EVENT_TOKENS_AWARDED, lambda sender, tokens, delta: log.info("+%d tokens (%d total)", delta, tokens))
    engine.bus.subscribe(EVENT_LEVEL_UP, lambda sender, level: log.info("now at level %d, drop every %d ms", level, engine.drop_interval_ms))
    engine.bus.subscribe(EVENT_GAME_OVER, lambda sender, **p: log.info("final: %s", p))

    while True:
        dt = clock.tick(CONFIG["FPS"])

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            cmd = None
            if e.type == pygame.KEYDOWN:
                cmd = command_for_key(e.key)
            elif e.type == pygame.FINGERDOWN:
                cmd = swipe.start(e.x * dims.total_w, e.y * dims.total_h)
            elif e.type == pygame.FINGERMOTION:
                cmd = swipe.move(e.x * dims.total_w, e.y * dims.total_h)
            elif e.type == pygame.FINGERUP:
                swipe.end()
            if cmd is not None:
                dispatch(engine, cmd)

        engine.tick(dt)

        if board_dirty:
            render.rebuild_board_surface(engine.board)
            board_dirty = False
        render.draw(screen, engine)
        pygame.display.flip()


if __name__ == '__main__':
    main()
