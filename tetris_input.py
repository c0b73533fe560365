"""Keyboard/touch -> engine commands"""
from enum import Enum
from typing import Callable, Optional

import pygame
from tetris_config import CONFIG
from tetris_engine import BoardEngine, GameState


class Command(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"


KEYMAP = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESTART,
    pygame.K_RETURN: Command.RESTART,
}

# commands that only make sense while a piece is falling
PIECE_COMMANDS = {Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.SOFT_DROP, Command.ROTATE, Command.HARD_DROP}


def command_for_key(key: int) -> Optional[Command]:
    return KEYMAP.get(key)


def dispatch(engine: BoardEngine, cmd: Command) -> bool:
    """Applies a command; piece commands are ignored unless the session is running."""
    if cmd in PIECE_COMMANDS and engine.state is not GameState.RUNNING:
        return False
    if cmd is Command.MOVE_LEFT: return engine.attempt_move(-1, 0)
    if cmd is Command.MOVE_RIGHT: return engine.attempt_move(1, 0)
    if cmd is Command.SOFT_DROP: return engine.attempt_move(0, 1)
    if cmd is Command.ROTATE: return engine.rotate()
    if cmd is Command.HARD_DROP:
        engine.hard_drop(); return True
    if cmd is Command.TOGGLE_PAUSE:
        if engine.state not in (GameState.RUNNING, GameState.PAUSED): return False
        engine.toggle_pause(); return True
    if cmd is Command.RESTART:
        # mid-game restarts need a pause first so a stray R doesn't wipe the board
        if engine.state is GameState.RUNNING: return False
        engine.restart(); return True
    return False


class SwipeTracker:
    """Turns finger drags into moves: horizontal = shift, up = rotate, down = soft drop.

    The anchor follows the finger on every move event, so a long drag
    produces a run of commands. Two taps inside the double-tap window give
    a hard drop.
    """
    def __init__(self, threshold: Optional[float] = None, double_tap_ms: Optional[int] = None,
                 clock: Optional[Callable[[], int]] = None):
        self.threshold = CONFIG["SWIPE_THRESHOLD_PX"] if threshold is None else threshold
        self.double_tap_ms = CONFIG["DOUBLE_TAP_MS"] if double_tap_ms is None else double_tap_ms
        self.clock = clock or pygame.time.get_ticks
        self.anchor = None
        self.last_tap = None

    def start(self, x: float, y: float) -> Optional[Command]:
        self.anchor = (x, y)
        now = self.clock()
        if self.last_tap is not None and now - self.last_tap <= self.double_tap_ms:
            self.last_tap = None
            return Command.HARD_DROP
        self.last_tap = now
        return None

    def move(self, x: float, y: float) -> Optional[Command]:
        if self.anchor is None: return None
        ax, ay = self.anchor
        dx, dy = ax - x, ay - y
        cmd = None
        if abs(dx) > abs(dy):
            if dx > self.threshold: cmd = Command.MOVE_LEFT
            elif dx < -self.threshold: cmd = Command.MOVE_RIGHT
        else:
            if dy > self.threshold: cmd = Command.ROTATE
            elif dy < -self.threshold: cmd = Command.SOFT_DROP
        self.anchor = (x, y)
        if cmd is not None:
            self.last_tap = None
        return cmd

    def end(self):
        self.anchor = None
