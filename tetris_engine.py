"""
Token Tetris board engine.

Owns the grid, the falling piece, the gravity clock and the session counters
(score, tokens, level). It never draws and never schedules anything: an
adapter calls ``tick(delta_ms)`` once per frame and forwards player commands
to ``attempt_move``, ``rotate``, ``hard_drop`` and ``toggle_pause``. State is
read back through properties; notable changes are also published on the
engine's ``EventBus``.

Rules:

  • Gravity interval is ``base - level * step`` ms (1000 - 50 * level)
  • A failed downward move locks the piece, clears lines and spawns the next
  • Line clears score [0, 40, 100, 300, 1200][n] * level
  • Clearing n >= 2 lines at once pays n - 1 tokens
  • Every 10 lines bumps the level; extra lines in that clear are dropped
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Optional

from tetris_board import Board, collide, ghost_y, merge, new_board, sweep, full_rows
from tetris_config import CONFIG
from tetris_events import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_LINES_CLEARED,
    EVENT_PAUSE_TOGGLED,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_SPAWNED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_STARTED,
    EVENT_TOKENS_AWARDED,
)
from tetris_piece import COLORS, COLS, ROWS, Piece, PieceKind
from tetris_rng import RandomSource, UniformRandom

log = logging.getLogger(__name__)

LINE_POINTS = (0, 40, 100, 300, 1200)
LINES_PER_LEVEL = 10

# default for drop_floor_ms: read CONFIG, so an explicit None still means unclamped
_FROM_CONFIG = object()


class GameState(Enum):
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def gravity_interval_ms(level: int, base: int = 1000, step: int = 50,
                        floor: Optional[int] = None) -> int:
    # Unclamped unless a floor is configured; high levels go to zero and below.
    interval = base - level * step
    if floor is not None:
        interval = max(interval, floor)
    return interval


def line_clear_points(lines: int, level: int) -> int:
    return LINE_POINTS[lines] * level


def tokens_for_lines(lines: int) -> int:
    return lines - 1 if lines >= 2 else 0


class BoardEngine:
    def __init__(self, rng: Optional[RandomSource] = None, bus: Optional[EventBus] = None,
                 cols: int = COLS, rows: int = ROWS,
                 drop_base_ms: Optional[int] = None, drop_step_ms: Optional[int] = None,
                 drop_floor_ms=_FROM_CONFIG):
        self.cols, self.rows = cols, rows
        self.rng = rng if rng is not None else UniformRandom(CONFIG["SEED"])
        self.bus = bus if bus is not None else EventBus()
        self.drop_base_ms = CONFIG["DROP_BASE_MS"] if drop_base_ms is None else drop_base_ms
        self.drop_step_ms = CONFIG["DROP_STEP_MS"] if drop_step_ms is None else drop_step_ms
        self.drop_floor_ms = CONFIG["DROP_FLOOR_MS"] if drop_floor_ms is _FROM_CONFIG else drop_floor_ms

        self._board: Board = new_board(cols, rows)
        self._piece: Optional[Piece] = None
        self._state = GameState.READY
        self._acc = 0.0
        self._score = 0
        self._tokens = 0
        self._level = 1
        self._lines = 0
        self._lines_since_level_up = 0

    # ---------- read accessors ----------
    @property
    def board(self) -> Board:
        return [row[:] for row in self._board]

    @property
    def piece(self) -> Optional[Piece]:
        if self._piece is None:
            return None
        return self._piece.moved(0, 0)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_paused(self) -> bool:
        return self._state is GameState.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self._state is GameState.GAME_OVER

    @property
    def score(self) -> int:
        return self._score

    @property
    def tokens(self) -> int:
        return self._tokens

    @property
    def level(self) -> int:
        return self._level

    @property
    def lines(self) -> int:
        return self._lines

    @property
    def lines_since_level_up(self) -> int:
        return self._lines_since_level_up

    @property
    def drop_interval_ms(self) -> int:
        return gravity_interval_ms(self._level, self.drop_base_ms, self.drop_step_ms, self.drop_floor_ms)

    @property
    def colors(self) -> Dict[PieceKind, str]:
        return dict(COLORS)

    def ghost_y(self) -> Optional[int]:
        if self._piece is None or self.is_game_over:
            return None
        return ghost_y(self._board, self._piece)

    def visible_cells(self) -> Board:
        """Board copy with the active piece drawn in (rows on the board only)."""
        out = self.board
        if self._piece is not None:
            for bx, by in self._piece.cells():
                if 0 <= by < self.rows and 0 <= bx < self.cols:
                    out[by][bx] = self._piece.kind
        return out

    # ---------- session ----------
    def start(self) -> None:
        self._board = new_board(self.cols, self.rows)
        self._piece = None
        self._acc = 0.0
        self._score = 0
        self._tokens = 0
        self._level = 1
        self._lines = 0
        self._lines_since_level_up = 0
        self._state = GameState.RUNNING
        log.info("session started")
        self.bus.emit(EVENT_SESSION_STARTED, level=self._level)
        self.spawn_piece()

    restart = start

    def toggle_pause(self) -> bool:
        """Flips RUNNING <-> PAUSED. Returns False only when there is nothing to toggle."""
        if self._state is GameState.RUNNING:
            self._state = GameState.PAUSED
        elif self._state is GameState.PAUSED:
            self._state = GameState.RUNNING
        else:
            return False
        log.info("paused" if self.is_paused else "resumed")
        self.bus.emit(EVENT_PAUSE_TOGGLED, paused=self.is_paused)
        return True

    # ---------- gravity ----------
    def tick(self, delta_ms: float) -> None:
        if self._state is not GameState.RUNNING:
            return
        self._acc += delta_ms
        if self._acc > self.drop_interval_ms:
            self.attempt_move(0, 1)
            self._acc = 0.0

    # ---------- piece control ----------
    def _active_state(self) -> bool:
        return self._state in (GameState.RUNNING, GameState.PAUSED)

    def _active(self) -> bool:
        return self._piece is not None and self._active_state()

    def attempt_move(self, dx: int, dy: int) -> bool:
        if not self._active():
            return False
        test = self._piece.moved(dx, dy)
        if collide(self._board, test):
            if dy > 0:
                self._lock()
            return False
        self._piece = test
        return True

    def rotate(self) -> bool:
        if not self._active():
            return False
        test = self._piece.rotated()
        if collide(self._board, test):
            return False
        self._piece = test
        return True

    def hard_drop(self) -> int:
        if not self._active():
            return 0
        rows = 0
        while self.attempt_move(0, 1):
            rows += 1
        return rows

    def spawn_piece(self) -> bool:
        if not self._active_state():
            return False
        self._piece = Piece.spawn(self.rng.next_kind(), self.cols)
        if collide(self._board, self._piece):
            self._state = GameState.GAME_OVER
            log.info("game over: score=%d tokens=%d level=%d lines=%d",
                     self._score, self._tokens, self._level, self._lines)
            self.bus.emit(EVENT_GAME_OVER, score=self._score, tokens=self._tokens,
                          level=self._level, lines=self._lines)
            return False
        log.debug("spawned %s at (%d, %d)", self._piece.kind.name, self._piece.x, self._piece.y)
        self.bus.emit(EVENT_PIECE_SPAWNED, kind=self._piece.kind, x=self._piece.x, y=self._piece.y)
        return True

    # ---------- locking ----------
    def _lock(self) -> None:
        self._merge_and_clear()
        self.spawn_piece()

    def _merge_and_clear(self) -> int:
        piece = self._piece
        if piece is None:
            return 0
        merge(self._board, piece)
        log.debug("locked %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self.bus.emit(EVENT_PIECE_LOCKED, kind=piece.kind, cells=piece.cells())

        rows = full_rows(self._board)
        n = sweep(self._board)
        if n == 0:
            return 0
        self.bus.emit(EVENT_LINES_CLEARED, count=n, rows=rows)
        self._lines += n

        delta = line_clear_points(n, self._level)
        self._score += delta
        self.bus.emit(EVENT_SCORE_CHANGED, score=self._score, delta=delta)

        bonus = tokens_for_lines(n)
        if bonus:
            self._tokens += bonus
            self.bus.emit(EVENT_TOKENS_AWARDED, tokens=self._tokens, delta=bonus)

        self._lines_since_level_up += n
        if self._lines_since_level_up >= LINES_PER_LEVEL:
            # remainder is not carried into the next level
            self._lines_since_level_up = 0
            self._level += 1
            log.info("level up: %d", self._level)
            self.bus.emit(EVENT_LEVEL_UP, level=self._level)
        return n
