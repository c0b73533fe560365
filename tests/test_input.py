import pygame

from tests.helpers import make_engine
from tetris_engine import GameState
from tetris_input import Command, SwipeTracker, command_for_key, dispatch
from tetris_piece import PieceKind


class _FakeClock:
    def __init__(self) -> None:
        self.value = 0

    def advance(self, amount: int) -> None:
        self.value += amount

    def __call__(self) -> int:
        return self.value


def test_key_map():
    assert command_for_key(pygame.K_LEFT) is Command.MOVE_LEFT
    assert command_for_key(pygame.K_RIGHT) is Command.MOVE_RIGHT
    assert command_for_key(pygame.K_DOWN) is Command.SOFT_DROP
    assert command_for_key(pygame.K_UP) is Command.ROTATE
    assert command_for_key(pygame.K_SPACE) is Command.HARD_DROP
    assert command_for_key(pygame.K_p) is Command.TOGGLE_PAUSE
    assert command_for_key(pygame.K_r) is Command.RESTART
    assert command_for_key(pygame.K_a) is None


def test_restart_from_ready_starts_session():
    engine = make_engine(PieceKind.O)
    assert not dispatch(engine, Command.MOVE_LEFT)
    assert dispatch(engine, Command.RESTART)
    assert engine.state is GameState.RUNNING


def test_piece_commands_move_the_piece():
    engine = make_engine(PieceKind.T)
    engine.start()
    assert dispatch(engine, Command.MOVE_LEFT)
    assert dispatch(engine, Command.MOVE_RIGHT)
    assert dispatch(engine, Command.MOVE_RIGHT)
    assert dispatch(engine, Command.SOFT_DROP)
    assert (engine.piece.x, engine.piece.y) == (5, 1)
    assert dispatch(engine, Command.ROTATE)
    assert dispatch(engine, Command.HARD_DROP)
    assert engine.piece.y == 0


def test_paused_session_ignores_piece_commands():
    engine = make_engine(PieceKind.O)
    engine.start()
    assert dispatch(engine, Command.TOGGLE_PAUSE)
    for cmd in (Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.SOFT_DROP, Command.ROTATE, Command.HARD_DROP):
        assert not dispatch(engine, cmd)
    assert (engine.piece.x, engine.piece.y) == (4, 0)
    assert dispatch(engine, Command.TOGGLE_PAUSE)
    assert engine.state is GameState.RUNNING


def test_restart_needs_pause_while_running():
    engine = make_engine(PieceKind.O)
    engine.start()
    dispatch(engine, Command.SOFT_DROP)
    assert not dispatch(engine, Command.RESTART)
    assert engine.piece.y == 1
    dispatch(engine, Command.TOGGLE_PAUSE)
    assert dispatch(engine, Command.RESTART)
    assert engine.state is GameState.RUNNING
    assert engine.piece.y == 0


def test_swipe_directions():
    swipe = SwipeTracker(threshold=10, clock=_FakeClock())
    assert swipe.move(0, 0) is None
    swipe.start(100, 100)
    assert swipe.move(85, 100) is Command.MOVE_LEFT
    assert swipe.move(100, 100) is Command.MOVE_RIGHT
    assert swipe.move(100, 85) is Command.ROTATE
    assert swipe.move(100, 100) is Command.SOFT_DROP
    # under the threshold: nothing, but the anchor still follows
    assert swipe.move(105, 100) is None
    assert swipe.move(110, 100) is None
    swipe.end()
    assert swipe.move(0, 0) is None


def test_double_tap_hard_drops():
    clock = _FakeClock()
    swipe = SwipeTracker(double_tap_ms=300, clock=clock)
    assert swipe.start(50, 50) is None
    swipe.end()
    clock.advance(200)
    assert swipe.start(50, 50) is Command.HARD_DROP
    swipe.end()
    clock.advance(50)
    # the pair was consumed; a third tap starts over
    assert swipe.start(50, 50) is None


def test_slow_taps_and_swipes_do_not_hard_drop():
    clock = _FakeClock()
    swipe = SwipeTracker(threshold=10, double_tap_ms=300, clock=clock)
    swipe.start(50, 50)
    swipe.end()
    clock.advance(400)
    assert swipe.start(50, 50) is None
    assert swipe.move(80, 50) is Command.MOVE_RIGHT
    swipe.end()
    clock.advance(100)
    assert swipe.start(80, 50) is None
