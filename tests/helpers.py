from __future__ import annotations

from typing import Iterable, List

from tetris_board import Board
from tetris_engine import BoardEngine
from tetris_events import EventBus
from tetris_piece import PieceKind


class ScriptedRandom:
    """Hands out kinds in order, repeating the last one once exhausted."""

    def __init__(self, kinds: Iterable[PieceKind]) -> None:
        self.kinds: List[PieceKind] = list(kinds)
        self.drawn = 0

    def next_kind(self) -> PieceKind:
        kind = self.kinds[min(self.drawn, len(self.kinds) - 1)]
        self.drawn += 1
        return kind


def make_engine(*kinds: PieceKind, **kwargs) -> BoardEngine:
    rng = ScriptedRandom(kinds or [PieceKind.O])
    return BoardEngine(rng=rng, bus=kwargs.pop("bus", EventBus()), **kwargs)


def fill_row(board: Board, y: int, gap: Iterable[int] = (), kind: PieceKind = PieceKind.J) -> None:
    skip = set(gap)
    for x in range(len(board[y])):
        board[y][x] = None if x in skip else kind


def load_board(engine: BoardEngine, board: Board) -> None:
    """Swaps in a prepared grid; tests only."""
    engine._board = [row[:] for row in board]


def occupied(board: Board) -> int:
    return sum(1 for row in board for v in row if v is not None)
