"""Piece randomizers"""
import random
from typing import Optional, Protocol, Sequence

from tetris_piece import PieceKind


class RandomSource(Protocol):
    def next_kind(self) -> PieceKind: ...


class UniformRandom:
    """Picks each of the 7 kinds with equal probability."""
    def __init__(self, seed: Optional[int] = None, kinds: Sequence[PieceKind] = tuple(PieceKind)):
        if not kinds:
            raise ValueError("kinds must not be empty")
        self.kinds = list(kinds)
        self._rng = random.Random(seed)

    def next_kind(self) -> PieceKind:
        return self._rng.choice(self.kinds)
