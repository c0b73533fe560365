"""Piece model, coin-themed shapes, rotation"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

COLS, ROWS = 10, 20

Shape = List[List[int]]


class PieceKind(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7

    @property
    def shape(self) -> Shape:
        return [r[:] for r in SHAPES[self]]

    @property
    def color(self) -> str:
        return COLORS[self]

    @property
    def coin(self) -> str:
        return COINS[self]


SHAPES: Dict[PieceKind, Shape] = {
    PieceKind.I: [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]],
    PieceKind.J: [[1,0,0],[1,1,1],[0,0,0]],
    PieceKind.L: [[0,0,1],[1,1,1],[0,0,0]],
    PieceKind.O: [[1,1],[1,1]],
    PieceKind.S: [[0,1,1],[1,1,0],[0,0,0]],
    PieceKind.T: [[0,1,0],[1,1,1],[0,0,0]],
    PieceKind.Z: [[1,1,0],[0,1,1],[0,0,0]],
}

# Hex colors, one per coin
COLORS: Dict[PieceKind, str] = {
    PieceKind.I: "#f7931a",
    PieceKind.J: "#627eea",
    PieceKind.L: "#9945ff",
    PieceKind.O: "#2775ca",
    PieceKind.S: "#8247e5",
    PieceKind.T: "#0033ad",
    PieceKind.Z: "#c2a633",
}

COINS: Dict[PieceKind, str] = {
    PieceKind.I: "Bitcoin",
    PieceKind.J: "Ethereum",
    PieceKind.L: "Solana",
    PieceKind.O: "USDC",
    PieceKind.S: "Polygon",
    PieceKind.T: "Cardano",
    PieceKind.Z: "Dogecoin",
}


def rotate_cw(m: Shape) -> Shape:
    """rotated[x][n-1-y] = m[y][x]"""
    return [list(r) for r in zip(*m[::-1])]


@dataclass
class Piece:
    kind: PieceKind
    shape: Shape
    x: int
    y: int

    @staticmethod
    def spawn(kind: PieceKind, cols: int = COLS) -> "Piece":
        s = kind.shape
        return Piece(kind, s, cols // 2 - len(s[0]) // 2, 0)

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, [r[:] for r in self.shape], self.x + dx, self.y + dy)

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape), self.x, self.y)

    def cells(self) -> List[Tuple[int, int]]:
        """Board (x, y) of every occupied cell, including rows above the board."""
        return [(self.x + x, self.y + y)
                for y, row in enumerate(self.shape)
                for x, v in enumerate(row) if v]
