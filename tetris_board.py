"""Board helpers: new_board, collide, merge, sweep, ghost"""
from typing import List, Optional
from tetris_piece import Piece, PieceKind, COLS, ROWS

Board = List[List[Optional[PieceKind]]]


def new_board(cols: int = COLS, rows: int = ROWS) -> Board:
    if cols <= 0 or rows <= 0:
        raise ValueError(f"board must be at least 1x1, got {cols}x{rows}")
    return [[None] * cols for _ in range(rows)]


def collide(board: Board, piece: Piece) -> bool:
    rows, cols = len(board), len(board[0])
    for bx, by in piece.cells():
        if bx < 0 or bx >= cols or by >= rows: return True
        if by >= 0 and board[by][bx] is not None: return True
    return False


def merge(board: Board, piece: Piece) -> None:
    """Writes the piece into the board; cells above row 0 are dropped."""
    for bx, by in piece.cells():
        if by >= 0: board[by][bx] = piece.kind


def full_rows(board: Board) -> List[int]:
    return [y for y, row in enumerate(board) if all(v is not None for v in row)]


def sweep(board: Board) -> int:
    """Removes full rows bottom-up, refilling from the top. Returns the count."""
    cols = len(board[0])
    c = 0; y = len(board) - 1
    while y >= 0:
        if all(v is not None for v in board[y]):
            del board[y]; board.insert(0, [None] * cols); c += 1
        else: y -= 1
    return c


def ghost_y(board: Board, piece: Piece) -> int:
    t = piece
    while not collide(board, t.moved(0, 1)):
        t = t.moved(0, 1)
    return t.y
