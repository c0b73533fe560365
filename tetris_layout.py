# tetris_layout.py
from dataclasses import dataclass
from typing import Optional
from tetris_config import CONFIG
from tetris_piece import COLS, ROWS


@dataclass
class Dims:
    cell: int
    margin: int
    hud_h: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    board_x: int
    board_y: int
    hud_x: int
    hud_y: int


def compute_dims(cols: int = COLS, rows: int = ROWS, cell: Optional[int] = None) -> Dims:
    """HUD strip on top, board below it."""
    cell = int(CONFIG["CELL_SIZE"] if cell is None else cell)
    margin = 16
    hud_h = 48

    board_w = cols * cell
    board_h = rows * cell

    total_w = margin + board_w + margin
    total_h = margin + hud_h + margin + board_h + margin

    hud_x = margin
    hud_y = margin
    board_x = margin
    board_y = hud_y + hud_h + margin

    return Dims(
        cell=cell, margin=margin, hud_h=hud_h,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        board_x=board_x, board_y=board_y,
        hud_x=hud_x, hud_y=hud_y
    )
