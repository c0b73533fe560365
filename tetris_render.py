"""
Rendering helpers for Token Tetris.

- Pre-render one coin block Surface per kind (solid + ghost outline) and blit them.
- Pre-render the static background (grid + HUD strip) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it when the engine reports a lock.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional
from tetris_layout import Dims
from tetris_piece import COINS, Piece, PieceKind
from tetris_engine import BoardEngine

BG = (248, 250, 252)
GRID = (226, 232, 240)
BORDER = (15, 23, 42)
TEXT = (15, 23, 42)
COIN_TEXT = (202, 138, 4)
OVERLAY = (248, 250, 252, 205)


def coin_legend(per_line: int = 2) -> List[str]:
    """Coin names in kind order, a few per line, for the title screen."""
    names = [COINS[k] for k in PieceKind]
    return ["  ".join(names[i:i + per_line]) for i in range(0, len(names), per_line)]


@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    tokens: int = -1
    lines: int = -1
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    tokens_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font,
                 colors: Dict[PieceKind, str]):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self.colors = {k: pygame.Color(v) for k, v in colors.items()}
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)

    @property
    def board_rect(self) -> pygame.Rect:
        d = self.dims
        return pygame.Rect(d.board_x, d.board_y, d.board_w, d.board_h)

    # ---------- Static background (grid + HUD strip) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        cols, rows = d.board_w // d.cell, d.board_h // d.cell
        for x in range(cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, GRID, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, GRID, (d.board_x, Y), (d.board_x + d.board_w, Y))
        pygame.draw.rect(self.bg, (203, 213, 225), self.board_rect, 1)

    # ---------- Coin blocks (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[PieceKind, pygame.Surface] = {}
        self.ghost_surf: Dict[PieceKind, pygame.Surface] = {}
        c = self.dims.cell
        for kind, col in self.colors.items():
            s = pygame.Surface((c, c), pygame.SRCALPHA)
            s.fill(col)
            pygame.draw.rect(s, BORDER, (0, 0, c, c), 1)
            coin = pygame.Surface((c, c), pygame.SRCALPHA)
            pygame.draw.circle(coin, (255, 255, 255, 128), (c // 2, c // 2), c // 4)
            s.blit(coin, (0, 0))
            self.cell_surf[kind] = s
            g = pygame.Surface((c-6, c-6), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0, 0, c-6, c-6), 2)
            self.ghost_surf[kind] = g

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board: List[List[Optional[PieceKind]]]):
        """Rebuilds the "locked blocks" surface from board contents."""
        self.board_surface.fill((0, 0, 0, 0))
        c = self.dims.cell
        for y, row in enumerate(board):
            for x, kind in enumerate(row):
                if kind is not None:
                    self.board_surface.blit(self.cell_surf[kind], (x*c, y*c))

    # ---------- Moving piece + landing preview ----------
    def draw_piece(self, screen: pygame.Surface, piece: Piece, ghost_row: Optional[int]):
        d = self.dims
        if ghost_row is not None and ghost_row != piece.y:
            for bx, by in piece.cells():
                gy = by - piece.y + ghost_row
                if gy >= 0:
                    screen.blit(self.ghost_surf[piece.kind], (d.board_x + bx*d.cell + 3, d.board_y + gy*d.cell + 3))
        for bx, by in piece.cells():
            if by >= 0:
                screen.blit(self.cell_surf[piece.kind], (d.board_x + bx*d.cell, d.board_y + by*d.cell))

    # ---------- HUD ----------
    def draw_hud(self, screen: pygame.Surface, score: int, level: int, tokens: int, lines: int):
        d = self.dims
        f = self.font
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score}", True, TEXT)
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, TEXT)
        if tokens != self.hud.tokens:
            self.hud.tokens = tokens
            self.hud.tokens_s = f.render(f"Tokens: {tokens}", True, COIN_TEXT)
        if lines != self.hud.lines:
            self.hud.lines = lines
            self.hud.lines_s = f.render(f"Lines: {lines}", True, TEXT)
        screen.blit(self.hud.score_s, (d.hud_x, d.hud_y))
        screen.blit(self.hud.level_s, (d.hud_x, d.hud_y + 24))
        right = d.hud_x + d.board_w
        screen.blit(self.hud.tokens_s, self.hud.tokens_s.get_rect(topright=(right, d.hud_y)))
        screen.blit(self.hud.lines_s, self.hud.lines_s.get_rect(topright=(right, d.hud_y + 24)))

    # ---------- Title / pause / game over ----------
    def draw_overlay(self, screen: pygame.Surface, title: str, lines: List[str]):
        veil = pygame.Surface(self.board_rect.size, pygame.SRCALPHA)
        veil.fill(OVERLAY)
        screen.blit(veil, self.board_rect.topleft)
        cx, cy = self.board_rect.center
        t = self.big_font.render(title, True, TEXT)
        screen.blit(t, t.get_rect(center=(cx, cy - 20 - 12 * len(lines))))
        y = cy + 10 - 12 * len(lines)
        for line in lines:
            s = self.font.render(line, True, TEXT)
            screen.blit(s, s.get_rect(center=(cx, y))); y += 24

    def draw(self, screen: pygame.Surface, engine: BoardEngine):
        screen.blit(self.bg, (0, 0))
        screen.blit(self.board_surface, self.board_rect.topleft)
        piece = engine.piece
        if piece is not None:
            self.draw_piece(screen, piece, engine.ghost_y())
        self.draw_hud(screen, engine.score, engine.level, engine.tokens, engine.lines)
        if engine.is_game_over:
            self.draw_overlay(screen, "Game Over!", [
                f"Final Score: {engine.score}",
                f"Tokens Collected: {engine.tokens}",
                "Enter / R to play again",
            ])
        elif engine.is_paused:
            self.draw_overlay(screen, "Game Paused", ["P to resume", "R to restart"])
        elif engine.piece is None:
            self.draw_overlay(screen, "Token Tetris", [
                "Stack crypto blocks and",
                "clear lines to earn tokens!",
                *coin_legend(),
                "Enter to start",
            ])
