"""
Rendering helpers for the falling-block game.

- Block size is recomputed from the window every frame so the field and both
  side panels always fit.
- Cell sprites (opaque + translucent ghost) are pre-rendered per colour index
  and rebuilt only when the block size changes.
"""
from __future__ import annotations
import pygame
from typing import Dict, List, Optional, Tuple

from fallblock_config import CONFIG
from fallblock_layout import BUTTON_LABELS, Layout, calculate_block_size, compute_layout
from fallblock_piece import CELLS, Piece

# index 0-7 normal blocks, 8-15 landing point (same colour, half alpha)
BLOCK_COLORS: List[Tuple[int, int, int, int]] = [
    (0x00, 0x00, 0x00, 0x00),
    (0xff, 0xff, 0x00, 0xff),
    (0xad, 0xd8, 0xe6, 0xff),
    (0x80, 0x00, 0x80, 0xff),
    (0xff, 0xa5, 0x00, 0xff),
    (0x00, 0x00, 0x8b, 0xff),
    (0x00, 0x80, 0x00, 0xff),
    (0xff, 0x00, 0x00, 0xff),
    (0x00, 0x00, 0x00, 0x00),
    (0xff, 0xff, 0x00, 0x7f),
    (0xad, 0xd8, 0xe6, 0x7f),
    (0x80, 0x00, 0x80, 0x7f),
    (0xff, 0xa5, 0x00, 0x7f),
    (0x00, 0x00, 0x8b, 0x7f),
    (0x00, 0x80, 0x00, 0x7f),
    (0xff, 0x00, 0x00, 0x7f),
]

SCREEN_BG = (0xff, 0xff, 0xff)
PANEL = (0x30, 0x30, 0x30)
PANEL_EDGE = (0x00, 0x00, 0x00)
TEXT = (0x30, 0x30, 0x30)
GRID = (0x00, 0xff, 0x00)
BUTTON = (0xdd, 0xdd, 0xdd)


class BoardRenderer:
    """Draws a Board onto ``screen``; read-only over board and piece state."""
    def __init__(self, screen: pygame.Surface, font_name: Optional[str] = None):
        self.screen = screen
        self.font_name = font_name
        self.layout: Optional[Layout] = None
        self._cell_px = 0
        self._cells: Dict[int, pygame.Surface] = {}
        self._font_px = 0
        self._font: Optional[pygame.font.Font] = None

    # ---------- sizing / caches ----------
    def calculate_block_size(self, board) -> float:
        w, h = self.screen.get_size()
        return calculate_block_size(w, h, board.width, board.height)

    def _refresh(self, board):
        w, h = self.screen.get_size()
        self.layout = compute_layout(w, h, board.width, board.height)
        px = max(1, int(round(self.layout.block_size)))
        if px != self._cell_px:
            self._cell_px = px
            self._cells = {}
            for idx, rgba in enumerate(BLOCK_COLORS):
                if rgba[3] == 0:
                    continue
                s = pygame.Surface((px, px), pygame.SRCALPHA)
                s.fill(rgba)
                self._cells[idx] = s
        font_px = max(8, int(self.layout.block_size / 2))
        if font_px != self._font_px:
            self._font_px = font_px
            self._font = pygame.font.Font(self.font_name, font_px)

    def _text(self, text, x, y, align="left", color=TEXT):
        surf = self._font.render(str(text), True, color)
        rect = surf.get_rect()
        if align == "left":
            rect.midleft = (round(x), round(y))
        elif align == "right":
            rect.midright = (round(x), round(y))
        else:
            rect.center = (round(x), round(y))
        self.screen.blit(surf, rect)

    # ---------- board views ----------
    def draw_background(self, sx, sy, bs):
        lay = self.layout
        self.screen.fill(SCREEN_BG)
        for rect in (lay.field_rect, lay.next_rect, lay.stock_rect):
            pygame.draw.rect(self.screen, PANEL, rect)
            pygame.draw.rect(self.screen, PANEL_EDGE, rect, 1)

    def draw_grid_line(self, board, sx, sy, bs):
        pixel_w = board.width * bs
        pixel_h = board.height * bs
        for i in range(board.width + 1):
            x = sx + i * bs
            pygame.draw.line(self.screen, GRID, (x, sy), (x, sy + pixel_h))
        for i in range(board.height + 1):
            y = sy + i * bs
            pygame.draw.line(self.screen, GRID, (sx, y), (sx + pixel_w, y))

    def draw_fixed_block(self, board, sx, sy, bs):
        for i in range(board.width * board.height):
            v = board.field[i]
            if v == 0:
                continue
            y, x = divmod(i, board.width)
            self.screen.blit(self._cells[v], (round(sx + x * bs), round(sy + y * bs)))

    def draw_debug_info(self, board, bs):
        if board.block is None:
            return
        loc = board.block.location
        self._text(f"X: {loc.x}, Y: {loc.y}", bs, bs * 14)
        self._text(f"ROTATION: {board.block.rotation}", bs, bs * 15)

    def draw_info(self, board, sx, sy, bs):
        self._text("DELETE LINE", bs, bs * 0.5)
        self._text("NEXT", sx + (board.width + 1) * bs, bs * 0.5)
        self._text("STOCK", sx + (board.width + 1) * bs, sy + 5.5 * bs)
        self._text(board.cleared_line_count, bs * 4, bs * 1.5, align="right")

    def draw_block(self, sx, sy, bs, block: Optional[Piece]):
        if block is None:
            return
        for i in range(CELLS):
            v = block.shape[i]
            if v % 8 == 0:
                continue
            loc = block.get_rotated_location(i)
            self.screen.blit(self._cells[v], (round(sx + loc.x * bs), round(sy + loc.y * bs)))

    def draw_next_block(self, board, bs):
        ox, oy = self.layout.next_origin
        self.draw_block(ox, oy, bs, board.next_block)

    def draw_stocked_block(self, board, bs):
        ox, oy = self.layout.stock_origin
        self.draw_block(ox, oy, bs, board.stocked_block)

    def draw_landing_point(self, board, sx, sy, bs):
        if board.block is None:
            return
        y = board.calc_landing_point()
        self.draw_block(sx, sy, bs, board.block.ghost(y))

    def draw_buttons(self):
        for name, _cmd, rect in self.layout.buttons:
            pygame.draw.rect(self.screen, BUTTON, rect)
            pygame.draw.rect(self.screen, PANEL_EDGE, rect, 1)
            self._text(BUTTON_LABELS[name], rect.centerx, rect.centery, align="center")

    def draw_game_over(self):
        lay = self.layout
        self._text("GAME OVER (R to Restart)", lay.field_rect.centerx, lay.field_rect.centery,
                   align="center", color=(0xff, 0xdc, 0xdc))

    # ---------- frame ----------
    def draw(self, board):
        """Draw every board view in a fixed order."""
        self._refresh(board)
        bs = self.layout.block_size
        sx, sy = self.layout.sx, self.layout.sy

        self.draw_background(sx, sy, bs)
        if CONFIG["SHOW_GRID"]:
            self.draw_grid_line(board, sx, sy, bs)
        self.draw_fixed_block(board, sx, sy, bs)

        if CONFIG["SHOW_DEBUG"]:
            self.draw_debug_info(board, bs)
        self.draw_info(board, sx, sy, bs)

        self.draw_block(sx, sy, bs, board.block)
        self.draw_next_block(board, bs)
        self.draw_stocked_block(board, bs)
        self.draw_landing_point(board, sx, sy, bs)
        self.draw_buttons()
