# fallblock_layout.py
from dataclasses import dataclass, field
from typing import List, Tuple
import pygame

from fallblock_input import BUTTONS

SIDE_COLUMNS = 11  # 5 left of the field, 6 right of it
EXTRA_ROWS = 2

BUTTON_LABELS = {
    "left_button": "LEFT",
    "right_button": "RIGHT",
    "down_button": "DOWN",
    "rotate_left_button": "ROT L",
    "rotate_right_button": "ROT R",
}


def calculate_block_size(window_w: float, window_h: float, cols: int, rows: int) -> float:
    return min(window_w / (cols + SIDE_COLUMNS), window_h / (rows + EXTRA_ROWS))


@dataclass
class Layout:
    block_size: float
    cols: int
    rows: int
    sx: float
    sy: float
    field_rect: pygame.Rect
    next_rect: pygame.Rect
    stock_rect: pygame.Rect
    next_origin: Tuple[float, float]
    stock_origin: Tuple[float, float]
    buttons: List[Tuple[str, str, pygame.Rect]] = field(default_factory=list)


def compute_layout(window_w: int, window_h: int, cols: int, rows: int) -> Layout:
    bs = calculate_block_size(window_w, window_h, cols, rows)
    sx = bs * 5
    sy = bs

    pixel_w = cols * bs
    pixel_h = rows * bs
    panel_x = sx + pixel_w + bs

    field_rect = pygame.Rect(round(sx), round(sy - bs), round(pixel_w), round(pixel_h + bs))
    next_rect = pygame.Rect(round(panel_x), round(sy), round(bs * 4), round(bs * 4))
    stock_rect = pygame.Rect(round(panel_x), round(sy + bs * 6), round(bs * 4), round(bs * 4))

    # pieces are drawn relative to their spawn location (3, -1)
    next_origin = (sx + (cols - 2) * bs, sy + 2 * bs)
    stock_origin = (sx + (cols - 2) * bs, sy + 8 * bs)

    buttons = []
    by = sy + 3 * bs
    for name, cmd in BUTTONS:
        rect = pygame.Rect(round(bs * 0.5), round(by), round(bs * 4), round(bs * 1.2))
        buttons.append((name, cmd, rect))
        by += bs * 1.5

    return Layout(
        block_size=bs, cols=cols, rows=rows, sx=sx, sy=sy,
        field_rect=field_rect, next_rect=next_rect, stock_rect=stock_rect,
        next_origin=next_origin, stock_origin=stock_origin, buttons=buttons,
    )
