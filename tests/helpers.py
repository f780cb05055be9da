from itertools import cycle
from typing import Iterable, List, Tuple

from fallblock_board import Board


class FixedRandom:
    """Stand-in for PieceRandom that replays a fixed (kind, rotation) list."""

    def __init__(self, pieces: Iterable[Tuple[str, int]]):
        self._pieces = cycle(list(pieces))
        self.seed = 0

    def next_piece(self):
        return next(self._pieces)


def board_with_rows(width: int, height: int, rows: List[str]) -> Board:
    """Board whose bottom rows are drawn from strings, '#' filled and '.' empty."""
    board = Board(width, height)
    top = height - len(rows)
    for dy, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch != ".":
                board.field[(top + dy) * width + x] = 1
    return board
