"""Seeded piece randomizer: uniform kind and spawn rotation"""
import pygame
from typing import Optional, Tuple

from fallblock_piece import KINDS


class PieceRandom:
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = pygame.time.get_ticks() & 0xFFFFFFFF
        self.seed = seed & 0xFFFFFFFF
        self.state = self.seed

    def _lcg_next(self):
        self.state = (self.state * 0x41C64E6D + 0x3039) & 0xFFFFFFFF
        return self.state

    def _rand(self):
        return (self._lcg_next() >> 16) & 0x7FFF

    def next_kind(self) -> str:
        return KINDS[self._rand() % len(KINDS)]

    def next_rotation(self) -> int:
        return self._rand() % 4

    def next_piece(self) -> Tuple[str, int]:
        kind = self.next_kind()
        return kind, self.next_rotation()
