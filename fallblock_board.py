"""Board: flat field, collision, lock delay, line clear, landing point"""
import logging
from typing import List, Optional

from fallblock_config import CONFIG
from fallblock_piece import CELLS, BlockQuery, Location, Piece

logger = logging.getLogger(__name__)

FIX_BLOCK_FRAME_DELAY = 10


class Board:
    """Owns the locked cells and the lock-delay state of the active piece.

    ``field`` is row-major, cell (x, y) at ``y * width + x``. It carries one
    slot past ``width * height``; that slot stays zero and makes the scan of
    row ``height`` in :meth:`check_line` read as incomplete.
    """

    def __init__(self, width: int = 10, height: int = 20):
        if width < 1 or height < 1:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.field: List[int] = []

        self.block: Optional[Piece] = None
        self.next_block: Optional[Piece] = None
        self.stocked_block: Optional[Piece] = None

        self.in_grace_period = False
        self.grace_period_start_frame = 0
        self.fix_block_frame_delay = CONFIG.get("FIX_BLOCK_FRAME_DELAY", FIX_BLOCK_FRAME_DELAY)

        self.cleared_line_count = 0

        self.reset_field(width, height)

    def reset_field(self, width: int, height: int):
        self.field = [0] * (width * height + 1)

    # ---------- registration ----------
    def set_block(self, block: Piece):
        self.block = block

    def set_next_block(self, block: Piece):
        self.next_block = block

    def set_stocked_block(self, block: Optional[Piece]):
        self.stocked_block = block

    # ---------- queries ----------
    def cell(self, x: int, y: int) -> int:
        return self.field[y * self.width + x]

    def is_row_complete(self, y: int) -> bool:
        start = y * self.width
        row = self.field[start:start + self.width]
        return len(row) == self.width and all(row)

    def check_block(self, block: BlockQuery) -> bool:
        """Return True if every filled cell of ``block`` is inside and free.

        Cells above the field (negative index) always pass.
        """
        for i in range(CELLS):
            if block.shape[i] == 0:
                continue
            loc = block.rotated_location(i)
            if loc.x < 0 or loc.x >= self.width or loc.y >= self.height:
                return False
            j = loc.y * self.width + loc.x
            if j < 0:
                continue
            if self.field[j] != 0:
                return False
        return True

    # ---------- locking ----------
    def try_commit(self, block: Piece, frame: int) -> bool:
        """Run the lock-delay state machine for ``block`` at ``frame``.

        Returns True only on the call that fixes the block into the field.
        """
        self.block = block
        if self.check_block(block.query().moved(dy=1)):
            return False
        if not self.in_grace_period:
            self.in_grace_period = True
            self.grace_period_start_frame = frame
            return False
        if frame < self.grace_period_start_frame + self.fix_block_frame_delay:
            return False
        self.in_grace_period = False

        self.fix_block()
        cleared = self.check_line()
        logger.debug("block fixed at %s rot=%d frame=%d, %d line(s) cleared",
                     block.location, block.rotation, frame, cleared)
        return True

    def fix_block(self):
        block = self.block
        for i in range(CELLS):
            if block.shape[i] % 8 == 0:
                continue
            loc = block.get_rotated_location(i)
            j = loc.y * self.width + loc.x
            if j < 0:
                # above the field, nothing to keep
                continue
            self.field[j] = block.shape[i]

    def check_line(self) -> int:
        """Clear completed rows bottom-up; returns how many were cleared."""
        w = self.width
        cleared = 0
        y = self.height
        while y > 0:
            if not self.is_row_complete(y):
                y -= 1
                continue
            # shift rows 0..y-1 down by one, then blank the top row
            for r in range(y, 0, -1):
                self.field[r * w:(r + 1) * w] = self.field[(r - 1) * w:r * w]
            self.field[0:w] = [0] * w
            self.cleared_line_count += 1
            cleared += 1
            # same y again: the row above has moved into it
        if cleared:
            logger.info("cleared %d line(s), total %d", cleared, self.cleared_line_count)
        return cleared

    # ---------- drop ----------
    def calc_landing_point(self) -> int:
        block = self.block
        for y in range(self.height + 1):
            if not self.check_block(block.query(location=Location(block.location.x, y))):
                return y - 1
        return self.height

    def fall_block(self, frame: int) -> bool:
        y = self.calc_landing_point()
        self.block.location = Location(self.block.location.x, y)
        return self.try_commit(self.block, frame)

    # ---------- per frame ----------
    def current_speed(self) -> float:
        return self.cleared_line_count / 20 + 0.5

    def update(self, renderer=None):
        if renderer is not None:
            renderer.draw(self)
        if self.block is not None:
            self.block.speed = self.current_speed()
