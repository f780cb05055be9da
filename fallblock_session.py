"""Game session: owns board and pieces, applies player commands each frame"""
import logging
from typing import Optional

from fallblock_board import Board
from fallblock_config import CONFIG
from fallblock_input import KeyPoller
from fallblock_piece import BLOCK_GENERATE_LOCATION, BlockQuery, Piece, generate_random_block
from fallblock_rng import PieceRandom

logger = logging.getLogger(__name__)

COMMANDS = frozenset({
    "move_left", "move_right", "move_up", "move_down", "fall_block",
    "rotate_left", "rotate_right", "reset", "stock", "toggle_debug",
})
# still honoured once the stack has topped out
GAME_OVER_COMMANDS = frozenset({"reset", "toggle_debug"})


class GameSession:
    """All per-game state, passed explicitly to input handling and drawing.

    Every command validates against the board before mutating the active
    piece; a rejected command changes nothing.
    """

    def __init__(self, width=None, height=None, rng: Optional[PieceRandom] = None,
                 poller: Optional[KeyPoller] = None):
        self.width = width or CONFIG["FIELD_WIDTH"]
        self.height = height or CONFIG["FIELD_HEIGHT"]
        self.rng = rng or PieceRandom(CONFIG["SEED"])
        self.poller = poller or KeyPoller()
        self.frame_count = 0
        self.reset()

    # ---------- lifecycle ----------
    def reset(self):
        self.board = Board(self.width, self.height)
        self.block: Piece = generate_random_block(self.rng)
        self.next_block: Piece = generate_random_block(self.rng)
        self.stocked_block: Optional[Piece] = None
        self.game_over = False
        self.board.set_block(self.block)
        self.board.set_next_block(self.next_block)
        logger.info("new game on a %dx%d field", self.width, self.height)

    def _promote_next(self):
        self.block = self.next_block
        self.next_block = generate_random_block(self.rng)
        self.board.set_block(self.block)
        self.board.set_next_block(self.next_block)
        if not self.board.check_block(self.block.query()):
            self.game_over = True
            logger.info("game over after %d line(s)", self.board.cleared_line_count)

    # ---------- movement ----------
    def _shift(self, dx: int, dy: int) -> bool:
        if not self.board.check_block(self.block.query().moved(dx, dy)):
            return False
        self.block.location = self.block.location.moved(dx, dy)
        return True

    def move_left(self):
        return self._shift(-1, 0)

    def move_right(self):
        return self._shift(1, 0)

    def move_up(self):
        # debug only, not bound to a key
        return self._shift(0, -1)

    def move_down(self):
        return self._shift(0, 1)

    def fall_block(self):
        if self.board.fall_block(self.frame_count):
            self._promote_next()
        return True

    def _rotate(self, step: int) -> bool:
        rotation = (self.block.rotation + step) % 4
        if not self.board.check_block(self.block.query(rotation=rotation)):
            return False
        self.block.rotation = rotation
        return True

    def rotate_left(self):
        return self._rotate(1)

    def rotate_right(self):
        return self._rotate(3)

    # ---------- stock ----------
    def stock(self) -> bool:
        """Move the active shape into the stock slot, or swap with it.

        With an empty slot the next piece's shape becomes active and a new
        next piece is drawn. The active piece keeps its location and rotation.
        """
        block = self.block
        incoming = self.next_block if self.stocked_block is None else self.stocked_block
        if not self.board.check_block(BlockQuery(tuple(incoming.shape), block.rotation, block.location)):
            return False

        if self.stocked_block is None:
            self.stocked_block = Piece(list(block.shape), kind=block.kind)
            block.shape, block.kind = list(self.next_block.shape), self.next_block.kind
            self.next_block = generate_random_block(self.rng)
            self.board.set_next_block(self.next_block)
        else:
            stocked = self.stocked_block
            stocked.shape, block.shape = block.shape, stocked.shape
            stocked.kind, block.kind = block.kind, stocked.kind
        self.stocked_block.location = BLOCK_GENERATE_LOCATION
        self.board.set_stocked_block(self.stocked_block)
        logger.debug("stocked %r, active is now %r", self.stocked_block.kind, block.kind)
        if self.board.try_commit(block, self.frame_count):
            self._promote_next()
        return True

    def toggle_debug(self):
        CONFIG["SHOW_GRID"] = not CONFIG["SHOW_GRID"]
        CONFIG["SHOW_DEBUG"] = not CONFIG["SHOW_DEBUG"]
        return True

    # ---------- dispatch ----------
    def press(self, command: str) -> bool:
        if command not in COMMANDS:
            raise ValueError(f"unknown command: {command!r}")
        if self.game_over and command not in GAME_OVER_COMMANDS:
            return False
        return bool(getattr(self, command)())

    def step(self, keys, renderer=None) -> bool:
        """Advance one frame. Returns True if a piece was fixed this frame."""
        self.frame_count += 1
        frame = self.frame_count
        for command in self.poller.poll(frame, keys):
            self.press(command)

        fixed = False
        if not self.game_over and self.block.advance_frame(self.board, frame):
            fixed = True
            self._promote_next()

        self.board.update(renderer)
        return fixed
