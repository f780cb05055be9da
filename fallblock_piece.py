"""Piece model, shape templates, fixed rotation transforms"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from fallblock_config import CONFIG

CELLS = 8
GHOST_OFFSET = 8  # translucent colour index = base + 8

# 2 rows x 4 columns per shape, cell i sits at (i % 4, i // 4)
SHAPES = {
    "o": [0, 1, 1, 0, 0, 1, 1, 0],
    "i": [0, 0, 0, 0, 2, 2, 2, 2],
    "t": [0, 3, 0, 0, 3, 3, 3, 0],
    "l": [0, 0, 4, 0, 4, 4, 4, 0],
    "j": [5, 0, 0, 0, 5, 5, 5, 0],
    "s": [0, 6, 6, 0, 6, 6, 0, 0],
    "z": [7, 7, 0, 0, 0, 7, 7, 0],
}
KINDS = list(SHAPES)


@dataclass(frozen=True)
class Location:
    x: int
    y: int

    def moved(self, dx: int = 0, dy: int = 0) -> "Location":
        return Location(self.x + dx, self.y + dy)


BLOCK_GENERATE_LOCATION = Location(3, -1)


def rotated_location(i: int, rotation: int, location: Location) -> Location:
    """Absolute grid location of shape cell ``i`` under ``rotation``.

    The offsets are hand-tuned per rotation so the 2x4 layout turns around
    a stable pivot; they are not a plain rotation matrix.
    """
    by, bx = divmod(i, 4)
    ax, ay = location.x, location.y
    if rotation == 0:
        return Location(bx + ax, by + ay)
    if rotation == 1:
        return Location(by + ax + 1, -bx + ay + 2)
    if rotation == 2:
        return Location(-bx + ax + 3, -by + ay + 1)
    if rotation == 3:
        return Location(-by + ax + 2, bx + ay - 1)
    raise ValueError(f"rotation must be 0..3, got {rotation}")


@dataclass(frozen=True)
class BlockQuery:
    """Read-only snapshot of a piece used for speculative collision checks."""
    shape: Tuple[int, ...]
    rotation: int
    location: Location

    def rotated_location(self, i: int) -> Location:
        return rotated_location(i, self.rotation, self.location)

    def with_location(self, location: Location) -> "BlockQuery":
        return BlockQuery(self.shape, self.rotation, location)

    def with_rotation(self, rotation: int) -> "BlockQuery":
        return BlockQuery(self.shape, rotation % 4, self.location)

    def moved(self, dx: int = 0, dy: int = 0) -> "BlockQuery":
        return self.with_location(self.location.moved(dx, dy))

    def cells(self) -> List[Tuple[int, Location]]:
        """(value, location) for every nonzero cell."""
        return [(v, self.rotated_location(i)) for i, v in enumerate(self.shape) if v]


@dataclass
class Piece:
    shape: List[int]
    rotation: int = 0
    location: Location = BLOCK_GENERATE_LOCATION
    speed: float = 1.0
    kind: str = field(default="", compare=False)

    def get_rotated_location(self, i: int, block: Optional[BlockQuery] = None) -> Location:
        if block is not None:
            return block.rotated_location(i)
        return rotated_location(i, self.rotation, self.location)

    def query(self, location: Optional[Location] = None, rotation: Optional[int] = None) -> BlockQuery:
        return BlockQuery(
            tuple(self.shape),
            self.rotation if rotation is None else rotation % 4,
            self.location if location is None else location,
        )

    def ghost(self, y: int) -> "Piece":
        return Piece(
            [v + GHOST_OFFSET for v in self.shape],
            self.rotation,
            Location(self.location.x, y),
            self.speed,
            self.kind,
        )

    def gravity_interval(self) -> int:
        return max(1, int(CONFIG["FRAME_RATE"] / self.speed))

    def advance_frame(self, board, frame: int) -> bool:
        """Apply gravity for this frame, then let the board decide on locking.

        Returns True when the piece was fixed into the field on this call.
        """
        if frame % self.gravity_interval() == 0 and board.check_block(self.query().moved(dy=1)):
            self.location = self.location.moved(dy=1)
        return board.try_commit(self, frame)


def generate_block(kind: Union[str, int]) -> Piece:
    if isinstance(kind, int) and not isinstance(kind, bool):
        if not 0 <= kind < len(KINDS):
            raise ValueError(f"unknown block kind: {kind}")
        kind = KINDS[kind]
    if kind not in SHAPES:
        raise ValueError(f"unknown block kind: {kind!r}")
    return Piece(list(SHAPES[kind]), kind=kind)


def generate_random_block(rng) -> Piece:
    kind, rotation = rng.next_piece()
    block = generate_block(kind)
    block.rotation = rotation
    return block
