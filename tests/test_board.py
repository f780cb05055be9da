import pytest

from fallblock_board import FIX_BLOCK_FRAME_DELAY, Board
from fallblock_piece import BlockQuery, Location, generate_block
from tests.helpers import board_with_rows


def _flat(location, rotation=0):
    return BlockQuery((0, 0, 0, 0, 2, 2, 2, 2), rotation, location)


def test_reset_field_keeps_trailing_slot():
    board = Board(10, 20)
    assert len(board.field) == 10 * 20 + 1
    assert not any(board.field)


@pytest.mark.parametrize("width, height", [(0, 20), (10, 0), (-1, 5)])
def test_bad_dimensions_raise(width, height):
    with pytest.raises(ValueError):
        Board(width, height)


def test_flat_piece_against_floor():
    board = Board(10, 20)
    piece = generate_block("i")
    assert piece.location == Location(3, -1)
    assert board.check_block(piece.query(location=Location(3, 18)))
    assert not board.check_block(piece.query(location=Location(3, 19)))


def test_check_block_walls():
    board = Board(10, 20)
    assert board.check_block(_flat(Location(0, 5)))
    assert not board.check_block(_flat(Location(-1, 5)))
    assert board.check_block(_flat(Location(6, 5)))
    assert not board.check_block(_flat(Location(7, 5)))


def test_check_block_above_field_passes():
    board = Board(10, 20)
    # every cell at y < 0
    assert board.check_block(_flat(Location(3, -3)))
    assert board.check_block(_flat(Location(0, -2)))


def test_check_block_overlap():
    board = board_with_rows(10, 20, ["....#....."])
    assert not board.check_block(_flat(Location(3, 18)))
    assert board.check_block(_flat(Location(5, 18)))
    assert board.check_block(_flat(Location(3, 17)))


def test_check_block_ignores_empty_cells():
    board = board_with_rows(10, 20, ["###.......", ".........."])
    # the unfilled top row of the shape may sit on occupied cells
    assert board.check_block(_flat(Location(0, 18)))
    assert not board.check_block(_flat(Location(0, 17)))


def test_fix_block_writes_shape_values():
    board = Board(10, 20)
    piece = generate_block("t")
    piece.location = Location(0, 18)
    board.set_block(piece)
    board.fix_block()
    assert board.cell(1, 18) == 3
    assert [board.cell(x, 19) for x in range(4)] == [3, 3, 3, 0]
    assert sum(1 for v in board.field if v) == 4


def test_fix_block_drops_cells_above_field():
    board = Board(10, 20)
    piece = generate_block("t")
    piece.location = Location(0, -1)
    board.set_block(piece)
    board.fix_block()
    assert [board.cell(x, 0) for x in range(4)] == [3, 3, 3, 0]
    assert sum(1 for v in board.field if v) == 3
    assert board.field[-1] == 0


def test_check_line_single_row():
    board = board_with_rows(4, 4, [
        ".#..",
        "##.#",
        "####",
    ])
    assert board.check_line() == 1
    assert board.cleared_line_count == 1
    assert board.field[:16] == [
        0, 0, 0, 0,
        0, 0, 0, 0,
        0, 1, 0, 0,
        1, 1, 0, 1,
    ]
    assert board.field[16] == 0


def test_check_line_rechecks_same_row():
    board = board_with_rows(4, 5, [
        "#...",
        "####",
        "####",
        "#.##",
        "####",
    ])
    assert board.check_line() == 3
    assert board.cleared_line_count == 3
    assert board.field[:20] == [0] * 12 + [1, 0, 0, 0] + [1, 0, 1, 1]


def test_check_line_never_clears_top_row():
    board = Board(3, 2)
    board.field[0:3] = [1, 1, 1]
    assert board.check_line() == 0
    assert board.field[0:3] == [1, 1, 1]


def test_lock_delay_state_machine():
    board = Board(10, 20)
    piece = generate_block("i")
    piece.location = Location(3, 18)

    assert board.try_commit(piece, 100) is False
    assert board.in_grace_period
    assert board.grace_period_start_frame == 100
    for frame in range(101, 100 + FIX_BLOCK_FRAME_DELAY):
        assert board.try_commit(piece, frame) is False
    assert board.try_commit(piece, 100 + FIX_BLOCK_FRAME_DELAY) is True
    assert not board.in_grace_period
    assert [board.cell(x, 19) for x in range(3, 7)] == [2, 2, 2, 2]


def test_falling_piece_never_commits():
    board = Board(10, 20)
    piece = generate_block("o")
    piece.location = Location(3, 5)
    for frame in range(1, 50):
        assert board.try_commit(piece, frame) is False
    assert board.block is piece
    assert not board.in_grace_period


def test_grace_period_survives_lifting_off():
    board = Board(10, 20)
    piece = generate_block("i")
    piece.location = Location(3, 18)
    board.try_commit(piece, 1)
    piece.location = Location(3, 10)
    assert board.try_commit(piece, 5) is False
    assert board.in_grace_period
    piece.location = Location(3, 18)
    # rests again after the window has run out: fixed straight away
    assert board.try_commit(piece, 20) is True


def test_commit_clears_completed_line():
    board = board_with_rows(10, 20, ["###....###"])
    piece = generate_block("i")
    piece.location = Location(3, 18)
    board.try_commit(piece, 1)
    assert board.try_commit(piece, 11) is True
    assert board.cleared_line_count == 1
    assert not any(board.field)


def test_landing_point_empty_and_stacked():
    board = Board(10, 20)
    piece = generate_block("i")
    board.set_block(piece)
    assert board.calc_landing_point() == 18

    board = board_with_rows(10, 20, ["....#.....", "....#....."])
    board.set_block(piece)
    assert board.calc_landing_point() == 16


def test_landing_point_when_top_is_blocked():
    board = board_with_rows(10, 2, ["....#.....", "....#....."])
    piece = generate_block("i")
    board.set_block(piece)
    assert board.calc_landing_point() == -1


def test_fall_block_commits_once_after_delay():
    board = Board(10, 20)
    piece = generate_block("i")
    board.set_block(piece)

    assert board.fall_block(50) is False
    assert piece.location == Location(3, 18)

    commits = [board.try_commit(piece, frame) for frame in range(51, 66)]
    assert commits.count(True) == 1
    assert commits.index(True) == 9  # frame 60
    assert [board.cell(x, 19) for x in range(10)] == [0, 0, 0, 2, 2, 2, 2, 0, 0, 0]


class _RecordingRenderer:
    def __init__(self):
        self.calls = []

    def draw(self, board):
        self.calls.append(board)


def test_update_draws_then_ramps_speed():
    board = Board()
    piece = generate_block("o")
    board.set_block(piece)
    renderer = _RecordingRenderer()

    board.update(renderer)
    assert renderer.calls == [board]
    assert piece.speed == 0.5

    board.cleared_line_count = 30
    board.update()
    assert piece.speed == 2.0
