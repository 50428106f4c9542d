from __future__ import annotations

import pytest

from fallingblocks.board import Board, PIECE_VALUES
from fallingblocks.pieces import Piece, SHAPES_BY_TYPE, TetrominoType


def _piece(kind: TetrominoType, x: int, y: int) -> Piece:
    return Piece.from_shape(SHAPES_BY_TYPE[kind], x=x, y=y)


def test_new_board_is_empty_with_fixed_dimensions():
    board = Board()
    assert board.grid.shape == (20, 10)
    assert not board.grid.any()


def test_cells_above_ceiling_are_never_occupied():
    board = Board()
    assert board.is_occupied(0, -1) is False
    assert board.is_occupied(-5, -3) is False


def test_walls_and_floor_count_as_occupied():
    board = Board()
    assert board.is_occupied(-1, 0)
    assert board.is_occupied(board.width, 0)
    assert board.is_occupied(0, board.height)


def test_get_and_set_cell_reject_out_of_bounds():
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell(20, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, 10, 1)


def test_collides_with_side_walls_and_floor():
    board = Board()
    piece = _piece(TetrominoType.I, x=0, y=19)
    assert not board.collides(piece)
    assert board.collides(piece, -1, 0)
    assert board.collides(piece, 0, 1)
    piece.x = 6
    assert not board.collides(piece)
    assert board.collides(piece, 1, 0)


def test_collides_with_locked_cells():
    board = Board()
    board.set_cell(5, 4, 1)
    piece = _piece(TetrominoType.O, x=3, y=3)
    assert not board.collides(piece)
    assert board.collides(piece, 0, 1)


def test_cells_above_ceiling_only_check_horizontal_bounds():
    board = Board()
    piece = _piece(TetrominoType.O, x=0, y=-1)
    assert not board.collides(piece)
    assert board.collides(piece, -1, 0)
    piece.y = -2
    piece.x = board.width
    assert board.collides(piece)


def test_lock_drops_cells_above_ceiling():
    board = Board()
    piece = _piece(TetrominoType.O, x=4, y=-1)
    board.lock(piece)
    assert board.get_cell(0, 4) == PIECE_VALUES[TetrominoType.O]
    assert board.get_cell(0, 5) == PIECE_VALUES[TetrominoType.O]
    assert int(board.grid.astype(bool).sum()) == 2


def test_lock_writes_piece_colour():
    board = Board()
    board.lock(_piece(TetrominoType.T, x=0, y=18))
    assert board.color_at(1, 18) == SHAPES_BY_TYPE[TetrominoType.T].color
    assert board.color_at(0, 18) is None
    assert board.rows()[19][:3] == ["#aa00ff"] * 3


def test_clear_full_lines_none_full():
    board = Board()
    board.fill_row(19, skip={0})
    assert board.clear_full_lines() == 0
    assert board.get_cell(19, 0) == 0
    assert board.get_cell(19, 1) != 0


def test_clear_full_lines_removes_only_full_rows_and_keeps_order():
    board = Board()
    board.fill_row(19)
    board.fill_row(18, skip={1})
    board.fill_row(17)
    board.fill_row(16, skip={2})
    board.fill_row(15)

    assert board.clear_full_lines() == 3

    assert board.grid.shape == (20, 10)
    assert not board.grid[:18].any()
    # Surviving rows keep their relative order at the bottom.
    assert board.get_cell(19, 1) == 0 and board.get_cell(19, 2) != 0
    assert board.get_cell(18, 2) == 0 and board.get_cell(18, 1) != 0


def test_clear_adjacent_full_rows():
    board = Board()
    for row in range(16, 20):
        board.fill_row(row)
    board.set_cell(15, 0, 3)
    assert board.clear_full_lines() == 4
    assert board.get_cell(19, 0) == 3
    assert int(board.grid.astype(bool).sum()) == 1
