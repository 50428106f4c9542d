"""Board representation for the playfield."""

from __future__ import annotations

from typing import Collection, List, Optional

import numpy as np
from numpy.typing import NDArray

from .pieces import SHAPES, Piece, TetrominoType


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0``
# represents an empty cell; every other value identifies the locked piece's
# kind and therefore its colour.
PIECE_VALUES = {shape.kind: i + 1 for i, shape in enumerate(SHAPES)}
VALUE_COLORS = {PIECE_VALUES[shape.kind]: shape.color for shape in SHAPES}


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Fixed-size grid holding the locked cells.

    The grid is indexed ``[row, col]``; the public collision API takes
    ``(x, y)`` board coordinates where ``x`` is the column and ``y`` the row.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def fill_row(
        self, row: int, kind: TetrominoType = TetrominoType.I, skip: Collection[int] = ()
    ) -> None:
        """Occupy every cell of ``row`` except the columns in ``skip``."""

        value = PIECE_VALUES[kind]
        for col in range(self.width):
            self.set_cell(row, col, 0 if col in skip else value)

    def is_occupied(self, x: int, y: int) -> bool:
        """Return ``True`` if the cell at ``(x, y)`` holds a locked block.

        Cells above the ceiling (``y < 0``) are never occupied so pieces can
        spawn partially off-grid.  Any other off-board coordinate counts as
        occupied, which makes the walls and floor solid.
        """

        if y < 0:
            return False
        if 0 <= y < self.height and 0 <= x < self.width:
            return bool(self.grid[y, x] != 0)
        return True

    def collides(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        """Return ``True`` if ``piece`` offset by ``(dx, dy)`` overlaps anything.

        A cell collides when it leaves ``[0, width)`` horizontally, reaches or
        passes the floor, or lands on a locked block.  Cells above the ceiling
        only take part in the horizontal check.
        """

        for x, y in piece.cells(dx, dy):
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def lock(self, piece: Piece) -> None:
        """Write the piece's blocks into the grid.

        Blocks above the ceiling are dropped.
        """

        value = np.uint8(PIECE_VALUES[piece.kind])
        for x, y in piece.cells():
            if y >= 0:
                self.grid[y, x] = value

    def clear_full_lines(self) -> int:
        """Clear completed rows and return how many were removed.

        Remaining rows keep their order and drop down; the same number of
        empty rows is inserted at the top so the height never changes.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def color_at(self, x: int, y: int) -> Optional[str]:
        """Return the colour locked at ``(x, y)`` or ``None`` if empty."""

        return VALUE_COLORS.get(self.get_cell(y, x))

    def rows(self) -> List[List[Optional[str]]]:
        """Return a copy of the grid as rows of colours (``None`` = empty)."""

        return [[VALUE_COLORS.get(int(value)) for value in row] for row in self.grid]
