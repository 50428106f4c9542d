"""Piece definitions and basic behaviour.

This module holds the static catalogue of the seven tetromino shapes and the
mutable :class:`Piece` used for the falling piece.  Shapes are stored as
row-major masks of ``0``/``1`` values; the catalogue masks are immutable
tuples so rotating a live piece can never change the catalogue.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

Mask = Tuple[Tuple[int, ...], ...]
MutableMask = List[List[int]]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


@dataclass(frozen=True)
class Shape:
    """Immutable mask plus colour for one tetromino kind."""

    kind: TetrominoType
    mask: Mask
    color: str

    @property
    def width(self) -> int:
        return len(self.mask[0])

    @property
    def height(self) -> int:
        return len(self.mask)


SHAPES: Tuple[Shape, ...] = (
    Shape(TetrominoType.I, ((1, 1, 1, 1),), "#00d4ff"),
    Shape(TetrominoType.O, ((1, 1), (1, 1)), "#ffdd00"),
    Shape(TetrominoType.T, ((0, 1, 0), (1, 1, 1)), "#aa00ff"),
    Shape(TetrominoType.S, ((0, 1, 1), (1, 1, 0)), "#00ff00"),
    Shape(TetrominoType.Z, ((1, 1, 0), (0, 1, 1)), "#ff0000"),
    Shape(TetrominoType.J, ((1, 0, 0), (1, 1, 1)), "#0000ff"),
    Shape(TetrominoType.L, ((0, 0, 1), (1, 1, 1)), "#ff8800"),
)

SHAPES_BY_TYPE = {shape.kind: shape for shape in SHAPES}


def all_shapes() -> Tuple[Shape, ...]:
    """Return the catalogue of shapes in I, O, T, S, Z, J, L order."""

    return SHAPES


def rotate_clockwise(mask: Sequence[Sequence[int]]) -> MutableMask:
    """Return ``mask`` rotated 90 degrees clockwise.

    Row ``i`` of the result is column ``i`` of ``mask`` read from the bottom
    up, i.e. a transpose followed by reversing each row.  A ``h x w`` mask
    becomes ``w x h``.
    """

    return [list(column) for column in zip(*reversed(mask))]


@dataclass
class Piece:
    """Active falling piece in the game.

    ``x`` and ``y`` are the board coordinates of the mask's top-left cell.
    ``y`` may be negative while the piece is partially above the grid.
    """

    kind: TetrominoType
    shape: MutableMask = field(default_factory=list)
    x: int = 0
    y: int = 0

    @classmethod
    def from_shape(cls, shape: Shape, x: int = 0, y: int = 0) -> "Piece":
        """Create a piece with its own copy of ``shape``'s mask."""

        return cls(shape.kind, [list(row) for row in shape.mask], x, y)

    @property
    def color(self) -> str:
        return SHAPES_BY_TYPE[self.kind].color

    @property
    def width(self) -> int:
        return len(self.shape[0]) if self.shape else 0

    @property
    def height(self) -> int:
        return len(self.shape)

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets."""

        self.x += dx
        self.y += dy

    def cells(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Return the ``(x, y)`` board coordinates of the filled cells.

        ``dx``/``dy`` offset the result without moving the piece, which is
        how hypothetical positions are tested for collisions.
        """

        return [
            (self.x + col + dx, self.y + row + dy)
            for row, line in enumerate(self.shape)
            for col, value in enumerate(line)
            if value
        ]

    def copy(self) -> "Piece":
        return Piece(self.kind, [list(row) for row in self.shape], self.x, self.y)
