"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, PIECE_VALUES
from .pieces import Piece


MIN_SPEED = 1
MAX_SPEED = 10
DEFAULT_SPEED = 5
BASE_INTERVAL_MS = 1000
INTERVAL_STEP_MS = 100

# Points for clearing 0-4 lines with a single lock.
LINE_CLEAR_POINTS = (0, 100, 300, 500, 800)
SOFT_DROP_POINTS = 1
HARD_DROP_POINTS_PER_CELL = 2


def clamp_speed(speed: int) -> int:
    """Clamp ``speed`` into ``[MIN_SPEED, MAX_SPEED]``."""

    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


def gravity_interval_ms(speed: int) -> int:
    """Return the fall interval in milliseconds for ``speed``.

    Speed ``1`` waits 1000ms between gravity steps and every level above it
    shaves off 100ms, down to 100ms at speed ``10``.
    """

    return BASE_INTERVAL_MS - (clamp_speed(speed) - 1) * INTERVAL_STEP_MS


def line_clear_score(lines: int) -> int:
    """Return the points awarded for clearing ``lines`` rows at once.

    Anything beyond four rows scores like a four-row clear.
    """

    if lines <= 0:
        return 0
    return LINE_CLEAR_POINTS[min(lines, len(LINE_CLEAR_POINTS) - 1)]


def render_grid(board: Board, active: Optional[Piece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's kind; cells above the ceiling are skipped.
    """

    grid = [[int(value) for value in row] for row in board.grid]
    if active is not None:
        for x, y in active.cells():
            if 0 <= y < board.height and 0 <= x < board.width:
                grid[y][x] = PIECE_VALUES[active.kind]
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return ``grid`` as text, ``#`` for filled cells and ``.`` for empty."""

    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)
