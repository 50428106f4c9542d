"""Falling-block puzzle engine: board, pieces and game session."""

from .board import Board
from .pieces import Piece, Shape, TetrominoType, all_shapes, rotate_clockwise
from .spawner import PieceSpawner
from .game_state import GameSession, SessionSnapshot, SessionState
from .ticker import GravityTimer
from .utils import gravity_interval_ms, line_clear_score, render_grid

__all__ = [
    "Board",
    "Piece",
    "Shape",
    "TetrominoType",
    "PieceSpawner",
    "GameSession",
    "SessionSnapshot",
    "SessionState",
    "GravityTimer",
    "all_shapes",
    "rotate_clockwise",
    "gravity_interval_ms",
    "line_clear_score",
    "render_grid",
]
