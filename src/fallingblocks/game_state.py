"""High level game session container."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
import logging
import random

from .board import Board, HEIGHT, WIDTH
from .pieces import Piece, rotate_clockwise
from .spawner import PieceSpawner
from .utils import (
    DEFAULT_SPEED,
    HARD_DROP_POINTS_PER_CELL,
    SOFT_DROP_POINTS,
    clamp_speed,
    gravity_interval_ms,
    line_clear_score,
    render_grid,
)


LOGGER = logging.getLogger(__name__)

# Horizontal offsets tried, in order, after a rotation collides.
WALL_KICKS = (-1, 1)


class SessionState(str, Enum):
    """Lifecycle of a :class:`GameSession`."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for renderers."""

    board: Tuple[Tuple[Optional[str], ...], ...]
    grid: Tuple[Tuple[int, ...], ...]
    current: Optional[Piece]
    upcoming: Optional[Piece]
    score: int
    lines: int
    state: SessionState
    speed: int


class GameSession:
    """Mutable state and rules for one play session.

    The session owns the board, the falling piece and the spawner.  Input
    handlers and the gravity timer call the mutating methods; each of them is
    a no-op when the session is not :attr:`SessionState.RUNNING`, so callers
    never need to check the state first.
    """

    def __init__(
        self,
        *,
        width: int = WIDTH,
        height: int = HEIGHT,
        rng: Optional[random.Random] = None,
        speed: int = DEFAULT_SPEED,
    ) -> None:
        self.width = width
        self.height = height
        self.board = Board(width, height)
        self.spawner = PieceSpawner(width, rng)
        self.current_piece: Optional[Piece] = None
        self.score = 0
        self.lines_cleared = 0
        self.speed = clamp_speed(speed)
        self.state = SessionState.IDLE
        # Bumped whenever gravity must restart from a fresh interval.
        self.schedule_id = 0

    # Read accessors ---------------------------------------------------
    @property
    def next_piece(self) -> Optional[Piece]:
        return self.spawner.upcoming

    @property
    def is_playing(self) -> bool:
        return self.state in (SessionState.RUNNING, SessionState.PAUSED)

    @property
    def is_paused(self) -> bool:
        return self.state is SessionState.PAUSED

    @property
    def is_running(self) -> bool:
        return self.state is SessionState.RUNNING

    @property
    def drop_interval_ms(self) -> int:
        """Milliseconds between gravity steps at the current speed."""

        return gravity_interval_ms(self.speed)

    def render_grid(self) -> List[List[int]]:
        return render_grid(self.board, self.current_piece)

    def snapshot(self) -> SessionSnapshot:
        """Return a frozen copy of everything a renderer needs."""

        return SessionSnapshot(
            board=tuple(tuple(row) for row in self.board.rows()),
            grid=tuple(tuple(row) for row in self.render_grid()),
            current=self.current_piece.copy() if self.current_piece else None,
            upcoming=self.next_piece.copy() if self.next_piece else None,
            score=self.score,
            lines=self.lines_cleared,
            state=self.state,
            speed=self.speed,
        )

    # Lifecycle --------------------------------------------------------
    def start(self) -> None:
        """Start a fresh game, discarding any game in progress."""

        self.board = Board(self.width, self.height)
        self.score = 0
        self.lines_cleared = 0
        self.current_piece = None
        self.spawner.clear()
        self.state = SessionState.RUNNING
        self.schedule_id += 1
        LOGGER.info("Game started at speed %d", self.speed)
        self.spawn_next()

    def pause(self) -> bool:
        if self.state is not SessionState.RUNNING:
            LOGGER.debug("Pause ignored: game not running")
            return False
        self.state = SessionState.PAUSED
        LOGGER.info("Paused")
        return True

    def resume(self) -> bool:
        if self.state is not SessionState.PAUSED:
            LOGGER.debug("Resume ignored: game not paused")
            return False
        self.state = SessionState.RUNNING
        LOGGER.info("Resumed")
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one."""

        if self.state is SessionState.PAUSED:
            return self.resume()
        return self.pause()

    def reset(self) -> None:
        """Return to the idle state with an empty board and default speed."""

        self.board = Board(self.width, self.height)
        self.score = 0
        self.lines_cleared = 0
        self.speed = DEFAULT_SPEED
        self.current_piece = None
        self.spawner.clear()
        self.state = SessionState.IDLE
        self.schedule_id += 1
        LOGGER.info("Game reset")

    def set_speed(self, level: int) -> int:
        """Set the fall speed, clamped to the supported range."""

        self.speed = clamp_speed(level)
        self.schedule_id += 1
        LOGGER.debug("Speed set to %d (%dms)", self.speed, self.drop_interval_ms)
        return self.speed

    # Piece control ----------------------------------------------------
    def spawn_next(self) -> Piece:
        """Promote the upcoming piece and check for a top-out.

        The session moves to :attr:`SessionState.GAME_OVER` when the new
        piece collides with the locked blocks straight away.
        """

        self.current_piece = self.spawner.take()
        if self.board.collides(self.current_piece):
            self.state = SessionState.GAME_OVER
            LOGGER.info(
                "Game over. Score: %d, lines: %d", self.score, self.lines_cleared
            )
        return self.current_piece

    def tick(self) -> bool:
        """Apply one gravity step.

        Returns ``True`` if the step changed anything.
        """

        if not self._can_act():
            return False
        self._descend()
        return True

    def move(self, direction: int) -> bool:
        """Shift the piece one column left (``-1``) or right (``+1``).

        Any other direction is rejected like a blocked move.
        """

        if direction not in (-1, 1) or not self._can_act():
            return False
        if self.board.collides(self.current_piece, direction, 0):
            return False
        self.current_piece.move(direction, 0)
        return True

    def rotate(self) -> bool:
        """Rotate the piece clockwise, nudging it sideways if needed.

        The rotated piece is tried in place, then one column left, then one
        column right.  If all three collide the rotation is undone.
        """

        if not self._can_act():
            return False
        piece = self.current_piece
        original_shape, original_x = piece.shape, piece.x
        piece.shape = rotate_clockwise(original_shape)
        if not self.board.collides(piece):
            return True
        for dx in WALL_KICKS:
            if not self.board.collides(piece, dx, 0):
                piece.x += dx
                return True
        piece.shape, piece.x = original_shape, original_x
        return False

    def soft_drop(self) -> bool:
        """Step the piece down once by hand and award a point."""

        if not self._can_act():
            return False
        self._descend()
        self.score += SOFT_DROP_POINTS
        return True

    def hard_drop(self) -> int:
        """Drop the piece to its resting row and lock it.

        Returns the number of rows descended.
        """

        if not self._can_act():
            return 0
        distance = 0
        while not self.board.collides(self.current_piece, 0, 1):
            self.current_piece.move(0, 1)
            distance += 1
        self.score += distance * HARD_DROP_POINTS_PER_CELL
        self._lock_and_spawn()
        return distance

    # Internal helpers -------------------------------------------------
    def _can_act(self) -> bool:
        return self.state is SessionState.RUNNING and self.current_piece is not None

    def _descend(self) -> None:
        if self.board.collides(self.current_piece, 0, 1):
            self._lock_and_spawn()
        else:
            self.current_piece.move(0, 1)

    def _lock_and_spawn(self) -> None:
        self.board.lock(self.current_piece)
        cleared = self.board.clear_full_lines()
        if cleared:
            self.lines_cleared += cleared
            self.score += line_clear_score(cleared)
            LOGGER.info(
                "Cleared %d row(s). Score: %d", cleared, self.score
            )
        self.spawn_next()
