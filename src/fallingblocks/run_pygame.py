"""Simple pygame front-end for the game engine.

The window draws the board, the falling piece and a preview of the next
piece.  All rules live in :class:`~fallingblocks.game_state.GameSession`;
this module only translates key presses into session calls and feeds the
frame delta to a :class:`~fallingblocks.ticker.GravityTimer`.

Controls: arrows move/rotate/soft-drop, space hard-drops, Enter starts or
restarts, ``P`` pauses, ``R`` resets and the digit keys pick the speed
(``1``-``9``, ``0`` for 10).
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import pygame

from .game_state import GameSession, SessionState
from .pieces import Piece
from .ticker import GravityTimer

# Size of a single board cell in pixels
CELL_SIZE = 30
# Size of a cell in the next-piece preview
PREVIEW_CELL_SIZE = 25
# Width of the side panel holding the preview
PANEL_WIDTH = 6 * PREVIEW_CELL_SIZE
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (10, 10, 26)
GRID_LINE = (26, 26, 58)
OVERLAY_SHADE = {SessionState.PAUSED: 128, SessionState.GAME_OVER: 204}
GAME_OVER_COLOR = (255, 107, 107)
TEXT_COLOR = (255, 255, 255)

SPEED_KEYS = {getattr(pygame, f"K_{digit}"): digit or 10 for digit in range(10)}

LOGGER = logging.getLogger(__name__)


def _draw_cell(screen: pygame.Surface, color: str, left: int, top: int, size: int) -> None:
    rect = pygame.Rect(left + 1, top + 1, size - 2, size - 2)
    base = pygame.Color(color)
    pygame.draw.rect(screen, base, rect)
    pygame.draw.rect(screen, base.lerp((255, 255, 255), 0.3), pygame.Rect(left + 1, top + 1, size - 2, 4))


def draw_board(screen: pygame.Surface, session: GameSession) -> None:
    """Render the grid lines and locked cells."""

    for y, row in enumerate(session.board.rows()):
        for x, color in enumerate(row):
            rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)
            if color:
                _draw_cell(screen, color, x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE)


def draw_piece(screen: pygame.Surface, piece: Optional[Piece]) -> None:
    """Render the falling piece, skipping cells above the grid."""

    if piece is None:
        return
    for x, y in piece.cells():
        if y >= 0:
            _draw_cell(screen, piece.color, x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE)


def draw_preview(screen: pygame.Surface, piece: Optional[Piece], left: int) -> None:
    """Render ``piece`` centred in the side panel starting at ``left``."""

    if piece is None:
        return
    offset_x = left + (PANEL_WIDTH - piece.width * PREVIEW_CELL_SIZE) // 2
    offset_y = (4 * PREVIEW_CELL_SIZE - piece.height * PREVIEW_CELL_SIZE) // 2 + PREVIEW_CELL_SIZE
    for row, line in enumerate(piece.shape):
        for col, value in enumerate(line):
            if value:
                _draw_cell(
                    screen,
                    piece.color,
                    offset_x + col * PREVIEW_CELL_SIZE,
                    offset_y + row * PREVIEW_CELL_SIZE,
                    PREVIEW_CELL_SIZE,
                )


def overlay_lines(session: GameSession) -> list[tuple[str, int, tuple[int, int, int]]]:
    """Return ``(text, font size, colour)`` lines to draw over the board."""

    if session.state is SessionState.PAUSED:
        return [("PAUSED", 30, TEXT_COLOR)]
    if session.state is SessionState.GAME_OVER:
        return [
            ("GAME OVER", 36, GAME_OVER_COLOR),
            (f"Score: {session.score}", 20, TEXT_COLOR),
        ]
    return []


def draw_overlay(screen: pygame.Surface, session: GameSession) -> None:
    """Dim the board and print the pause or game-over banner."""

    lines = overlay_lines(session)
    if not lines:
        return
    width = session.width * CELL_SIZE
    height = session.height * CELL_SIZE
    shade = pygame.Surface((width, height), pygame.SRCALPHA)
    shade.fill((0, 0, 0, OVERLAY_SHADE[session.state]))
    screen.blit(shade, (0, 0))
    top = height // 2 - 20 * (len(lines) - 1)
    for i, (text, size, color) in enumerate(lines):
        label = pygame.font.Font(None, size).render(text, True, color)
        screen.blit(label, label.get_rect(center=(width // 2, top + 40 * i)))


def caption(session: GameSession) -> str:
    """Return the window caption summarising the session."""

    status = {
        SessionState.IDLE: "Press Enter - ",
        SessionState.RUNNING: "",
        SessionState.PAUSED: "Paused - ",
        SessionState.GAME_OVER: "Game Over - ",
    }[session.state]
    return (
        f"Falling Blocks - {status}Score: {session.score}  "
        f"Lines: {session.lines_cleared}  Speed: {session.speed}"
    )


def handle_key(event: pygame.event.Event, session: GameSession, timer: GravityTimer) -> None:
    """Process keyboard events for the session."""

    key = event.key
    if key == pygame.K_RETURN:
        session.start()
        timer.reset()
    elif key == pygame.K_p:
        session.toggle_pause()
    elif key == pygame.K_r:
        session.reset()
        timer.reset()
    elif key in SPEED_KEYS:
        timer.set_speed(SPEED_KEYS[key])
    elif key == pygame.K_LEFT:
        session.move(-1)
    elif key == pygame.K_RIGHT:
        session.move(1)
    elif key == pygame.K_UP:
        session.rotate()
    elif key == pygame.K_DOWN:
        session.soft_drop()
    elif key == pygame.K_SPACE:
        session.hard_drop()


class GameRunner:
    """Own the window, the session and the gravity timer."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()
        self.timer = GravityTimer(self.session)
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None

    @property
    def running(self) -> bool:
        return self._running

    def _draw(self) -> None:
        if self._screen is None:
            return
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, self.session)
        draw_piece(self._screen, self.session.current_piece)
        draw_preview(self._screen, self.session.next_piece, self.session.width * CELL_SIZE)
        draw_overlay(self._screen, self.session)
        pygame.display.set_caption(caption(self.session))
        pygame.display.flip()

    def step(self, dt: float) -> None:
        """Process pending events and advance gravity by ``dt`` milliseconds."""

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                handle_key(event, self.session, self.timer)
        self.timer.advance(dt)
        self._draw()

    async def run(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas in the page when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        pygame.font.init()
        width = self.session.width * CELL_SIZE + PANEL_WIDTH
        height = self.session.height * CELL_SIZE
        self._screen = pygame.display.set_mode((width, height))
        self._clock = pygame.time.Clock()
        self._running = True
        LOGGER.info("Window opened")
        try:
            while self._running:
                self.step(self._clock.tick(FPS))
                # Yield to the browser/host event loop to keep UI responsive
                await asyncio.sleep(0)
        except Exception:
            LOGGER.exception("Game loop crashed")
            raise
        finally:
            pygame.quit()
            LOGGER.info("Window closed")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    asyncio.run(GameRunner().run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
