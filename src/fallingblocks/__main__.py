"""Simple ASCII demo for the game engine.

Run with: `python -m fallingblocks`

Plays a seeded session with random inputs, one gravity tick per input, and
prints the final frame composed of the board plus the falling piece.  Useful
as a smoke test that the engine runs end to end without a window.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from . import GameSession, SessionState
from .utils import DEFAULT_SPEED, format_grid


LOGGER = logging.getLogger(__name__)

INPUTS = ("left", "right", "rotate", "soft_drop", "hard_drop", "none")


def autoplay(session: GameSession, ticks: int, rng: random.Random) -> int:
    """Drive ``session`` with random inputs and return the ticks played."""

    played = 0
    session.start()
    while played < ticks and session.state is SessionState.RUNNING:
        choice = rng.choice(INPUTS)
        if choice == "left":
            session.move(-1)
        elif choice == "right":
            session.move(1)
        elif choice == "rotate":
            session.rotate()
        elif choice == "soft_drop":
            session.soft_drop()
        elif choice == "hard_drop":
            session.hard_drop()
        session.tick()
        played += 1
    LOGGER.info(
        "Played %d tick(s): score=%d lines=%d state=%s",
        played,
        session.score,
        session.lines_cleared,
        session.state.value,
    )
    return played


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and inputs.")
    parser.add_argument("--ticks", type=int, default=200, help="Number of gravity ticks to play.")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED, help="Fall speed (1-10).")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    session = GameSession(rng=random.Random(args.seed), speed=args.speed)
    autoplay(session, args.ticks, random.Random(args.seed))
    print(format_grid(session.render_grid()))
    print(f"Score: {session.score}  Lines: {session.lines_cleared}  State: {session.state.value}")


if __name__ == "__main__":
    main()
