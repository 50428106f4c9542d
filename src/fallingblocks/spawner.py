"""Random piece generation with a one-piece lookahead."""

from __future__ import annotations

import random
from typing import Optional

from .board import WIDTH
from .pieces import Piece, all_shapes


class PieceSpawner:
    """Produce pieces from the shape catalogue.

    ``rng`` is any :class:`random.Random`-compatible object.  Passing a
    seeded instance makes the piece sequence reproducible.  The spawner keeps
    the piece that will be handed out next in :attr:`upcoming` so a preview
    can always be drawn one piece ahead.
    """

    def __init__(self, width: int = WIDTH, rng: Optional[random.Random] = None) -> None:
        self.width = width
        self.rng = rng if rng is not None else random.Random()
        self.upcoming: Optional[Piece] = None

    def seed(self, seed: Optional[int]) -> None:
        """Seed the spawner RNG."""

        if seed is not None:
            self.rng.seed(seed)

    def random_piece(self) -> Piece:
        """Return a new piece centred horizontally on the top row."""

        shape = self.rng.choice(all_shapes())
        x = self.width // 2 - shape.width // 2
        return Piece.from_shape(shape, x=x, y=0)

    def take(self) -> Piece:
        """Return the upcoming piece and generate a new one to replace it.

        A fresh piece is generated when there is no lookahead yet, e.g. right
        after :meth:`clear`.
        """

        piece = self.upcoming or self.random_piece()
        self.upcoming = self.random_piece()
        return piece

    def clear(self) -> None:
        """Drop the lookahead piece."""

        self.upcoming = None
