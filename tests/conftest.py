from __future__ import annotations

import pytest

from fallingblocks.pieces import TetrominoType


class FixedChoice:
    """Random source that always picks the same catalogue entry."""

    def __init__(self, kind: TetrominoType) -> None:
        self.kind = kind

    def seed(self, _seed) -> None:
        pass

    def choice(self, seq):
        return next(item for item in seq if item.kind == self.kind)


@pytest.fixture
def fixed_rng():
    return FixedChoice
