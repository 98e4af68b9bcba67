import numpy as np
import pytest

from sweeper.game import Game
from sweeper.generator import FixedBoardGenerator
from sweeper.settings import Settings
from sweeper.timer import Timer


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def layout_from_rows(rows):
    """'*' marks a mine, anything else is clear."""
    return np.array([[ch == '*' for ch in row] for row in rows], dtype=bool)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_game(clock):
    def factory(*rows):
        layout = layout_from_rows(rows)
        height, width = layout.shape
        settings = Settings.custom(width, height, int(layout.sum()))
        return Game(settings, generator=FixedBoardGenerator(layout), timer=Timer(clock=clock))
    return factory
