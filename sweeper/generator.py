from __future__ import annotations
import logging
from typing import List, Optional, Tuple
import numpy as np

from .errors import ConfigError

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


def neighbors(x: int, y: int, width: int, height: int) -> List[Coordinate]:
    coords = []
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                coords.append((nx, ny))
    return coords


def neighbor_counts(mines: np.ndarray) -> np.ndarray:
    """Number of mines around each cell of a (height, width) boolean grid."""
    pad = np.pad(mines.astype(np.uint8), ((1, 1), (1, 1)), mode='constant')
    counts = (
        pad[:-2, :-2] + pad[:-2, 1:-1] + pad[:-2, 2:] +
        pad[1:-1, :-2]                 + pad[1:-1, 2:] +
        pad[2:, :-2]  + pad[2:, 1:-1]  + pad[2:, 2:]
    )
    return counts.astype(np.uint8)


class BoardGenerator:
    """Produces a mine layout that leaves (safe_x, safe_y) clear.

    The returned array has shape (height, width) and exactly mine_count true
    entries. Callers validate the board shape before asking for a layout.
    """

    def generate(self, width: int, height: int, mine_count: int, safe_x: int, safe_y: int) -> np.ndarray:
        raise NotImplementedError


class RandomBoardGenerator(BoardGenerator):
    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def generate(self, width: int, height: int, mine_count: int, safe_x: int, safe_y: int) -> np.ndarray:
        mines = np.zeros(width * height, dtype=bool)
        safe = safe_y * width + safe_x
        # Candidate pool excludes the safe cell; each draw removes its pick
        pool = [i for i in range(width * height) if i != safe]
        for _ in range(mine_count):
            j = int(self.rng.integers(len(pool)))
            mines[pool[j]] = True
            pool[j] = pool[-1]
            pool.pop()
        logger.debug('generated %dx%d board with %d mines, safe cell (%d, %d)',
                     width, height, mine_count, safe_x, safe_y)
        return mines.reshape(height, width)


class RowMajorBoardGenerator(BoardGenerator):
    """Fills cells in reading order, skipping the safe cell."""

    def generate(self, width: int, height: int, mine_count: int, safe_x: int, safe_y: int) -> np.ndarray:
        mines = np.zeros((height, width), dtype=bool)
        placed = 0
        for y in range(height):
            for x in range(width):
                if placed == mine_count:
                    return mines
                if (x, y) == (safe_x, safe_y):
                    continue
                mines[y, x] = True
                placed += 1
        return mines


class FixedBoardGenerator(BoardGenerator):
    def __init__(self, layout):
        self.layout = np.asarray(layout, dtype=bool)

    def generate(self, width: int, height: int, mine_count: int, safe_x: int, safe_y: int) -> np.ndarray:
        if self.layout.shape != (height, width):
            raise ConfigError(f'layout shape {self.layout.shape} does not match {height}x{width} board')
        if int(self.layout.sum()) != mine_count:
            raise ConfigError(f'layout holds {int(self.layout.sum())} mines, expected {mine_count}')
        if self.layout[safe_y, safe_x]:
            raise ConfigError(f'layout places a mine on the safe cell ({safe_x}, {safe_y})')
        return self.layout.copy()
