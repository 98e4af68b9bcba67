from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import numpy as np

from .errors import AlreadyOpen, GameOver, OutOfBounds
from .generator import BoardGenerator, RandomBoardGenerator, neighbor_counts
from .settings import validate_board

logger = logging.getLogger(__name__)


class GameState(Enum):
    NEW = 'new'
    PLAYING = 'playing'
    WON = 'won'
    LOST = 'lost'

    @property
    def is_over(self) -> bool:
        return self in (GameState.WON, GameState.LOST)


class CellKind(Enum):
    HIDDEN = 'hidden'
    MINE = 'mine'
    CLEAR = 'clear'


@dataclass(frozen=True)
class RuleCell:
    kind: CellKind
    count: int = 0

    @classmethod
    def clear(cls, count: int) -> 'RuleCell':
        return cls(CellKind.CLEAR, int(count))

    @property
    def is_mine(self) -> bool:
        return self.kind is CellKind.MINE

    @property
    def is_clear(self) -> bool:
        return self.kind is CellKind.CLEAR


HIDDEN = RuleCell(CellKind.HIDDEN)
MINE = RuleCell(CellKind.MINE)


@dataclass(frozen=True)
class OpenInfo:
    state: GameState
    cell: RuleCell


class GameRules:
    """Authoritative game state: mine layout, opened cells and win/loss.

    The layout does not exist until the first ``open``; that call picks the
    board with the opened coordinate as the safe cell, so the first probe can
    never lose.
    """

    def __init__(self, width: int, height: int, mine_count: int, generator: Optional[BoardGenerator] = None):
        self.generator = generator if generator is not None else RandomBoardGenerator()
        self.reset(width, height, mine_count)

    def reset(self, width: int, height: int, mine_count: int) -> None:
        validate_board(width, height, mine_count)
        self.width = width
        self.height = height
        self.mine_count = mine_count
        self.state = GameState.NEW
        self.mines = np.zeros((height, width), dtype=bool)
        self.counts = np.zeros((height, width), dtype=np.uint8)
        self.opened = np.zeros((height, width), dtype=bool)
        self.cells_remaining = width * height - mine_count

    def clear(self) -> None:
        self.reset(self.width, self.height, self.mine_count)

    def get_state(self) -> GameState:
        return self.state

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> RuleCell:
        if not self.in_bounds(x, y):
            raise OutOfBounds()
        if self.state is GameState.NEW:
            return HIDDEN
        if self.state is GameState.PLAYING and not self.opened[y, x]:
            return HIDDEN
        return self._content(x, y)

    def get_board(self) -> List[List[RuleCell]]:
        return [[self.get_cell(x, y) for x in range(self.width)] for y in range(self.height)]

    def open(self, x: int, y: int) -> OpenInfo:
        if not self.in_bounds(x, y):
            raise OutOfBounds()
        if self.state.is_over:
            raise GameOver()
        if self.state is GameState.NEW:
            self._lay_mines(x, y)
        if self.opened[y, x]:
            raise AlreadyOpen()
        self.opened[y, x] = True
        if self.mines[y, x]:
            self.state = GameState.LOST
            logger.info('mine opened at (%d, %d): game lost', x, y)
            return OpenInfo(self.state, MINE)
        self.cells_remaining -= 1
        if self.cells_remaining == 0:
            self.state = GameState.WON
            logger.info('last clear cell opened at (%d, %d): game won', x, y)
        return OpenInfo(self.state, RuleCell.clear(self.counts[y, x]))

    def _lay_mines(self, safe_x: int, safe_y: int) -> None:
        self.mines = np.asarray(
            self.generator.generate(self.width, self.height, self.mine_count, safe_x, safe_y), dtype=bool)
        self.counts = neighbor_counts(self.mines)
        self.state = GameState.PLAYING

    def _content(self, x: int, y: int) -> RuleCell:
        if self.mines[y, x]:
            return MINE
        return RuleCell.clear(self.counts[y, x])
