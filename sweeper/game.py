from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from .errors import (
    AlreadyOpen, CellFlagged, CellNotHidden, ChordRejected, ConfigError, GameError, GameOver,
    InvariantViolation, OutOfBounds,
)
from .generator import BoardGenerator, Coordinate, neighbors
from .rules import GameRules, GameState, RuleCell
from .settings import Settings, validate_board
from .timer import Timer

logger = logging.getLogger(__name__)


class Display(Enum):
    HIDDEN = 'hidden'
    FLAG = 'flag'
    MINE = 'mine'
    FALSE_FLAG = 'false_flag'
    TRIPPED_MINE = 'tripped_mine'
    OPEN = 'open'


@dataclass(frozen=True)
class DisplayCell:
    kind: Display
    count: int = 0

    @classmethod
    def from_rule(cls, cell: RuleCell) -> 'DisplayCell':
        if cell.is_mine:
            return MINE
        if cell.is_clear:
            return opened(cell.count)
        return HIDDEN

    @property
    def is_open(self) -> bool:
        return self.kind is Display.OPEN


HIDDEN = DisplayCell(Display.HIDDEN)
FLAG = DisplayCell(Display.FLAG)
MINE = DisplayCell(Display.MINE)
FALSE_FLAG = DisplayCell(Display.FALSE_FLAG)
TRIPPED_MINE = DisplayCell(Display.TRIPPED_MINE)


def opened(count: int) -> DisplayCell:
    return DisplayCell(Display.OPEN, int(count))


# Player intents
@dataclass(frozen=True)
class Probe:
    x: int
    y: int


@dataclass(frozen=True)
class Flag:
    x: int
    y: int


@dataclass(frozen=True)
class Chord:
    x: int
    y: int


@dataclass(frozen=True)
class ChangeSettings:
    settings: Settings


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Action = Union[Probe, Flag, Chord, ChangeSettings, Reset, Quit]


@dataclass
class Outcome:
    error: Optional[Exception] = None
    opened: List[Coordinate] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> Optional[str]:
        if self.error is None:
            return None
        return getattr(self.error, 'reason', str(self.error))


class Game:
    """Player-facing board layered over ``GameRules``.

    The overlay grid holds what the player sees (flags included) and the rules
    hold what is actually under each cell. The two only meet through
    ``GameRules.open`` while playing and through ``_reconcile`` once the game
    is decided.
    """

    def __init__(self, settings: Optional[Settings] = None, generator: Optional[BoardGenerator] = None,
                 timer: Optional[Timer] = None):
        self.settings = settings if settings is not None else Settings()
        self.rules = GameRules(self.settings.width, self.settings.height, self.settings.mines, generator)
        self.timer = timer if timer is not None else Timer()
        self.grid: List[List[DisplayCell]] = self._blank_grid()
        self.mines_remaining = self.settings.mines

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    @property
    def mines(self) -> int:
        return self.settings.mines

    @property
    def state(self) -> GameState:
        return self.rules.get_state()

    def cell(self, x: int, y: int) -> DisplayCell:
        self._check_coord(x, y)
        return self.grid[y][x]

    def board(self) -> List[List[DisplayCell]]:
        return [list(row) for row in self.grid]

    def elapsed(self) -> float:
        return self.timer.elapsed()

    def elapsed_secs(self) -> int:
        return self.timer.elapsed_secs()

    def action(self, action: Action) -> Outcome:
        try:
            if isinstance(action, Probe):
                return Outcome(opened=self.probe(action.x, action.y))
            if isinstance(action, Flag):
                self.flag(action.x, action.y)
            elif isinstance(action, Chord):
                return Outcome(opened=self.chord(action.x, action.y))
            elif isinstance(action, ChangeSettings):
                self.change_settings(action.settings)
            elif isinstance(action, Reset):
                self.reset()
            elif isinstance(action, Quit):
                return Outcome(error=GameError('quit is handled by the host loop'))
            else:
                raise TypeError(f'unknown action {action!r}')
        except (GameError, ConfigError) as e:
            return Outcome(error=e)
        return Outcome()

    def change_settings(self, settings: Settings) -> None:
        validate_board(settings.width, settings.height, settings.mines)
        should_reset = settings.shape != self.settings.shape
        self.settings = settings
        if should_reset:
            self.reset()

    def reset(self, settings: Optional[Settings] = None) -> None:
        settings = settings if settings is not None else self.settings
        self.rules.reset(settings.width, settings.height, settings.mines)
        self.settings = settings
        self.timer.reset()
        self.grid = self._blank_grid()
        self.mines_remaining = settings.mines
        logger.info('new %dx%d game with %d mines', settings.width, settings.height, settings.mines)

    def probe(self, x: int, y: int) -> List[Coordinate]:
        """Open a hidden cell, flooding outward from empty cells.

        Returns every coordinate opened by this probe, in opening order.
        """
        self._check_coord(x, y)
        if self.state.is_over:
            raise GameOver()
        current = self.grid[y][x]
        if current == FLAG:
            raise CellFlagged()
        if current.is_open:
            raise AlreadyOpen()
        if self.state is GameState.NEW:
            self.timer.start()
        return self._reveal(x, y)

    def flag(self, x: int, y: int) -> None:
        self._check_coord(x, y)
        if self.state.is_over:
            raise GameOver()
        current = self.grid[y][x]
        if current == HIDDEN:
            self.grid[y][x] = FLAG
            self.mines_remaining -= 1
        elif current == FLAG:
            self.grid[y][x] = HIDDEN
            self.mines_remaining += 1
        else:
            raise CellNotHidden()

    def chord(self, x: int, y: int) -> List[Coordinate]:
        """Open every hidden neighbor of a numbered cell whose flags add up.

        Only the flag count is checked. A flag on the wrong cell leaves the
        real mine hidden and the chord opens it.
        """
        self._check_coord(x, y)
        if self.state.is_over:
            raise GameOver()
        current = self.grid[y][x]
        if not current.is_open:
            raise ChordRejected('cell is not open')
        if current.count == 0:
            raise ChordRejected('cannot chord an empty cell')
        around = neighbors(x, y, self.width, self.height)
        flags = sum(1 for nx, ny in around if self.grid[ny][nx] == FLAG)
        if flags != current.count:
            raise ChordRejected()
        revealed: List[Coordinate] = []
        for nx, ny in around:
            if self.state.is_over:
                break
            # an earlier neighbor's cascade may already have opened this one
            if self.grid[ny][nx] == HIDDEN:
                revealed.extend(self._reveal(nx, ny))
        return revealed

    def _reveal(self, x: int, y: int) -> List[Coordinate]:
        revealed: List[Coordinate] = []
        stack: List[Tuple[int, int, bool]] = [(x, y, False)]
        while stack:
            cx, cy, cascaded = stack.pop()
            if self.grid[cy][cx] != HIDDEN:
                continue
            try:
                info = self.rules.open(cx, cy)
            except GameError as e:
                raise InvariantViolation(f'rules rejected open of hidden cell ({cx}, {cy}): {e.reason}') from e
            revealed.append((cx, cy))
            if info.cell.is_mine:
                if cascaded:
                    raise InvariantViolation(f'cascade reached a mine at ({cx}, {cy})')
                self.grid[cy][cx] = TRIPPED_MINE
            else:
                self.grid[cy][cx] = opened(info.cell.count)
            if info.state.is_over:
                self._finish()
                break
            if info.cell.count == 0:
                for nx, ny in neighbors(cx, cy, self.width, self.height):
                    if self.grid[ny][nx] == HIDDEN:
                        stack.append((nx, ny, True))
        if len(revealed) > 1:
            logger.debug('cascade from (%d, %d) opened %d cells', x, y, len(revealed))
        return revealed

    def _finish(self) -> None:
        self._reconcile()
        self.timer.stop()
        logger.info('game %s after %.1fs', self.state.value, self.timer.elapsed())

    def _reconcile(self) -> None:
        if not self.state.is_over:
            raise InvariantViolation('board can only be disclosed once the game is over')
        for y, row in enumerate(self.grid):
            for x, current in enumerate(row):
                if current == HIDDEN:
                    row[x] = DisplayCell.from_rule(self.rules.get_cell(x, y))
                elif current == FLAG and self.rules.get_cell(x, y).is_clear:
                    row[x] = FALSE_FLAG

    def _blank_grid(self) -> List[List[DisplayCell]]:
        return [[HIDDEN for _ in range(self.settings.width)] for _ in range(self.settings.height)]

    def _check_coord(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds()
