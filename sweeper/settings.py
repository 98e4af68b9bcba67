from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .errors import ConfigError


def validate_board(width: int, height: int, mines: int) -> None:
    if width < 1 or height < 1:
        raise ConfigError('width and height must be at least 1')
    if mines < 1:
        raise ConfigError('mines must be at least 1')
    if mines >= width * height:
        raise ConfigError('mines must be less than the number of cells')


class Difficulty(Enum):
    EASY = (9, 9, 10)
    MEDIUM = (16, 16, 40)
    HARD = (30, 16, 99)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]

    @property
    def mines(self) -> int:
        return self.value[2]


@dataclass(frozen=True)
class CustomBoard:
    width: int
    height: int
    mines: int

    def __post_init__(self):
        validate_board(self.width, self.height, self.mines)


@dataclass(frozen=True)
class Settings:
    difficulty: Union[Difficulty, CustomBoard] = field(default=Difficulty.EASY)

    @classmethod
    def custom(cls, width: int, height: int, mines: int) -> 'Settings':
        return cls(CustomBoard(width, height, mines))

    @classmethod
    def from_name(cls, name: str) -> 'Settings':
        try:
            return cls(Difficulty[name.strip().upper()])
        except KeyError:
            choices = ', '.join(d.name.lower() for d in Difficulty)
            raise ConfigError(f'unknown difficulty {name!r} (expected one of: {choices})') from None

    @property
    def width(self) -> int:
        return self.difficulty.width

    @property
    def height(self) -> int:
        return self.difficulty.height

    @property
    def mines(self) -> int:
        return self.difficulty.mines

    @property
    def shape(self):
        return self.width, self.height, self.mines
