from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Tuple


class TileType(Enum):
    OPEN = auto()
    WALL = auto()
    END = auto()


@dataclass(frozen=True)
class Tile:
    type: TileType


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def move(self, d_row: int, d_col: int) -> "Position":
        return Position(self.row + d_row, self.col + d_col)


# Movement deltas as (row, col)
UP = (-1, 0)
DOWN = (1, 0)
LEFT = (0, -1)
RIGHT = (0, 1)

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}

KEY_BINDINGS: Dict[str, str] = {
    "W": "UP",
    "S": "DOWN",
    "A": "LEFT",
    "D": "RIGHT",
}
