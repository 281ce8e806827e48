from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .grid import MazeGrid
from .types import Position, TileType


class Rejection(Enum):
    OUT_OF_BOUNDS = auto()
    BLOCKED = auto()


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    position: Position
    won: bool = False
    rejection: Optional[Rejection] = None

    @classmethod
    def rejected(cls, position: Position, why: Rejection) -> "MoveResult":
        return cls(accepted=False, position=position, won=False, rejection=why)


def initial_position(grid: MazeGrid) -> Position:
    # First open tile in row-major order; (0, 0) for every shipped maze
    for pos in grid.positions():
        if grid.tile_at(pos).type == TileType.OPEN:
            return pos
    raise ValueError("Maze has no open tile to start on")


def attempt_move(grid: MazeGrid, position: Position, row_delta: int, col_delta: int) -> MoveResult:
    """Resolve one move request against the grid.

    Rejected moves keep ``position``; accepted moves land on the target tile and
    report ``won`` when that tile is END.
    """
    target = position.move(row_delta, col_delta)
    if not grid.in_bounds(target):
        return MoveResult.rejected(position, Rejection.OUT_OF_BOUNDS)

    tile = grid.tile_at(target)
    if tile.type == TileType.WALL:
        return MoveResult.rejected(position, Rejection.BLOCKED)

    return MoveResult(accepted=True, position=target, won=tile.type == TileType.END)
