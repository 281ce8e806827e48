from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .types import Position, Tile, TileType


CHAR_TO_TILE = {
    "0": TileType.OPEN,
    "1": TileType.WALL,
    "*": TileType.END,
}

TILE_TO_CHAR = {tile_type: ch for ch, tile_type in CHAR_TO_TILE.items()}

# One shared instance per kind; tiles are immutable.
_TILES = {tile_type: Tile(tile_type) for tile_type in TileType}


@dataclass(frozen=True)
class MazeGrid:
    rows: Tuple[Tuple[Tile, ...], ...]

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.row_count and 0 <= pos.col < self.column_count

    def tile_at(self, pos: Position) -> Tile:
        return self.rows[pos.row][pos.col]

    def positions(self) -> Iterator[Position]:
        for r in range(self.row_count):
            for c in range(self.column_count):
                yield Position(r, c)

    def positions_of(self, tile_type: TileType) -> List[Position]:
        return [pos for pos in self.positions() if self.tile_at(pos).type == tile_type]

    def to_lines(self) -> List[str]:
        return ["".join(TILE_TO_CHAR[tile.type] for tile in row) for row in self.rows]


# ---------------------- Parse errors ----------------------


@dataclass(frozen=True)
class InvalidTileCharacter:
    row: int
    column: int
    char: str

    @property
    def message(self) -> str:
        return f"Invalid tile {self.char!r} at row {self.row}, column {self.column}"


@dataclass(frozen=True)
class RaggedRow:
    row: int
    expected: int
    actual: int

    @property
    def message(self) -> str:
        return f"Row {self.row} has {self.actual} columns, expected {self.expected}"


@dataclass(frozen=True)
class EmptyMaze:
    @property
    def message(self) -> str:
        return "Empty maze content"


@dataclass(frozen=True)
class NoOpenTile:
    @property
    def message(self) -> str:
        return "Maze has no open tile to start on"


ParseError = Union[InvalidTileCharacter, RaggedRow, EmptyMaze, NoOpenTile]


class MazeLoadError(ValueError):
    """Raised by ParseResult.unwrap() when the maze could not be parsed."""

    def __init__(self, error: ParseError, source: Optional[str] = None):
        self.error = error
        self.source = source
        msg = error.message if source is None else f"{error.message} in {source}"
        super().__init__(msg)


@dataclass(frozen=True)
class ParseResult:
    grid: Optional[MazeGrid] = None
    error: Optional[ParseError] = None
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> MazeGrid:
        if self.error is not None or self.grid is None:
            raise MazeLoadError(self.error or EmptyMaze(), self.source)
        return self.grid


def _split_lines(content: Union[str, Sequence[str]]) -> List[str]:
    if isinstance(content, str):
        lines = content.splitlines()
    else:
        lines = [line.rstrip("\r\n") for line in content]
    # Trailing blank lines are file padding, not rows
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_maze(content: Union[str, Sequence[str]]) -> ParseResult:
    """Parse maze text (or its lines) into a MazeGrid.

    Each character maps through CHAR_TO_TILE. Rows must all have the width of
    row 0 and at least one tile must be OPEN. Failures come back as the
    ``error`` of the result; nothing is raised.
    """
    lines = _split_lines(content)
    if not lines:
        return ParseResult(error=EmptyMaze())

    width = len(lines[0])
    rows: List[Tuple[Tile, ...]] = []
    saw_open = False
    for r, line in enumerate(lines):
        if len(line) != width:
            return ParseResult(error=RaggedRow(row=r, expected=width, actual=len(line)))
        row: List[Tile] = []
        for c, ch in enumerate(line):
            tile_type = CHAR_TO_TILE.get(ch)
            if tile_type is None:
                return ParseResult(error=InvalidTileCharacter(row=r, column=c, char=ch))
            if tile_type == TileType.OPEN:
                saw_open = True
            row.append(_TILES[tile_type])
        rows.append(tuple(row))

    if not saw_open:
        return ParseResult(error=NoOpenTile())

    return ParseResult(grid=MazeGrid(rows=tuple(rows)))


def load_maze_file(path: Union[str, Path]) -> ParseResult:
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    result = parse_maze(text)
    return ParseResult(grid=result.grid, error=result.error, source=path.name)
