"""Maze Explorer game package.

Exposes public APIs for parsing mazes, moving the player and keeping scores.
"""

from .types import (
    Position,
    Tile,
    TileType,
)
from .grid import MazeGrid, ParseResult, MazeLoadError, parse_maze, load_maze_file
from .movement import MoveResult, Rejection, attempt_move, initial_position
from .scores import ScoreEntry, ScoreStore
from .maze_files import NoMazeFilesFound, list_maze_numbers, random_maze_number
from .session import GameSession, GameStateError

__all__ = [
    "Position",
    "Tile",
    "TileType",
    "MazeGrid",
    "ParseResult",
    "MazeLoadError",
    "parse_maze",
    "load_maze_file",
    "MoveResult",
    "Rejection",
    "attempt_move",
    "initial_position",
    "ScoreEntry",
    "ScoreStore",
    "NoMazeFilesFound",
    "list_maze_numbers",
    "random_maze_number",
    "GameSession",
    "GameStateError",
]
