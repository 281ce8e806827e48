from __future__ import annotations

import random
import re
from pathlib import Path
from typing import Dict, List, Union

from .grid import ParseResult, load_maze_file

MAZE_FILE_RE = re.compile(r"maze(\d+)\.txt")


class NoMazeFilesFound(FileNotFoundError):
    pass


def find_maze_files(directory: Union[str, Path]) -> Dict[int, Path]:
    """Map maze number -> file for every ``maze<number>.txt`` in directory."""
    directory = Path(directory)
    if not directory.is_dir():
        return {}
    found: Dict[int, Path] = {}
    for path in sorted(directory.iterdir()):
        m = MAZE_FILE_RE.fullmatch(path.name)
        if m and path.is_file():
            # maze1.txt and maze01.txt share a number; first by name wins
            found.setdefault(int(m.group(1)), path)
    return found


def list_maze_numbers(directory: Union[str, Path]) -> List[int]:
    return sorted(find_maze_files(directory))


def random_maze_number(directory: Union[str, Path], rng: random.Random | None = None) -> int:
    numbers = list_maze_numbers(directory)
    if not numbers:
        raise NoMazeFilesFound(f"No maze files found in {directory}")
    return (rng or random).choice(numbers)


def maze_path(directory: Union[str, Path], number: int) -> Path:
    return find_maze_files(directory).get(number) or Path(directory) / f"maze{number}.txt"


def load_maze_number(directory: Union[str, Path], number: int) -> ParseResult:
    path = find_maze_files(directory).get(number)
    if path is None:
        raise NoMazeFilesFound(f"Maze {number} not found in {directory}")
    return load_maze_file(path)
