from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .grid import load_maze_file
from .maze_files import NoMazeFilesFound, load_maze_number, random_maze_number
from .scores import ScoreStore
from .session import GameSession

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.environ.get("MAZE_EXPLORER_DATA_DIR", Path.cwd() / "data"))
MAZES_DIR = Path(os.environ.get("MAZE_EXPLORER_MAZES_DIR", DATA_DIR / "mazes"))
SCORES_PATH = Path(os.environ.get("MAZE_EXPLORER_SCORES_PATH", DATA_DIR / "highscores.csv"))
TOP_SCORES = int(os.environ.get("MAZE_EXPLORER_TOP_SCORES", "10"))

CONTROLS = "Controls: W: Move Up - S: Move Down - A: Move Left - D: Move Right - Q: Quit"


def print_scores(store: ScoreStore, n: int, out: TextIO) -> None:
    top = store.top_n(n)
    print("High Scores", file=out)
    if not top:
        print("No high scores yet", file=out)
        return
    for i, entry in enumerate(top, 1):
        print(f"{i}. {entry.name} - {entry.seconds} seconds", file=out)


def play(mazes_dir: Path, store: ScoreStore, maze: Optional[int], inp: TextIO, out: TextIO) -> int:
    number = maze if maze is not None else random_maze_number(mazes_dir)
    result = load_maze_number(mazes_dir, number)
    if not result.ok:
        print(f"Cannot load maze {number}: {result.error.message}", file=out)
        return 1
    session = GameSession(result.grid, maze_number=number)
    print(CONTROLS, file=out)
    print(session.to_text(), file=out)
    for line in inp:
        key = line.strip()
        if key.upper() == "Q":
            session.stop()
            print("Back to menu.", file=out)
            return 0
        res = session.step(key)
        if not res.ok:
            print(f"Unknown key {key!r}. {CONTROLS}", file=out)
            continue
        print(res.ascii, file=out)
        print(f"Time: {res.elapsed}s", file=out)
        if res.won:
            print("You Escaped the Maze!!", file=out)
            print(f"Time: {res.elapsed} seconds", file=out)
            print("Enter your name: ", end="", file=out)
            out.flush()
            name = inp.readline().strip()
            session.record_score(store, name)
            return 0
    session.stop()
    return 0


def check(paths: List[str], out: TextIO) -> int:
    failures = 0
    for p in paths:
        try:
            result = load_maze_file(p)
        except (OSError, UnicodeDecodeError) as e:
            failures += 1
            print(f"{p}: {e}", file=out)
            continue
        if result.ok:
            print(f"{p}: ok ({result.grid.row_count}x{result.grid.column_count})", file=out)
        else:
            failures += 1
            print(f"{p}: {result.error.message}", file=out)
    return 1 if failures else 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Maze Explorer: reach the flag as fast as possible.")
    parser.add_argument("--mazes-dir", type=str, default=str(MAZES_DIR), help="Directory of maze<N>.txt files")
    parser.add_argument("--scores", type=str, default=str(SCORES_PATH), help="High score file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_play = sub.add_parser("play", help="Play a maze in the terminal")
    p_play.add_argument("--maze", type=int, default=None, help="Maze number (random if omitted)")

    p_scores = sub.add_parser("scores", help="Show the high score list")
    p_scores.add_argument("-n", type=int, default=TOP_SCORES, help="Number of entries")

    p_check = sub.add_parser("check", help="Validate maze files")
    p_check.add_argument("paths", nargs="+", help="Maze files")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = ScoreStore(args.scores)
    if args.command == "scores":
        print_scores(store, args.n, sys.stdout)
        return 0
    if args.command == "check":
        return check(args.paths, sys.stdout)
    try:
        return play(Path(args.mazes_dir), store, args.maze, sys.stdin, sys.stdout)
    except NoMazeFilesFound as e:
        logger.error("%s", e)
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
