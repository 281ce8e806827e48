"""
Game session: one player walking one maze against the clock.

A GameSession owns everything a single game needs (the parsed grid, the
player's position, the elapsed-time timer and the won flag) so front ends
hold a session object instead of sharing module-level state.

Supported actions (case-insensitive, with or without leading "Action:"):
- UP, DOWN, LEFT, RIGHT: attempt to move the player one cell
- W, A, S, D: keyboard aliases for UP, LEFT, DOWN, RIGHT

Rules:
- Walls and the maze edge reject the move; the player stays put.
- Stepping onto the end tile wins: the timer stops in the same step and any
  later action is rejected with reason 'game_over'.
- A won game may record its time to a ScoreStore exactly once.

Usage (as library):
    from maze_explorer.grid import load_maze_file
    from maze_explorer.session import GameSession

    session = GameSession(load_maze_file('data/mazes/maze1.txt').unwrap())
    res = session.step('D')
    print(res.ascii)
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .grid import MazeGrid
from .movement import attempt_move, initial_position
from .scores import ScoreEntry, ScoreStore
from .text_export import grid_to_text
from .types import DIRECTIONS, KEY_BINDINGS, Position

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class GameStateError(RuntimeError):
    pass


class GameTimer:
    """Whole-second stopwatch driven by a monotonic clock."""

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._frozen: int = 0

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self) -> None:
        self._frozen = 0
        self._started_at = self._clock()

    def stop(self) -> int:
        if self._started_at is not None:
            self._frozen = self._read()
            self._started_at = None
        return self._frozen

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return self._frozen
        return self._read()

    def now(self) -> float:
        return self._clock()

    def _read(self) -> int:
        return max(0, int(self._clock() - self._started_at))


@dataclass
class StepResult:
    ok: bool
    action: str
    moved: bool
    blocked: bool
    pos: Tuple[int, int]
    won: bool
    done: bool
    reason: Optional[str]
    elapsed: int
    ascii: str

    def to_dict(self) -> dict:
        return {
            'ok': self.ok,
            'action': self.action,
            'moved': self.moved,
            'blocked': self.blocked,
            'pos': list(self.pos),
            'won': self.won,
            'done': self.done,
            'reason': self.reason,
            'elapsed': self.elapsed,
            'ascii': self.ascii,
        }


class GameSession:
    def __init__(self, grid: MazeGrid, maze_number: Optional[int] = None, clock: Clock = time.monotonic):
        self.grid = grid
        self.maze_number = maze_number
        self.start = initial_position(grid)
        self.timer = GameTimer(clock)
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.position: Position = self.start
            self.won = False
            self.done = False
            self.score: Optional[ScoreEntry] = None
            self.move_count = 0
            self.timer.start()
            self.last_active = self.timer.now()

    @staticmethod
    def parse_action(s: str) -> Optional[str]:
        if not isinstance(s, str):
            return None
        t = s.strip()
        if not t:
            return None
        # allow prefix like "Action: UP"
        if ':' in t:
            _, t2 = t.split(':', 1)
            t = t2.strip()
        t = t.upper()
        t = KEY_BINDINGS.get(t, t)
        if t in DIRECTIONS:
            return t
        return None

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.elapsed_seconds

    @property
    def idle_seconds(self) -> float:
        return self.timer.now() - self.last_active

    def to_text(self) -> str:
        return grid_to_text(self.grid, player=self.position)

    def _result(self, ok: bool, action: str, moved: bool = False, blocked: bool = False,
                reason: Optional[str] = None) -> StepResult:
        return StepResult(ok, action, moved, blocked, self.position.as_tuple(), self.won, self.done,
                          reason, self.elapsed_seconds, self.to_text())

    def step(self, action: str) -> StepResult:
        with self._lock:
            self.last_active = self.timer.now()
            a = self.parse_action(action)
            if a is None:
                return self._result(False, str(action), reason='invalid_action')
            if self.done:
                return self._result(False, a, reason='game_over')
            d_row, d_col = DIRECTIONS[a]
            res = attempt_move(self.grid, self.position, d_row, d_col)
            if not res.accepted:
                return self._result(True, a, blocked=True, reason=res.rejection.name.lower())
            self.position = res.position
            self.move_count += 1
            if res.won:
                # Win freezes the clock in the same step
                self.timer.stop()
                self.won = True
                self.done = True
                logger.info("Maze %s solved in %ds (%d moves)", self.maze_number, self.elapsed_seconds,
                            self.move_count)
            return self._result(True, a, moved=True)

    def stop(self) -> int:
        """Abandon the game (leaving the game screen); returns the frozen time."""
        with self._lock:
            self.done = True
            return self.timer.stop()

    def record_score(self, store: ScoreStore, name: Optional[str]) -> ScoreEntry:
        with self._lock:
            if not self.won:
                raise GameStateError('game_not_won')
            if self.score is not None:
                raise GameStateError('score_already_recorded')
            self.score = store.append(name, self.elapsed_seconds)
            return self.score

    def snapshot(self) -> dict:
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> dict:
        return {
            'maze': self.maze_number,
            'rows': self.grid.to_lines(),
            'row_count': self.grid.row_count,
            'column_count': self.grid.column_count,
            'pos': list(self.position.as_tuple()),
            'won': self.won,
            'done': self.done,
            'elapsed': self.elapsed_seconds,
            'move_count': self.move_count,
            'ascii': self.to_text(),
        }
