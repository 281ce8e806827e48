import itertools

import pytest

from maze_explorer.grid import parse_maze
from maze_explorer.movement import Rejection, attempt_move, initial_position
from maze_explorer.types import DOWN, LEFT, RIGHT, UP, Position, TileType

SCENARIO = ["000", "010", "00*"]

SMALL_MAZES = [
    SCENARIO,
    ["0"],
    ["0*"],
    ["01", "*0"],
    ["0110", "0*01", "1000"],
    ["*", "0", "1"],
]

DELTAS = [UP, DOWN, LEFT, RIGHT, (1, 1), (-1, 1), (0, 2), (0, 0)]


def test_scenario_walk_to_end():
    grid = parse_maze(SCENARIO).unwrap()
    pos = Position(0, 0)
    expected = [(RIGHT, (0, 1), False), (RIGHT, (0, 2), False), (DOWN, (1, 2), False), (DOWN, (2, 2), True)]
    for (dr, dc), target, won in expected:
        res = attempt_move(grid, pos, dr, dc)
        assert res.accepted is True
        assert res.position.as_tuple() == target
        assert res.won is won
        pos = res.position


def test_down_from_origin_is_open_not_blocked():
    grid = parse_maze(SCENARIO).unwrap()
    res = attempt_move(grid, Position(0, 0), *DOWN)
    assert res.accepted is True and res.rejection is None
    assert res.position == Position(1, 0)


def test_wall_blocks():
    grid = parse_maze(SCENARIO).unwrap()
    res = attempt_move(grid, Position(0, 1), *DOWN)
    assert res.accepted is False
    assert res.rejection == Rejection.BLOCKED
    assert res.position == Position(0, 1)


def test_edge_rejects_repeatedly():
    grid = parse_maze(SCENARIO).unwrap()
    pos = Position(0, 0)
    for _ in range(3):
        res = attempt_move(grid, pos, *UP)
        assert res.rejection == Rejection.OUT_OF_BOUNDS
        assert res.position == pos
        pos = res.position
    res = attempt_move(grid, pos, *LEFT)
    assert res.rejection == Rejection.OUT_OF_BOUNDS


@pytest.mark.parametrize("lines", SMALL_MAZES)
def test_every_position_and_delta(lines):
    grid = parse_maze(lines).unwrap()
    for pos, (dr, dc) in itertools.product(grid.positions(), DELTAS):
        res = attempt_move(grid, pos, dr, dc)
        target = Position(pos.row + dr, pos.col + dc)
        if not (0 <= target.row < len(lines) and 0 <= target.col < len(lines[0])):
            assert res.accepted is False and res.rejection == Rejection.OUT_OF_BOUNDS
            assert res.position == pos and res.won is False
            continue
        ch = lines[target.row][target.col]
        if ch == "1":
            assert res.accepted is False and res.rejection == Rejection.BLOCKED
            assert res.position == pos and res.won is False
        elif ch == "0":
            assert res.accepted is True and res.won is False
            assert res.position == target
        else:
            assert res.accepted is True and res.won is True
            assert res.position == target


def test_initial_position_is_origin_when_open():
    grid = parse_maze(SCENARIO).unwrap()
    assert initial_position(grid) == Position(0, 0)


def test_initial_position_skips_walls_and_end():
    grid = parse_maze(["1*1", "100"]).unwrap()
    pos = initial_position(grid)
    assert pos == Position(1, 1)
    assert grid.tile_at(pos).type == TileType.OPEN
