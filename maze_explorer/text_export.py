"""
text_export.py

Render a MazeGrid (plus the player's position) as ASCII for the terminal
front end and for the web API's plain-text view.

One character per tile:
  wall (#), open (.), end flag (F), player (P)

The player symbol overrides whatever tile it stands on.

Usage:
    from maze_explorer.grid import parse_maze
    from maze_explorer.text_export import grid_to_text

    grid = parse_maze("000\\n010\\n00*").unwrap()
    print(grid_to_text(grid, player=Position(0, 0)))
"""
from __future__ import annotations

from typing import Dict, List, Optional

from .grid import MazeGrid
from .types import Position, TileType

DEFAULT_SYMBOLS: Dict[str, str] = {
    'wall': '#',
    'open': '.',
    'end': 'F',
    'player': 'P',
}

_TILE_KEYS = {
    TileType.WALL: 'wall',
    TileType.OPEN: 'open',
    TileType.END: 'end',
}


def grid_to_rows(grid: MazeGrid, player: Optional[Position] = None,
                 symbols: Optional[Dict[str, str]] = None) -> List[str]:
    sym = dict(DEFAULT_SYMBOLS)
    if symbols:
        sym.update(symbols)
    rows: List[str] = []
    for r, row in enumerate(grid.rows):
        chars = [sym[_TILE_KEYS[tile.type]] for tile in row]
        if player is not None and player.row == r and 0 <= player.col < len(chars):
            chars[player.col] = sym['player']
        rows.append(''.join(chars))
    return rows


def grid_to_text(grid: MazeGrid, player: Optional[Position] = None,
                 symbols: Optional[Dict[str, str]] = None) -> str:
    return '\n'.join(grid_to_rows(grid, player, symbols))
