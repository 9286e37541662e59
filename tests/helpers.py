from __future__ import annotations

from typing import Sequence

from candyline.components.grid import Grid
from candyline.components.position import Position
from candyline.events.bus import EVENT_TICK, EventBus

CODES = {
    'R': 'red',
    'B': 'blue',
    'G': 'green',
    'Y': 'yellow',
    'P': 'purple',
    'O': 'orange',
    '.': None,
}

# No standing match; swapping (0,2) and (0,3) completes the red run on row 0.
SWAP_FIXTURE = (
    "RRBR",
    "GBGY",
    "YGYB",
    "BYBG",
)


def grid_from(rows: Sequence[str]) -> Grid:
    """Build a grid from single-letter type codes, '.' for an empty cell."""
    return Grid.from_types([[CODES[ch] for ch in row] for row in rows])


def stalemate_grid(rows: int = 5, cols: int = 5) -> Grid:
    pattern = ['red', 'blue', 'green']
    return Grid.from_types([[pattern[(r + c) % 3] for c in range(cols)] for r in range(rows)])


def pos(row: int, col: int) -> Position:
    return Position(row, col)


def assert_coordinates_consistent(grid: Grid) -> None:
    for r, row in enumerate(grid.cells):
        for c, tile in enumerate(row):
            if tile is not None:
                assert (tile.row, tile.col) == (r, c), f"Tile {tile.tile_id} thinks it is at {(tile.row, tile.col)} but sits at {(r, c)}"


def drive_ticks(bus: EventBus, count: int = 100, dt: float = 0.05) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
