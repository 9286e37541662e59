from __future__ import annotations

import random
from typing import Iterable

from candyline.components.grid import Grid
from candyline.components.position import Position
from candyline.engine.tile_factory import create_tile


def remove_matches(grid: Grid, matches: Iterable[Position]) -> Grid:
    cells = grid.mutable_cells()
    for pos in matches:
        cells[pos.row][pos.col] = None
    return grid.with_cells(cells)


def mark_matches(grid: Grid, matches: Iterable[Position]) -> Grid:
    """Flag matched tiles so a front-end can show them breaking before removal."""
    cells = grid.mutable_cells()
    for pos in matches:
        tile = cells[pos.row][pos.col]
        if tile is not None:
            cells[pos.row][pos.col] = tile.marked()
    return grid.with_cells(cells)


def apply_gravity(grid: Grid, level: int, *, rng: random.Random | None = None) -> Grid:
    """Drop surviving tiles to the bottom of each column and refill the gap above.

    Survivors keep their relative order. Refilled tiles come straight from the
    tile factory with no match avoidance, so they may start the next cascade.
    """
    rng = rng or random.Random()
    cells = grid.mutable_cells()
    rows = grid.rows
    for col in range(grid.cols):
        target = rows - 1
        for row in range(rows - 1, -1, -1):
            tile = cells[row][col]
            if tile is None:
                continue
            if row != target:
                cells[target][col] = tile.moved_to(target, col)
                cells[row][col] = None
            target -= 1
        for row in range(target + 1):
            cells[row][col] = create_tile(row, col, level, rng=rng)
    return grid.with_cells(cells)
