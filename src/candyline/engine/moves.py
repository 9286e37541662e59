from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from candyline.components.grid import Grid
from candyline.components.position import Position
from candyline.engine.matching import find_matches

Swap = Tuple[Position, Position]


def are_adjacent(a: Position, b: Position) -> bool:
    return (abs(a.row - b.row) == 1 and a.col == b.col) or (abs(a.col - b.col) == 1 and a.row == b.row)


def swap_candies(grid: Grid, a: Position, b: Position) -> Grid:
    """Exchange the tiles at a and b, rewriting their coordinates. Self-inverse."""
    cells = grid.mutable_cells()
    tile_a = cells[a.row][a.col]
    tile_b = cells[b.row][b.col]
    cells[a.row][a.col] = tile_b.moved_to(a.row, a.col) if tile_b is not None else None
    cells[b.row][b.col] = tile_a.moved_to(b.row, b.col) if tile_a is not None else None
    return grid.with_cells(cells)


def swap_creates_match(grid: Grid, a: Position, b: Position) -> bool:
    return bool(find_matches(swap_candies(grid, a, b)))


def iter_valid_swaps(grid: Grid) -> Iterator[Swap]:
    """Yield every right/bottom neighbour swap that leaves at least one match.

    Each trial rescans the whole scratch grid, which is fine up to 11x11.
    """
    for pos in grid.positions():
        for other in pos.neighbours():
            if not grid.in_bounds(other):
                continue
            if swap_creates_match(grid, pos, other):
                yield pos, other


def find_valid_swaps(grid: Grid) -> List[Swap]:
    return list(iter_valid_swaps(grid))


def find_hint(grid: Grid) -> Optional[Swap]:
    return next(iter_valid_swaps(grid), None)


def has_valid_moves(grid: Grid) -> bool:
    return find_hint(grid) is not None
