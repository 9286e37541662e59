from __future__ import annotations

from typing import Callable, List, Optional, Set

from candyline.components.grid import Grid
from candyline.components.position import Position
from candyline.constants import MIN_MATCH_LENGTH


def _scan_line(types: List[Optional[str]], to_position: Callable[[int], Position], found: Set[Position]) -> None:
    """Mark every run of MIN_MATCH_LENGTH+ equal types in one row or column."""
    length = len(types)
    for start in range(length - MIN_MATCH_LENGTH + 1):
        first = types[start]
        if first is None:
            continue
        window = types[start:start + MIN_MATCH_LENGTH]
        if any(t != first for t in window):
            continue
        end = start + MIN_MATCH_LENGTH
        while end < length and types[end] == first:
            end += 1
        for index in range(start, end):
            found.add(to_position(index))


def find_matches(grid: Grid) -> Set[Position]:
    """Detect all horizontal or vertical runs of length >= 3.

    Returns the union of matched cells; overlapping runs (an L or a T, or a
    run of five) are reported once per cell. An empty set means the board is
    stable.
    """
    found: Set[Position] = set()
    # Horizontal runs
    for r in range(grid.rows):
        row_types = [grid.type_at(r, c) for c in range(grid.cols)]
        _scan_line(row_types, lambda c, r=r: Position(r, c), found)
    # Vertical runs
    for c in range(grid.cols):
        col_types = [grid.type_at(r, c) for r in range(grid.rows)]
        _scan_line(col_types, lambda r, c=c: Position(r, c), found)
    return found
