from __future__ import annotations

import logging
import random
from typing import List, Optional

from candyline.components.grid import Grid
from candyline.components.tile import Tile
from candyline.constants import MAX_SPAWN_ATTEMPTS, MIN_MATCH_LENGTH
from candyline.engine.tile_factory import create_tile

logger = logging.getLogger(__name__)

Cells = List[List[Optional[Tile]]]


def _run_length(cells: Cells, row: int, col: int, type_name: str, d_row: int, d_col: int) -> int:
    length = 0
    r, c = row + d_row, col + d_col
    while 0 <= r < len(cells) and 0 <= c < len(cells[r]):
        tile = cells[r][c]
        if tile is None or tile.type_name != type_name:
            break
        length += 1
        r += d_row
        c += d_col
    return length


def would_create_match(cells: Cells, candidate: Tile, row: int, col: int) -> bool:
    """True if placing candidate at (row, col) completes a run with its placed neighbours."""
    name = candidate.type_name
    horizontal = 1 + _run_length(cells, row, col, name, 0, -1) + _run_length(cells, row, col, name, 0, 1)
    if horizontal >= MIN_MATCH_LENGTH:
        return True
    vertical = 1 + _run_length(cells, row, col, name, -1, 0) + _run_length(cells, row, col, name, 1, 0)
    return vertical >= MIN_MATCH_LENGTH


def create_initial_board(
    rows: int,
    cols: int,
    level: int,
    *,
    rng: random.Random | None = None,
    max_attempts: int = MAX_SPAWN_ATTEMPTS,
) -> Grid:
    """Fill a board row by row, rerolling any tile that would complete a run.

    Each cell gets at most ``max_attempts`` rerolls; after that the last
    candidate is kept even if it matches, so generation always terminates.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Board dimensions must be positive, got {rows}x{cols}")
    rng = rng or random.Random()
    cells: Cells = [[None] * cols for _ in range(rows)]
    relaxed = 0
    for row in range(rows):
        for col in range(cols):
            candidate = create_tile(row, col, level, rng=rng)
            attempts = 0
            while attempts < max_attempts and would_create_match(cells, candidate, row, col):
                candidate = create_tile(row, col, level, rng=rng)
                attempts += 1
            if attempts == max_attempts and would_create_match(cells, candidate, row, col):
                relaxed += 1
            cells[row][col] = candidate
    if relaxed:
        logger.debug("Initial %dx%d board kept %d matching tile(s) after %d rerolls", rows, cols, relaxed, max_attempts)
    return Grid.from_rows(cells)
