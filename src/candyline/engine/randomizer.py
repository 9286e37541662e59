from __future__ import annotations

import logging
import random

from candyline.components.grid import Grid
from candyline.constants import SHUFFLE_ATTEMPTS
from candyline.engine.board_generator import create_initial_board
from candyline.engine.matching import find_matches
from candyline.engine.moves import has_valid_moves

logger = logging.getLogger(__name__)


def is_playable(grid: Grid) -> bool:
    """No standing match and at least one swap that makes one."""
    return not find_matches(grid) and has_valid_moves(grid)


def shuffle_tiles(grid: Grid, *, rng: random.Random | None = None) -> Grid:
    """Permute the existing tiles over the board, keeping type counts and ids."""
    rng = rng or random.Random()
    tiles = list(grid.tiles())
    rng.shuffle(tiles)
    cells = grid.mutable_cells()
    slots = [pos for pos in grid.positions() if grid.at(pos) is not None]
    for pos, tile in zip(slots, tiles):
        cells[pos.row][pos.col] = tile.moved_to(pos.row, pos.col)
    return grid.with_cells(cells)


def randomize_board(
    grid: Grid,
    level: int,
    *,
    rng: random.Random | None = None,
    max_attempts: int = SHUFFLE_ATTEMPTS,
) -> Grid:
    """Recover from a deadlock.

    Shuffles the tiles until the board is playable. When no shuffle within
    ``max_attempts`` works (too few types on a small board), fresh boards are
    generated instead, also capped, and the last one is returned.
    """
    rng = rng or random.Random()
    for attempt in range(max_attempts):
        candidate = shuffle_tiles(grid, rng=rng)
        if is_playable(candidate):
            logger.debug("Deadlocked board reshuffled after %d attempt(s)", attempt + 1)
            return candidate
    logger.debug("No playable shuffle in %d attempts; regenerating board", max_attempts)
    candidate = grid
    for _ in range(max_attempts):
        candidate = create_initial_board(grid.rows, grid.cols, level, rng=rng)
        if is_playable(candidate):
            return candidate
    logger.warning("Regenerated %dx%d board still has no valid move", grid.rows, grid.cols)
    return candidate
