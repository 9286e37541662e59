"""Level number to board size, move budget and objective."""
from __future__ import annotations

import math
import random
from bisect import bisect_left

from candyline.components.level_config import BoardSize, LevelConfig
from candyline.components.objective import ClearBoard, CollectColors, Objective
from candyline.constants import (
    BOARD_SIZE_BREAKPOINTS,
    COLLECT_COLORS_LEVEL_STEP,
    COLLECT_LEVEL_INTERVAL,
    COLLECT_TARGET_CELL_RATIO,
    COLLECT_TARGET_LEVEL_STEP,
    MAX_BOARD_SIDE,
    MAX_COLLECT_COLORS,
    MIN_COLLECT_COLORS,
    MIN_MOVES,
    MOVE_PENALTY_LEVEL_STEP,
    MOVES_PER_CELL,
)
from candyline.engine.tile_factory import palette_for_level

_LAST_LEVELS = [last for last, _ in BOARD_SIZE_BREAKPOINTS]


def _check_level(level: int) -> None:
    if level < 1:
        raise ValueError(f"Levels start at 1, got {level}")


def get_board_size(level: int) -> BoardSize:
    _check_level(level)
    index = bisect_left(_LAST_LEVELS, level)
    side = BOARD_SIZE_BREAKPOINTS[index][1] if index < len(BOARD_SIZE_BREAKPOINTS) else MAX_BOARD_SIDE
    return BoardSize(rows=side, cols=side)


def moves_for(level: int, size: BoardSize) -> int:
    budget = math.floor(MOVES_PER_CELL * size.cells) - level // MOVE_PENALTY_LEVEL_STEP
    return max(MIN_MOVES, budget)


def collect_color_count(level: int) -> int:
    return min(MIN_COLLECT_COLORS + level // COLLECT_COLORS_LEVEL_STEP, MAX_COLLECT_COLORS)


def objective_for(level: int, size: BoardSize) -> Objective:
    if level % COLLECT_LEVEL_INTERVAL != 0:
        return ClearBoard()
    # Seeded by the level so the same level always asks for the same colors.
    chooser = random.Random(level)
    palette = palette_for_level(level)
    colors = chooser.sample(palette, min(collect_color_count(level), len(palette)))
    target = math.floor(size.cells * COLLECT_TARGET_CELL_RATIO) + level // COLLECT_TARGET_LEVEL_STEP
    return CollectColors(targets={name: target for name in colors})


def get_level_config(level: int) -> LevelConfig:
    size = get_board_size(level)
    return LevelConfig(
        level=level,
        moves=moves_for(level, size),
        board_size=size,
        objective=objective_for(level, size),
    )
