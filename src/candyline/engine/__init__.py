"""Board simulation engine: pure functions over immutable grids."""

from candyline.engine.board_generator import create_initial_board
from candyline.engine.cascade import Cascade, CascadePhase, CascadeResult, CascadeStep, score_for
from candyline.engine.gravity import apply_gravity, mark_matches, remove_matches
from candyline.engine.levels import get_board_size, get_level_config
from candyline.engine.matching import find_matches
from candyline.engine.moves import (
    are_adjacent,
    find_hint,
    find_valid_swaps,
    has_valid_moves,
    swap_candies,
)
from candyline.engine.randomizer import randomize_board
from candyline.engine.tile_factory import color_for, create_tile, palette_for_level
from candyline.engine.turn import (
    Selection,
    SelectionAction,
    TurnOutcome,
    TurnResult,
    advance_level,
    reset_game,
    resolve_swap,
    select_tile,
    start_level,
)

__all__ = [
    "Cascade",
    "CascadePhase",
    "CascadeResult",
    "CascadeStep",
    "Selection",
    "SelectionAction",
    "TurnOutcome",
    "TurnResult",
    "advance_level",
    "apply_gravity",
    "are_adjacent",
    "color_for",
    "create_initial_board",
    "create_tile",
    "find_hint",
    "find_matches",
    "find_valid_swaps",
    "get_board_size",
    "get_level_config",
    "has_valid_moves",
    "mark_matches",
    "palette_for_level",
    "randomize_board",
    "remove_matches",
    "reset_game",
    "resolve_swap",
    "score_for",
    "select_tile",
    "start_level",
    "swap_candies",
]
