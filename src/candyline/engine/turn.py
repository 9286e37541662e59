"""Session-level orchestration: level setup, selection and swap resolution.

Every function takes a ``GameSession`` and hands back a replacement; the
input session is never modified.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Dict, Iterable, Optional

from candyline.components.grid import Grid
from candyline.components.position import Position
from candyline.components.session import GameSession, GameStatus
from candyline.constants import STARTING_LEVEL
from candyline.engine.board_generator import create_initial_board
from candyline.engine.cascade import Cascade, score_for
from candyline.engine.levels import get_level_config
from candyline.engine.matching import find_matches
from candyline.engine.moves import Swap, are_adjacent, has_valid_moves, swap_candies
from candyline.engine.randomizer import randomize_board

logger = logging.getLogger(__name__)


class TurnOutcome(Enum):
    BUSY = auto()
    LEVEL_OVER = auto()
    OUT_OF_BOUNDS = auto()
    NOT_ADJACENT = auto()
    REVERTED = auto()
    CONTINUE = auto()
    LEVEL_COMPLETE = auto()
    LEVEL_FAILED = auto()

    @property
    def accepted(self) -> bool:
        return self not in (
            TurnOutcome.BUSY,
            TurnOutcome.LEVEL_OVER,
            TurnOutcome.OUT_OF_BOUNDS,
            TurnOutcome.NOT_ADJACENT,
            TurnOutcome.REVERTED,
        )


@dataclass(frozen=True, slots=True)
class TurnResult:
    outcome: TurnOutcome
    session: GameSession
    swapped_grid: Optional[Grid] = None
    cascade: Optional[Cascade] = None
    score_delta: int = 0
    matched_count: int = 0
    reshuffled: bool = False


class SelectionAction(Enum):
    IGNORED = auto()
    SELECTED = auto()
    DESELECTED = auto()
    SWAP_REQUESTED = auto()


@dataclass(frozen=True, slots=True)
class Selection:
    action: SelectionAction
    session: GameSession
    swap: Optional[Swap] = None


def start_level(level: int = STARTING_LEVEL, *, score: int = 0, rng: random.Random | None = None) -> GameSession:
    rng = rng or random.Random()
    config = get_level_config(level)
    grid = create_initial_board(config.board_size.rows, config.board_size.cols, level, rng=rng)
    if not has_valid_moves(grid):
        grid = randomize_board(grid, level, rng=rng)
    logger.info("Level %d: %dx%d board, %d moves, objective %s",
                level, config.board_size.rows, config.board_size.cols, config.moves, config.objective)
    return GameSession(
        grid=grid,
        level=level,
        score=score,
        moves_left=config.moves,
        objective=config.objective,
        collected={name: 0 for name in config.objective.tracked_types},
    )


def advance_level(session: GameSession, *, rng: random.Random | None = None) -> GameSession:
    """Next level with the score carried over and moves/collected counts reset."""
    return start_level(session.level + 1, score=session.score, rng=rng)


def reset_game(*, rng: random.Random | None = None) -> GameSession:
    return start_level(STARTING_LEVEL, rng=rng)


def select_tile(session: GameSession, pos: Position) -> Selection:
    """Apply one tap to the selection state."""
    if not session.accepts_input or not session.grid.in_bounds(pos):
        return Selection(SelectionAction.IGNORED, session)
    current = session.selected
    if current is None:
        return Selection(SelectionAction.SELECTED, replace(session, selected=pos))
    if current == pos:
        return Selection(SelectionAction.DESELECTED, replace(session, selected=None))
    if are_adjacent(current, pos):
        return Selection(SelectionAction.SWAP_REQUESTED, replace(session, selected=None), swap=(current, pos))
    return Selection(SelectionAction.SELECTED, replace(session, selected=pos))


def _accumulate(collected: Dict[str, int], gained: Dict[str, int], tracked: Iterable[str]) -> Dict[str, int]:
    merged = dict(collected)
    for name in tracked:
        merged[name] = merged.get(name, 0) + gained.get(name, 0)
    return merged


def resolve_swap(
    session: GameSession,
    a: Position,
    b: Position,
    *,
    rng: random.Random | None = None,
) -> TurnResult:
    """Play one swap request through to a resting board.

    Rejected requests leave the session untouched: a busy session, a level
    that is already decided or out of moves, cells off the board, cells that
    are not adjacent. A swap that makes no match only clears the selection.
    An accepted swap costs one move, runs the cascade, scores it, updates the
    objective counters and, if the final board is deadlocked, reshuffles it.
    """
    if session.processing:
        return TurnResult(TurnOutcome.BUSY, session)
    if session.moves_left <= 0 or session.status is not GameStatus.PLAYING:
        return TurnResult(TurnOutcome.LEVEL_OVER, session)
    if not (session.grid.in_bounds(a) and session.grid.in_bounds(b)):
        return TurnResult(TurnOutcome.OUT_OF_BOUNDS, session)
    if not are_adjacent(a, b):
        return TurnResult(TurnOutcome.NOT_ADJACENT, session)
    rng = rng or random.Random()
    swapped = swap_candies(session.grid, a, b)
    if not find_matches(swapped):
        return TurnResult(TurnOutcome.REVERTED, replace(session, selected=None), swapped_grid=swapped)

    cascade = Cascade(swapped, session.level, rng=rng)
    result = cascade.resolve()
    delta = score_for(result.matched_count, session.level)
    collected = _accumulate(session.collected, result.collected, session.objective.tracked_types)
    grid = result.grid
    moves_left = session.moves_left - 1

    reshuffled = False
    if session.objective.is_satisfied(grid, collected):
        outcome = TurnOutcome.LEVEL_COMPLETE
        status = GameStatus.LEVEL_COMPLETE
    else:
        if not has_valid_moves(grid):
            grid = randomize_board(grid, session.level, rng=rng)
            reshuffled = True
        if moves_left <= 0:
            outcome = TurnOutcome.LEVEL_FAILED
            status = GameStatus.LEVEL_FAILED
        else:
            outcome = TurnOutcome.CONTINUE
            status = GameStatus.PLAYING

    new_session = replace(
        session,
        grid=grid,
        score=session.score + delta,
        moves_left=moves_left,
        collected=collected,
        selected=None,
        status=status,
    )
    return TurnResult(
        outcome,
        new_session,
        swapped_grid=swapped,
        cascade=cascade,
        score_delta=delta,
        matched_count=result.matched_count,
        reshuffled=reshuffled,
    )
