"""Match -> clear -> refill loop triggered by one accepted swap."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Tuple

from candyline.components.grid import Grid
from candyline.components.position import Position
from candyline.constants import MAX_CASCADE_ITERATIONS, POINTS_PER_TILE
from candyline.engine.gravity import apply_gravity, mark_matches, remove_matches
from candyline.engine.matching import find_matches

logger = logging.getLogger(__name__)


class CascadePhase(Enum):
    MATCHED = "matched"   # matched tiles flagged, still on the board
    SETTLED = "settled"   # matched tiles removed, columns dropped and refilled


@dataclass(frozen=True, slots=True)
class CascadeStep:
    depth: int
    phase: CascadePhase
    grid: Grid
    positions: FrozenSet[Position]
    types: Tuple[str, ...] = ()


@dataclass(slots=True)
class CascadeResult:
    grid: Grid
    matched_count: int = 0
    collected: Dict[str, int] = field(default_factory=dict)
    iterations: int = 0
    capped: bool = False
    steps: List[CascadeStep] = field(default_factory=list)


def score_for(matched_count: int, level: int) -> int:
    return matched_count * POINTS_PER_TILE * level


class Cascade:
    """Lazy, restartable sequence of snapshots for one cascade.

    Refills draw from a seed taken from ``rng`` once at construction. Steps
    are computed on demand and kept, so a second pass (or ``resolve`` after
    the steps were animated) yields the very same grids, refilled tile ids
    included.
    """

    def __init__(
        self,
        grid: Grid,
        level: int,
        *,
        rng: random.Random | None = None,
        max_iterations: int = MAX_CASCADE_ITERATIONS,
    ) -> None:
        self.grid = grid
        self.level = level
        self.max_iterations = max_iterations
        self._seed = (rng or random.Random()).getrandbits(64)
        self._steps: List[CascadeStep] = []
        self._source = self._run()

    def _run(self) -> Iterator[CascadeStep]:
        rng = random.Random(self._seed)
        grid = self.grid
        matches = find_matches(grid)
        depth = 0
        while matches and depth < self.max_iterations:
            depth += 1
            frozen = frozenset(matches)
            marked = mark_matches(grid, matches)
            types = tuple(marked.at(pos).type_name for pos in sorted(frozen))
            yield CascadeStep(depth, CascadePhase.MATCHED, marked, frozen, types)
            grid = apply_gravity(remove_matches(marked, matches), self.level, rng=rng)
            yield CascadeStep(depth, CascadePhase.SETTLED, grid, frozen, types)
            matches = find_matches(grid)
        if matches:
            logger.debug("Cascade stopped at the %d-iteration cap with %d tiles still matched", depth, len(matches))

    def __iter__(self) -> Iterator[CascadeStep]:
        index = 0
        while True:
            if index == len(self._steps):
                step = next(self._source, None)
                if step is None:
                    return
                self._steps.append(step)
            yield self._steps[index]
            index += 1

    def resolve(self) -> CascadeResult:
        result = CascadeResult(grid=self.grid)
        for step in self:
            result.steps.append(step)
            if step.phase is CascadePhase.MATCHED:
                result.iterations = step.depth
                result.matched_count += len(step.positions)
                for name in step.types:
                    result.collected[name] = result.collected.get(name, 0) + 1
            else:
                result.grid = step.grid
        result.capped = result.iterations >= self.max_iterations and bool(find_matches(result.grid))
        return result
