"""Level win conditions."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple, Union

from candyline.components.grid import Grid


@dataclass(frozen=True, slots=True)
class ClearBoard:
    """Won once the grid holds no tiles at all."""

    @property
    def tracked_types(self) -> Tuple[str, ...]:
        return ()

    def is_satisfied(self, grid: Grid, collected: Mapping[str, int]) -> bool:
        return grid.is_empty()


@dataclass(frozen=True, slots=True)
class CollectColors:
    """Won once every required type has been cleared ``targets[type]`` times."""
    targets: Mapping[str, int] = field(default_factory=dict)

    @property
    def tracked_types(self) -> Tuple[str, ...]:
        return tuple(self.targets)

    def is_satisfied(self, grid: Grid, collected: Mapping[str, int]) -> bool:
        return all(collected.get(name, 0) >= target for name, target in self.targets.items())


Objective = Union[ClearBoard, CollectColors]
