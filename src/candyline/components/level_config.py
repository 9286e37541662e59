from dataclasses import dataclass

from candyline.components.objective import Objective


@dataclass(frozen=True, slots=True)
class BoardSize:
    rows: int
    cols: int

    @property
    def cells(self) -> int:
        return self.rows * self.cols


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Parameters for one level attempt, derived from the level number alone."""
    level: int
    moves: int
    board_size: BoardSize
    objective: Objective
