"""Game session resource describing one level attempt."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional

from candyline.components.grid import Grid
from candyline.components.objective import ClearBoard, Objective
from candyline.components.position import Position


class GameStatus(Enum):
    """Where the current level attempt stands."""
    PLAYING = auto()
    LEVEL_COMPLETE = auto()
    LEVEL_FAILED = auto()


@dataclass(slots=True)
class GameSession:
    """Singleton component holding everything a front-end needs to draw and play.

    Engine functions treat it as a value: they return a replacement built with
    ``dataclasses.replace`` instead of editing fields in place.
    """
    grid: Grid
    level: int = 1
    score: int = 0
    moves_left: int = 0
    objective: Objective = field(default_factory=ClearBoard)
    collected: Dict[str, int] = field(default_factory=dict)
    selected: Optional[Position] = None
    processing: bool = False
    status: GameStatus = GameStatus.PLAYING

    @property
    def accepts_input(self) -> bool:
        return not self.processing and self.moves_left > 0 and self.status is GameStatus.PLAYING
