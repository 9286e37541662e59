"""Level transitions and restarts."""
from __future__ import annotations

import logging
import random

from esper import World

from candyline.components.session import GameSession
from candyline.engine.turn import advance_level, reset_game
from candyline.events.bus import (
    EVENT_GAME_RESTART_REQUEST,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_STARTED,
    EventBus,
)
from candyline.utils.session import get_session, set_session

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Starts the next level after a win and resets the game on request.

    With ``auto_advance`` off, a completed level waits for an explicit
    ``advance()`` call (e.g. after the front-end's "level up" dialog).
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: random.Random | None = None,
        auto_advance: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.auto_advance = auto_advance
        self.event_bus.subscribe(EVENT_LEVEL_COMPLETE, self._on_level_complete)
        self.event_bus.subscribe(EVENT_GAME_RESTART_REQUEST, self._on_restart)

    def _on_level_complete(self, sender, **payload) -> None:
        if self.auto_advance:
            self.advance()

    def _on_restart(self, sender, **payload) -> None:
        logger.info("Restarting from level 1")
        self._begin(reset_game(rng=self._rng))

    def advance(self) -> None:
        current = get_session(self.world)
        logger.info("Level %d complete with score %d", current.level, current.score)
        self._begin(advance_level(current, rng=self._rng))

    def _begin(self, session: GameSession) -> None:
        set_session(self.world, session)
        self.event_bus.emit(
            EVENT_LEVEL_STARTED,
            level=session.level,
            moves=session.moves_left,
            objective=session.objective,
        )
