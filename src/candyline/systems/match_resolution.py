import random
from dataclasses import replace
from typing import Iterator, Optional

from esper import World

from candyline.constants import BREAK_DELAY, FALL_DELAY
from candyline.engine.cascade import CascadePhase, CascadeStep
from candyline.engine.turn import TurnOutcome, TurnResult, resolve_swap
from candyline.events.bus import (
    EventBus,
    EVENT_BOARD_RESHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_FAILED,
    EVENT_LEVEL_STARTED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_TICK,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REJECTED,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from candyline.utils.session import get_session, set_session

_REJECT_REASONS = {
    TurnOutcome.BUSY: "busy",
    TurnOutcome.LEVEL_OVER: "level_over",
    TurnOutcome.OUT_OF_BOUNDS: "out_of_bounds",
    TurnOutcome.NOT_ADJACENT: "not_adjacent",
}


class MatchResolutionSystem:
    """Resolves swap requests and plays the resulting cascade out over ticks.

    The engine settles the whole turn up front; this system then walks the
    cascade snapshots, holding each one on the session for ``break_delay`` or
    ``fall_delay`` seconds, and commits the final session once the last
    snapshot has been shown. The session stays ``processing`` meanwhile, so
    further swap requests are rejected rather than queued.
    """
    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        rng: Optional[random.Random] = None,
        break_delay: float = BREAK_DELAY,
        fall_delay: float = FALL_DELAY,
    ):
        self.world = world
        self.event_bus = event_bus
        self.random = rng or getattr(world, "random", None) or random.Random()
        self.break_delay = break_delay
        self.fall_delay = fall_delay
        self._pending: Optional[TurnResult] = None
        self._steps: Optional[Iterator[CascadeStep]] = None
        self._wait = 0.0
        self._depth = 0
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)

    @property
    def busy(self) -> bool:
        return self._pending is not None

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        session = get_session(self.world)
        result = resolve_swap(session, src, dst, rng=self.random)
        if result.outcome in _REJECT_REASONS:
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=src, dst=dst, reason=_REJECT_REASONS[result.outcome])
            return
        if result.outcome is TurnOutcome.REVERTED:
            set_session(self.world, result.session)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, grid=result.swapped_grid)
            return
        # Show the swapped board and charge the move while the cascade plays out.
        set_session(self.world, replace(
            session,
            grid=result.swapped_grid,
            moves_left=result.session.moves_left,
            selected=None,
            processing=True,
        ))
        self._pending = result
        self._steps = iter(result.cascade)
        self._wait = 0.0
        self._depth = 0
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst, grid=result.swapped_grid)

    def on_level_started(self, sender, **kwargs):
        # A fresh session replaced the one this cascade belongs to.
        self._pending = None
        self._steps = None

    def on_tick(self, sender, **kwargs):
        if self._pending is None:
            return
        self._wait -= kwargs.get('dt', 0.0)
        if self._wait > 0.0:
            return
        step = next(self._steps, None)
        if step is None:
            self._finish()
            return
        self._depth = step.depth
        set_session(self.world, replace(get_session(self.world), grid=step.grid))
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.depth, phase=step.phase, grid=step.grid)
        if step.phase is CascadePhase.MATCHED:
            positions = sorted(step.positions)
            self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, size=len(positions), depth=step.depth, grid=step.grid)
            self._wait = self.break_delay
        else:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, depth=step.depth, grid=step.grid)
            self._wait = self.fall_delay

    def _finish(self):
        result = self._pending
        self._pending = None
        self._steps = None
        session = replace(result.session, processing=False)
        set_session(self.world, session)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=self._depth, matched=result.matched_count)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=result.score_delta)
        if result.reshuffled:
            self.event_bus.emit(EVENT_BOARD_RESHUFFLED, grid=session.grid)
        if result.outcome is TurnOutcome.LEVEL_COMPLETE:
            self.event_bus.emit(EVENT_LEVEL_COMPLETE, level=session.level, score=session.score)
        elif result.outcome is TurnOutcome.LEVEL_FAILED:
            self.event_bus.emit(EVENT_LEVEL_FAILED, level=session.level, score=session.score)
