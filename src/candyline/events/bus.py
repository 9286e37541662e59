from blinker import Signal
from typing import Callable, Dict


class EventBus:
    """Named blinker signals shared by the systems of one world.

    Receivers get the bus as ``sender`` and the payload as keyword arguments.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable) -> None:
        # Held strongly: systems are often constructed without being stored.
        self._signals.setdefault(name, Signal(name)).connect(fn, weak=False)

    def emit(self, name: str, **payload) -> None:
        signal = self._signals.get(name)
        if signal is not None:
            signal.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: row, col
EVENT_HINT_REQUEST = "hint_request"                # payload: none
EVENT_HINT_OFFERED = "hint_offered"                # payload: src=Position|None, dst=Position|None


# ============================================================================
# SWAPS & CASCADES
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=Position, dst=Position
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src, dst, grid=Grid
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src, dst, grid=Grid (swapped, before revert)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src, dst, reason=str
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[Position,...], size=int, depth=int, grid=Grid
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: depth=int, grid=Grid
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, phase=CascadePhase, grid=Grid
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, matched=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_BOARD_RESHUFFLED = "board_reshuffled"        # payload: grid=Grid


# ============================================================================
# GAME FLOW
# ============================================================================
EVENT_LEVEL_STARTED = "level_started"              # payload: level=int, moves=int, objective=Objective
EVENT_LEVEL_COMPLETE = "level_complete"            # payload: level=int, score=int
EVENT_LEVEL_FAILED = "level_failed"                # payload: level=int, score=int
EVENT_GAME_RESTART_REQUEST = "game_restart_request"  # payload: none
