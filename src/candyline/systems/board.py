from esper import World

from candyline.components.position import Position
from candyline.engine.moves import find_hint
from candyline.engine.turn import SelectionAction, select_tile
from candyline.events.bus import (
    EventBus,
    EVENT_HINT_OFFERED,
    EVENT_HINT_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from candyline.utils.session import get_session, set_session


class BoardSystem:
    """Turns tile clicks into selections and swap requests.

    First click selects, clicking the same tile again deselects, an adjacent
    click requests a swap, and any other click moves the selection.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    @property
    def selected(self) -> Position | None:
        return get_session(self.world).selected

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        previous = get_session(self.world).selected
        selection = select_tile(get_session(self.world), Position(row, col))
        if selection.action is SelectionAction.IGNORED:
            return
        set_session(self.world, selection.session)
        if selection.action is SelectionAction.SELECTED:
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
        elif selection.action is SelectionAction.DESELECTED:
            self.event_bus.emit(EVENT_TILE_DESELECTED, row=previous.row, col=previous.col)
        else:
            src, dst = selection.swap
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)

    def on_hint_request(self, sender, **kwargs):
        session = get_session(self.world)
        hint = None if session.processing else find_hint(session.grid)
        src, dst = hint if hint else (None, None)
        self.event_bus.emit(EVENT_HINT_OFFERED, src=src, dst=dst)
