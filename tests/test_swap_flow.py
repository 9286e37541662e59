import random
from dataclasses import replace

from candyline.components.objective import ClearBoard, CollectColors
from candyline.components.session import GameSession, GameStatus
from candyline.engine.cascade import CascadePhase
from candyline.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_HINT_OFFERED,
    EVENT_HINT_REQUEST,
    EVENT_LEVEL_FAILED,
    EVENT_MATCH_FOUND,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REJECTED,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from candyline.systems.board import BoardSystem
from candyline.systems.match_resolution import MatchResolutionSystem
from candyline.utils.session import get_session
from candyline.world import create_world
from tests.helpers import SWAP_FIXTURE, drive_ticks, grid_from, pos


def _setup(**overrides):
    session = GameSession(grid=grid_from(SWAP_FIXTURE), level=1, moves_left=20, objective=ClearBoard())
    session = replace(session, **overrides)
    bus = EventBus()
    world = create_world(bus, rng=random.Random(17), session=session)
    board = BoardSystem(world, bus)
    resolver = MatchResolutionSystem(world, bus, break_delay=0.0, fall_delay=0.0)
    return bus, world, board, resolver


def _record(bus, name):
    events = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events


def test_click_selects_and_second_click_deselects():
    bus, world, board, _ = _setup()
    selected = _record(bus, EVENT_TILE_SELECTED)
    deselected = _record(bus, EVENT_TILE_DESELECTED)
    bus.emit(EVENT_TILE_CLICK, row=1, col=1)
    assert board.selected == pos(1, 1)
    assert selected == [{'row': 1, 'col': 1}]
    bus.emit(EVENT_TILE_CLICK, row=1, col=1)
    assert board.selected is None
    assert deselected == [{'row': 1, 'col': 1}]


def test_selection_clears_on_swap_request():
    bus, world, board, _ = _setup()
    requests = _record(bus, EVENT_TILE_SWAP_REQUEST)
    bus.emit(EVENT_TILE_CLICK, row=2, col=0)
    assert board.selected == pos(2, 0)
    bus.emit(EVENT_TILE_CLICK, row=3, col=0)
    assert board.selected is None
    assert requests == [{'src': pos(2, 0), 'dst': pos(3, 0)}]


def test_invalid_swap_reverts():
    bus, world, board, resolver = _setup()
    invalid = _record(bus, EVENT_TILE_SWAP_INVALID)
    before = get_session(world)
    bus.emit(EVENT_TILE_CLICK, row=2, col=0)
    bus.emit(EVENT_TILE_CLICK, row=3, col=0)
    assert invalid and invalid[0]['src'] == pos(2, 0)
    after = get_session(world)
    assert after.grid.type_layout() == before.grid.type_layout()
    assert after.moves_left == before.moves_left
    assert not after.processing
    assert not resolver.busy


def test_valid_swap_plays_cascade_over_ticks():
    bus, world, board, resolver = _setup()
    valid = _record(bus, EVENT_TILE_SWAP_VALID)
    steps = _record(bus, EVENT_CASCADE_STEP)
    found = _record(bus, EVENT_MATCH_FOUND)
    complete = _record(bus, EVENT_CASCADE_COMPLETE)
    scores = _record(bus, EVENT_SCORE_CHANGED)

    bus.emit(EVENT_TILE_CLICK, row=0, col=2)
    bus.emit(EVENT_TILE_CLICK, row=0, col=3)
    assert valid, "Swap completing a run should be accepted"
    mid = get_session(world)
    assert mid.processing
    assert mid.moves_left == 19
    assert mid.grid.type_at(0, 2) == 'red'

    drive_ticks(bus, 1)
    assert steps and steps[0]['phase'] is CascadePhase.MATCHED
    assert found[0]['positions'] == [pos(0, 0), pos(0, 1), pos(0, 2)]
    assert get_session(world).grid.at(pos(0, 0)).matched

    drive_ticks(bus, 100)
    assert complete and complete[0]['depth'] >= 1
    assert complete[0]['matched'] >= 3
    final = get_session(world)
    assert not final.processing
    assert final.score == scores[-1]['score'] == complete[0]['matched'] * 10
    assert final.grid.is_full()
    assert not resolver.busy


def test_swap_rejected_while_cascade_in_progress():
    bus, world, board, resolver = _setup()
    rejected = _record(bus, EVENT_TILE_SWAP_REJECTED)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=pos(0, 2), dst=pos(0, 3))
    assert resolver.busy
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=pos(2, 0), dst=pos(3, 0))
    assert rejected == [{'src': pos(2, 0), 'dst': pos(3, 0), 'reason': 'busy'}]
    # Clicks are ignored outright while busy.
    bus.emit(EVENT_TILE_CLICK, row=1, col=1)
    assert board.selected is None
    assert get_session(world).moves_left == 19


def test_non_adjacent_request_rejected():
    bus, world, board, resolver = _setup()
    rejected = _record(bus, EVENT_TILE_SWAP_REJECTED)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=pos(0, 2), dst=pos(2, 2))
    assert rejected[0]['reason'] == 'not_adjacent'
    assert not resolver.busy


def test_last_move_emits_level_failed():
    bus, world, board, resolver = _setup(moves_left=1)
    failed = _record(bus, EVENT_LEVEL_FAILED)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=pos(0, 2), dst=pos(0, 3))
    drive_ticks(bus, 100)
    assert failed and failed[0]['level'] == 1
    assert get_session(world).status is GameStatus.LEVEL_FAILED
    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    assert board.selected is None, "No input once the level has failed"


def test_hint_request_offers_valid_swap():
    bus, world, board, _ = _setup()
    hints = _record(bus, EVENT_HINT_OFFERED)
    bus.emit(EVENT_HINT_REQUEST)
    assert hints == [{'src': pos(0, 2), 'dst': pos(0, 3)}]


def test_animated_tiles_are_the_committed_tiles():
    bus, world, board, resolver = _setup()
    steps = _record(bus, EVENT_CASCADE_STEP)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=pos(0, 2), dst=pos(0, 3))
    drive_ticks(bus, 100)
    last_shown = {tile.tile_id for tile in steps[-1]['grid'].tiles()}
    committed = {tile.tile_id for tile in get_session(world).grid.tiles()}
    assert last_shown == committed


def test_request_after_level_over_rejected():
    bus, world, board, resolver = _setup(moves_left=0, status=GameStatus.LEVEL_FAILED)
    rejected = _record(bus, EVENT_TILE_SWAP_REJECTED)
    before = get_session(world)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=pos(0, 2), dst=pos(0, 3))
    assert rejected == [{'src': pos(0, 2), 'dst': pos(0, 3), 'reason': 'level_over'}]
    assert not resolver.busy
    after = get_session(world)
    assert after.moves_left == 0
    assert after.score == before.score
    assert after.grid is before.grid
