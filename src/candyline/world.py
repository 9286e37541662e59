import random

from esper import World

from candyline.components.session import GameSession
from candyline.constants import STARTING_LEVEL
from candyline.engine.turn import start_level
from candyline.events.bus import EventBus, EVENT_LEVEL_STARTED


def create_world(
    event_bus: EventBus,
    *,
    level: int = STARTING_LEVEL,
    rng: random.Random | None = None,
    session: GameSession | None = None,
) -> World:
    """Create the ECS world with a single entity carrying the GameSession.

    ``session`` lets tests inject a hand-built board instead of a generated one.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    if session is None:
        session = start_level(level, rng=world.random)
    world.create_entity(session)
    event_bus.emit(
        EVENT_LEVEL_STARTED,
        level=session.level,
        moves=session.moves_left,
        objective=session.objective,
    )
    return world
