from esper import World

from candyline.components.session import GameSession


def session_entity(world: World) -> int:
    for entity, _ in world.get_component(GameSession):
        return entity
    raise RuntimeError("GameSession not found")


def get_session(world: World) -> GameSession:
    return world.component_for_entity(session_entity(world), GameSession)


def set_session(world: World, session: GameSession) -> None:
    """Replace the session component wholesale."""
    world.add_component(session_entity(world), session)
