from dataclasses import dataclass, replace
from itertools import count

_ids = count(1)


def new_tile_id() -> str:
    """Process-unique tile identifier."""
    return f"t{next(_ids)}"


@dataclass(frozen=True, slots=True)
class Tile:
    """A typed playing piece sitting in one grid cell.

    ``tile_id`` survives swaps and falls so front-ends can correlate sprites
    between snapshots. Relocation returns a new value; ``row``/``col`` always
    describe the cell that stores this exact instance.
    """
    type_name: str
    tile_id: str
    row: int
    col: int
    matched: bool = False
    falling: bool = False

    def moved_to(self, row: int, col: int) -> 'Tile':
        if row == self.row and col == self.col:
            return self
        return replace(self, row=row, col=col)

    def marked(self) -> 'Tile':
        return replace(self, matched=True)
