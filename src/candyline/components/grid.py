from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from candyline.components.position import Position
from candyline.components.tile import Tile, new_tile_id

Cells = Tuple[Tuple[Optional[Tile], ...], ...]


@dataclass(frozen=True, slots=True)
class Grid:
    """Immutable rows x cols arrangement of tiles.

    Cells may be ``None`` only between removal and refill. Transforms never
    touch an existing Grid; they build a new one through ``with_cells``.
    """
    cells: Cells

    def __post_init__(self) -> None:
        if not self.cells or not self.cells[0]:
            raise ValueError("Grid needs at least one row and one column")
        width = len(self.cells[0])
        if any(len(row) != width for row in self.cells):
            raise ValueError("Grid rows must all have the same length")

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Optional[Tile]]]) -> Grid:
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def from_types(cls, layout: Sequence[Sequence[Optional[str]]]) -> Grid:
        """Build a grid from type names, ``None`` marking an empty cell."""
        rows: List[List[Optional[Tile]]] = []
        for r, names in enumerate(layout):
            row: List[Optional[Tile]] = []
            for c, name in enumerate(names):
                row.append(None if name is None else Tile(type_name=name, tile_id=new_tile_id(), row=r, col=c))
            rows.append(row)
        return cls.from_rows(rows)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.rows and 0 <= pos.col < self.cols

    def at(self, pos: Position) -> Optional[Tile]:
        return self.cells[pos.row][pos.col]

    def type_at(self, row: int, col: int) -> Optional[str]:
        tile = self.cells[row][col]
        return tile.type_name if tile is not None else None

    def positions(self) -> Iterator[Position]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield Position(r, c)

    def tiles(self) -> Iterator[Tile]:
        for row in self.cells:
            for tile in row:
                if tile is not None:
                    yield tile

    def occupied_count(self) -> int:
        return sum(1 for _ in self.tiles())

    def is_full(self) -> bool:
        return all(tile is not None for row in self.cells for tile in row)

    def is_empty(self) -> bool:
        return self.occupied_count() == 0

    def type_layout(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        return tuple(tuple(self.type_at(r, c) for c in range(self.cols)) for r in range(self.rows))

    def type_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for tile in self.tiles():
            counts[tile.type_name] = counts.get(tile.type_name, 0) + 1
        return counts

    def mutable_cells(self) -> List[List[Optional[Tile]]]:
        """Scratch copy of the cell matrix for building a successor grid."""
        return [list(row) for row in self.cells]

    def with_cells(self, cells: Iterable[Iterable[Optional[Tile]]]) -> Grid:
        return Grid.from_rows(cells)
