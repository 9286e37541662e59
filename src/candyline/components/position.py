from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A (row, col) cell coordinate. Row 0 is the top of the board."""
    row: int
    col: int

    def neighbours(self) -> tuple['Position', 'Position']:
        """Right and bottom neighbours; the only swaps a scan needs to try."""
        return Position(self.row, self.col + 1), Position(self.row + 1, self.col)
