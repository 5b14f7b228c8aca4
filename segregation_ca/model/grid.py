"""Grid management for the segregation CA simulation."""

from enum import IntEnum
from typing import Dict, Iterable, List, Tuple
import numpy as np


class CellKind(IntEnum):
    """Possible contents of a cell."""
    VACANT = 0
    ENDLINE = 1
    NEWLINE = 2

    @property
    def symbol(self) -> str:
        return SYMBOLS[self]


SYMBOLS: Dict[CellKind, str] = {
    CellKind.VACANT: '.',
    CellKind.ENDLINE: 'e',
    CellKind.NEWLINE: 'n',
}

_KIND_BY_SYMBOL = {symbol: kind for kind, symbol in SYMBOLS.items()}


class Grid:
    """
    Square board holding one CellKind per cell.

    Coordinate convention: (row, col) for API and array indexing alike.
    Row-major linear index: row * dimension + col.
    """

    def __init__(self, dimension: int):
        self.dimension = dimension
        self.cells = np.full((dimension, dimension), CellKind.VACANT, dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "Grid":
        """Build a grid from rendered rows such as ``['.e', 'n.']``."""
        rows = list(rows)
        grid = cls(len(rows))
        for r, line in enumerate(rows):
            if len(line) != grid.dimension:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {grid.dimension}")
            for c, symbol in enumerate(line):
                grid.cells[r, c] = _KIND_BY_SYMBOL[symbol]
        return grid

    @property
    def total(self) -> int:
        return self.dimension * self.dimension

    def get(self, row: int, col: int) -> CellKind:
        return CellKind(int(self.cells[row, col]))

    def set(self, row: int, col: int, kind: CellKind) -> None:
        self.cells[row, col] = kind

    def copy(self) -> "Grid":
        """Return an independent copy of the board."""
        clone = Grid(self.dimension)
        clone.cells = self.cells.copy()
        return clone

    def move_agent(self, from_pos: Tuple[int, int], to_pos: Tuple[int, int]) -> None:
        """Move the occupant of from_pos into to_pos, leaving from_pos vacant."""
        self.cells[to_pos] = self.cells[from_pos]
        self.cells[from_pos] = CellKind.VACANT

    def counts(self) -> Dict[CellKind, int]:
        """Number of cells of each kind."""
        return {kind: int(np.count_nonzero(self.cells == kind)) for kind in CellKind}

    def __repr__(self) -> str:
        return f"Grid(dimension={self.dimension})"


def render_rows(cells: np.ndarray) -> List[str]:
    """Board rendered as one string of cell symbols per row."""
    return [
        ''.join(SYMBOLS[CellKind(int(v))] for v in row)
        for row in cells
    ]
