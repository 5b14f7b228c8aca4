"""Cycle snapshot dataclass for the segregation CA simulation."""

from dataclasses import dataclass
from typing import Dict, List
import numpy as np

from .grid import CellKind, render_rows


@dataclass(frozen=True)
class CycleState:
    """Observation of the board after a given cycle."""
    cycle: int
    moves: int                   # relocations performed in this cycle
    happiness: float             # mean agent happiness in [0, 1]
    cells: np.ndarray            # copy of the board
    counts: Dict[CellKind, int]  # cells of each kind

    def rows(self) -> List[str]:
        """Board rendered as one string per row."""
        return render_rows(self.cells)

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "cycle": self.cycle,
            "moves": self.moves,
            "happiness": f"{self.happiness:f}",
            "vacant": self.counts[CellKind.VACANT],
            "endline": self.counts[CellKind.ENDLINE],
            "newline": self.counts[CellKind.NEWLINE],
        }
