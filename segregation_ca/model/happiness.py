"""Per-agent and board-wide happiness for the segregation CA simulation."""

from typing import List, Tuple
import numpy as np
from scipy.ndimage import convolve

from .grid import Grid, CellKind


# Moore neighborhood (8-connected), row-major
MOORE_OFFSETS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1)
]

_MOORE_KERNEL = np.array([
    [1, 1, 1],
    [1, 0, 1],
    [1, 1, 1]
], dtype=np.int32)


def neighbor_positions(dimension: int, row: int, col: int) -> List[Tuple[int, int]]:
    """Moore neighbors of (row, col) clipped to the board. No wrap-around."""
    neighbors = []
    for dr, dc in MOORE_OFFSETS:
        nr, nc = row + dr, col + dc
        if 0 <= nr < dimension and 0 <= nc < dimension:
            neighbors.append((nr, nc))
    return neighbors


def cell_happiness(grid: Grid, row: int, col: int) -> float:
    """
    Percentage of occupied neighbors that share the agent's kind.

    An agent with no occupied neighbors is fully happy (100.0).
    Undefined for vacant cells.
    """
    kind = grid.cells[row, col]
    same = 0
    occupied = 0

    for nr, nc in neighbor_positions(grid.dimension, row, col):
        neighbor = grid.cells[nr, nc]
        if neighbor == CellKind.VACANT:
            continue
        occupied += 1
        if neighbor == kind:
            same += 1

    if occupied == 0:
        return 100.0
    return (same / occupied) * 100.0


def happiness_map(grid: Grid) -> np.ndarray:
    """
    Happiness of every cell at once, NaN for vacant cells.

    Neighbor counts come from a 3x3 convolution with zero padding, so
    border cells see only their in-board neighbors. Values match
    cell_happiness exactly.
    """
    cells = grid.cells
    vacant = cells == CellKind.VACANT

    occupied = convolve((~vacant).astype(np.int32), _MOORE_KERNEL,
                        mode='constant', cval=0)

    same = np.zeros(cells.shape, dtype=np.int32)
    for kind in (CellKind.ENDLINE, CellKind.NEWLINE):
        mask = cells == kind
        kind_count = convolve(mask.astype(np.int32), _MOORE_KERNEL,
                              mode='constant', cval=0)
        same[mask] = kind_count[mask]

    happiness = np.full(cells.shape, 100.0)
    has_neighbors = occupied > 0
    happiness[has_neighbors] = (same[has_neighbors] / occupied[has_neighbors]) * 100.0
    happiness[vacant] = np.nan
    return happiness


def board_happiness(grid: Grid) -> float:
    """
    Mean agent happiness normalized to [0, 1].

    Summed in row-major order. Returns NaN for a board with no agents.
    """
    values = happiness_map(grid)[grid.cells != CellKind.VACANT].tolist()
    if not values:
        return float('nan')
    total = 0.0
    for value in values:
        total += value
    return (total / len(values)) / 100.0
