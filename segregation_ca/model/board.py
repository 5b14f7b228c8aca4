"""Board initialization: canonical population and Fisher-Yates shuffle."""

from typing import Tuple
import numpy as np

from .grid import Grid, CellKind


def population_counts(dimension: int, vacancy: int, endline: int) -> Tuple[int, int, int]:
    """
    Return (num_vacant, num_endline, num_newline) for a board.

    Vacancy is a percentage of all cells; endline is a percentage of the
    cells left after vacancies. Both are truncated toward zero.
    """
    total = dimension * dimension
    num_vacant = total * vacancy // 100
    num_endline = (total - num_vacant) * endline // 100
    num_newline = total - num_vacant - num_endline
    return num_vacant, num_endline, num_newline


def populate_board(grid: Grid, vacancy: int, endline: int) -> None:
    """
    Fill the grid in row-major order: vacancies, then endline agents,
    then newline agents. No randomness.
    """
    num_vacant, num_endline, _ = population_counts(grid.dimension, vacancy, endline)

    flat = grid.cells.reshape(-1)
    flat[:num_vacant] = CellKind.VACANT
    flat[num_vacant:num_vacant + num_endline] = CellKind.ENDLINE
    flat[num_vacant + num_endline:] = CellKind.NEWLINE


def shuffle_board(grid: Grid, rng: np.random.Generator, full: bool = False) -> None:
    """
    Permute the cells in place with a Fisher-Yates pass over the linear index.

    By default the pass stops two short of the last cell, so index
    total - 2 is never used as i.
    Pass full=True for the textbook total - 1 bound.
    """
    dim = grid.dimension
    total = grid.total
    stop = total - 1 if full else total - 2

    for i in range(stop):
        j = int(rng.integers(i, total))
        r1, c1 = divmod(i, dim)
        r2, c2 = divmod(j, dim)
        grid.cells[r1, c1], grid.cells[r2, c2] = grid.cells[r2, c2], grid.cells[r1, c1]
