"""Model package for the segregation CA simulation."""

from .grid import CellKind, Grid, render_rows
from .board import population_counts, populate_board, shuffle_board
from .happiness import cell_happiness, happiness_map, board_happiness
from .policy import Move, RelocationPolicy, AlternatingVacancyPolicy
from .state import CycleState
from .engine import step_board, SimulationEngine

__all__ = [
    'CellKind',
    'Grid',
    'render_rows',
    'population_counts',
    'populate_board',
    'shuffle_board',
    'cell_happiness',
    'happiness_map',
    'board_happiness',
    'Move',
    'RelocationPolicy',
    'AlternatingVacancyPolicy',
    'CycleState',
    'step_board',
    'SimulationEngine',
]
