"""Simulation engine for the segregation CA."""

import logging
import time
import numpy as np
from typing import Dict, Iterator, Optional, TYPE_CHECKING

from .grid import Grid
from .board import populate_board, shuffle_board
from .happiness import board_happiness
from .policy import RelocationPolicy, AlternatingVacancyPolicy
from .state import CycleState

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


def step_board(grid: Grid, threshold: int,
               policy: Optional[RelocationPolicy] = None) -> int:
    """
    Advance the grid one cycle in place and return the number of moves.

    Every agent is judged against a snapshot taken before any move, so an
    agent that already moved this cycle is not evaluated again.
    """
    if policy is None:
        policy = AlternatingVacancyPolicy()

    snapshot = grid.copy()
    moves = 0
    for move in policy.moves(snapshot, grid, threshold):
        grid.move_agent(move.source, move.destination)
        moves += 1
    return moves


class SimulationEngine:
    """
    Orchestrates the discrete-time simulation loop.

    Implements:
    1. Board population and shuffle
    2. Cycle stepping through a relocation policy
    3. Cycle observation generation
    """

    def __init__(self, config: "SimulationConfig",
                 policy: Optional[RelocationPolicy] = None):
        self.config = config
        self.policy = policy or AlternatingVacancyPolicy()
        self.current_cycle = 0
        self.last_moves = 0
        self.total_moves = 0

        # Initialize board
        self.grid = Grid(config.dimension)
        populate_board(self.grid, config.vacancy, config.endline)

        # Seed from wall-clock time unless pinned, and keep it for reproduction
        self.seed = config.seed if config.seed is not None else time.time_ns()
        self.rng = np.random.default_rng(self.seed)
        shuffle_board(self.grid, self.rng)
        logger.debug("Board %dx%d shuffled with seed %d",
                     config.dimension, config.dimension, self.seed)

        self.happiness = board_happiness(self.grid)

    def step(self) -> CycleState:
        """Execute one cycle and return the resulting observation."""
        self.current_cycle += 1
        self.last_moves = step_board(self.grid, self.config.strength, self.policy)
        self.total_moves += self.last_moves
        self.happiness = board_happiness(self.grid)
        logger.debug("Cycle %d: %d moves, happiness %f",
                     self.current_cycle, self.last_moves, self.happiness)
        return self.state()

    def state(self) -> CycleState:
        """Create immutable snapshot of the current cycle."""
        return CycleState(
            cycle=self.current_cycle,
            moves=self.last_moves,
            happiness=self.happiness,
            cells=self.grid.cells.copy(),
            counts=self.grid.counts()
        )

    def run(self, cycles: Optional[int] = None) -> Iterator[CycleState]:
        """
        Yield the current state, then the state after each further cycle.

        With cycles=None the iteration never ends.
        """
        yield self.state()
        while cycles is None or self.current_cycle < cycles:
            yield self.step()

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_cycles': self.current_cycle,
            'total_moves': self.total_moves,
            'happiness': self.happiness,
            'seed': self.seed,
        }
