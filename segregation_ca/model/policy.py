"""Relocation policies deciding which agents move where during a cycle."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .grid import Grid, CellKind
from .happiness import happiness_map


@dataclass(frozen=True)
class Move:
    """One relocation: the agent at source moves into destination."""
    source: Tuple[int, int]
    destination: Tuple[int, int]


class RelocationPolicy(ABC):
    """
    Produces the moves of one cycle.

    The caller applies each yielded move to ``grid`` before resuming the
    iterator, so later decisions in the same cycle see earlier moves.
    ``snapshot`` is the frozen start-of-cycle board and must not change.
    """

    @abstractmethod
    def moves(self, snapshot: Grid, grid: Grid, threshold: int) -> Iterator[Move]:
        ...


class AlternatingVacancyPolicy(RelocationPolicy):
    """
    Unhappy agents move to the first free vacancy, alternating scan direction.

    Agents are visited in row-major order and judged on the snapshot. A
    destination must be vacant in the snapshot and still vacant in the live
    grid. The first successful move of a cycle scans from the last cell
    backward; each successful move flips the direction.
    """

    def moves(self, snapshot: Grid, grid: Grid, threshold: int) -> Iterator[Move]:
        happiness = happiness_map(snapshot)
        vacancies = [
            (r, c)
            for r in range(snapshot.dimension)
            for c in range(snapshot.dimension)
            if snapshot.cells[r, c] == CellKind.VACANT
        ]
        forward = False

        for row in range(snapshot.dimension):
            for col in range(snapshot.dimension):
                kind = snapshot.cells[row, col]
                if kind == CellKind.VACANT or grid.cells[row, col] != kind:
                    continue
                if happiness[row, col] >= threshold:
                    continue

                destination = self._find_vacancy(vacancies, grid, forward)
                if destination is None:
                    continue

                yield Move(source=(row, col), destination=destination)
                forward = not forward

    @staticmethod
    def _find_vacancy(vacancies: List[Tuple[int, int]], grid: Grid,
                      forward: bool) -> Optional[Tuple[int, int]]:
        """First start-of-cycle vacancy still empty in the live grid."""
        candidates = vacancies if forward else reversed(vacancies)
        for pos in candidates:
            if grid.cells[pos] == CellKind.VACANT:
                return pos
        return None
