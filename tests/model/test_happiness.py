"""Tests for segregation_ca.model.happiness module."""

from __future__ import annotations

import math

import numpy as np
import pytest

from segregation_ca.model.board import populate_board, shuffle_board
from segregation_ca.model.grid import CellKind, Grid
from segregation_ca.model.happiness import (
    board_happiness,
    cell_happiness,
    happiness_map,
    neighbor_positions,
)


class TestNeighborPositions:
    def test_corner_has_three(self) -> None:
        assert len(neighbor_positions(5, 0, 0)) == 3
        assert len(neighbor_positions(5, 4, 4)) == 3

    def test_edge_has_five(self) -> None:
        assert len(neighbor_positions(5, 0, 2)) == 5
        assert len(neighbor_positions(5, 2, 4)) == 5

    def test_interior_has_eight(self) -> None:
        assert len(neighbor_positions(5, 2, 2)) == 8

    def test_no_wrap_around(self) -> None:
        assert (4, 4) not in neighbor_positions(5, 0, 0)
        assert (0, 4) not in neighbor_positions(5, 0, 0)


class TestCellHappiness:
    def test_isolated_agent_is_fully_happy(self) -> None:
        grid = Grid.from_rows([".....", ".....", "..e..", ".....", "....."])
        assert cell_happiness(grid, 2, 2) == 100.0
        assert board_happiness(grid) == 1.0

    def test_surrounded_by_other_kind(self) -> None:
        grid = Grid.from_rows(["en...", "nn...", ".....", ".....", "....."])
        assert cell_happiness(grid, 0, 0) == 0.0

    def test_vacant_neighbors_ignored(self) -> None:
        grid = Grid.from_rows(["en...", "nn...", ".....", ".....", "....."])
        # (0, 1) sees e, n, n among five in-board neighbors
        assert cell_happiness(grid, 0, 1) == pytest.approx(200.0 / 3.0)

    def test_does_not_modify_grid(self) -> None:
        grid = Grid.from_rows(["en...", "nn...", ".....", ".....", "....."])
        before = grid.cells.copy()
        cell_happiness(grid, 0, 0)
        happiness_map(grid)
        assert np.array_equal(grid.cells, before)


class TestHappinessMap:
    def test_matches_cell_happiness(self) -> None:
        grid = Grid(12)
        populate_board(grid, 25, 55)
        shuffle_board(grid, np.random.default_rng(11))
        hmap = happiness_map(grid)
        for r in range(grid.dimension):
            for c in range(grid.dimension):
                if grid.get(r, c) is CellKind.VACANT:
                    assert math.isnan(hmap[r, c])
                else:
                    assert hmap[r, c] == cell_happiness(grid, r, c)


class TestBoardHappiness:
    def test_mean_of_agents(self) -> None:
        grid = Grid.from_rows(["en...", "nn...", ".....", ".....", "....."])
        # e: 0, each n: 2/3 of its occupied neighbors
        assert board_happiness(grid) == pytest.approx(0.5)

    def test_range_on_random_boards(self) -> None:
        for seed in range(5):
            grid = Grid(15)
            populate_board(grid, 20, 60)
            shuffle_board(grid, np.random.default_rng(seed))
            assert 0.0 <= board_happiness(grid) <= 1.0

    def test_single_kind_is_one(self) -> None:
        grid = Grid.from_rows(["ee.ee", "eeeee", ".e.e.", "eeeee", "ee.ee"])
        assert board_happiness(grid) == 1.0

    def test_empty_board_is_nan(self) -> None:
        assert math.isnan(board_happiness(Grid(5)))
