"""Tests for segregation_ca.model.board module."""

from __future__ import annotations

from typing import List

import numpy as np

from segregation_ca.model.board import population_counts, populate_board, shuffle_board
from segregation_ca.model.grid import CellKind, Grid, render_rows


class _RecordingRng:
    """Stand-in generator that never swaps and records each requested range."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def integers(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return low


class TestPopulationCounts:
    def test_ten_by_ten(self) -> None:
        assert population_counts(10, 20, 60) == (20, 48, 32)

    def test_truncates_toward_zero(self) -> None:
        # 25 * 33 / 100 = 8.25, then 17 * 50 / 100 = 8.5
        assert population_counts(5, 33, 50) == (8, 8, 9)

    def test_counts_sum_to_total(self) -> None:
        for dim in (5, 15, 39):
            for vacancy in (1, 37, 99):
                for endline in (1, 50, 99):
                    assert sum(population_counts(dim, vacancy, endline)) == dim * dim


class TestPopulateBoard:
    def test_canonical_layout(self) -> None:
        grid = Grid(10)
        populate_board(grid, 20, 60)
        rows = render_rows(grid.cells)
        assert rows[0] == ".........."
        assert rows[1] == ".........."
        assert rows[2] == "eeeeeeeeee"
        assert rows[6] == "eeeeeeeenn"
        assert rows[9] == "nnnnnnnnnn"
        assert "".join(rows) == "." * 20 + "e" * 48 + "n" * 32

    def test_counts_match_formula(self) -> None:
        grid = Grid(15)
        populate_board(grid, 20, 60)
        counts = grid.counts()
        assert counts[CellKind.VACANT] == 45
        assert counts[CellKind.ENDLINE] == 108
        assert counts[CellKind.NEWLINE] == 72


class TestShuffleBoard:
    def test_preserves_multiset(self) -> None:
        grid = Grid(10)
        populate_board(grid, 20, 60)
        before = grid.counts()
        shuffle_board(grid, np.random.default_rng(3))
        assert grid.counts() == before

    def test_same_seed_same_permutation(self) -> None:
        first, second = Grid(12), Grid(12)
        for grid in (first, second):
            populate_board(grid, 30, 40)
            shuffle_board(grid, np.random.default_rng(99))
        assert np.array_equal(first.cells, second.cells)

    def test_default_bound_stops_two_short(self) -> None:
        grid = Grid(5)
        populate_board(grid, 20, 60)
        rng = _RecordingRng()
        shuffle_board(grid, rng)
        assert [low for low, _ in rng.calls] == list(range(23))
        assert all(high == 25 for _, high in rng.calls)

    def test_full_bound(self) -> None:
        grid = Grid(5)
        rng = _RecordingRng()
        shuffle_board(grid, rng, full=True)
        assert [low for low, _ in rng.calls] == list(range(24))

    def test_identity_draws_leave_board_unchanged(self) -> None:
        grid = Grid(5)
        populate_board(grid, 20, 60)
        expected = grid.cells.copy()
        shuffle_board(grid, _RecordingRng())
        assert np.array_equal(grid.cells, expected)
