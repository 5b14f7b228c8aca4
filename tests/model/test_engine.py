"""Tests for segregation_ca.model.engine module."""

from __future__ import annotations

import numpy as np

from segregation_ca.config import SimulationConfig
from segregation_ca.model.engine import SimulationEngine
from segregation_ca.model.grid import CellKind


class TestSimulationEngineInit:
    def test_initial_counts_follow_config(self) -> None:
        config = SimulationConfig(dimension=10, vacancy=20, endline=60, seed=1)
        engine = SimulationEngine(config)
        counts = engine.grid.counts()
        assert counts[CellKind.VACANT] == 20
        assert counts[CellKind.ENDLINE] == 48
        assert counts[CellKind.NEWLINE] == 32

    def test_cycle_zero_has_no_moves(self) -> None:
        engine = SimulationEngine(SimulationConfig(seed=5))
        state = engine.state()
        assert state.cycle == 0
        assert state.moves == 0
        assert 0.0 <= state.happiness <= 1.0

    def test_seed_taken_from_clock_when_unset(self) -> None:
        engine = SimulationEngine(SimulationConfig())
        assert isinstance(engine.seed, int)

    def test_explicit_seed_recorded(self) -> None:
        engine = SimulationEngine(SimulationConfig(seed=1234))
        assert engine.seed == 1234


class TestSimulationEngineRun:
    def test_run_yields_cycles_inclusive(self) -> None:
        engine = SimulationEngine(SimulationConfig(dimension=8, seed=2))
        cycles = [state.cycle for state in engine.run(3)]
        assert cycles == [0, 1, 2, 3]

    def test_run_zero_cycles_yields_initial_state(self) -> None:
        engine = SimulationEngine(SimulationConfig(dimension=8, seed=2))
        states = list(engine.run(0))
        assert len(states) == 1
        assert states[0].moves == 0

    def test_same_seed_reproduces_run(self) -> None:
        config = SimulationConfig(dimension=12, strength=60, seed=77)
        first = [s for s in SimulationEngine(config).run(10)]
        second = [s for s in SimulationEngine(config).run(10)]
        for a, b in zip(first, second):
            assert np.array_equal(a.cells, b.cells)
            assert a.moves == b.moves
            assert a.happiness == b.happiness

    def test_state_is_a_copy(self) -> None:
        engine = SimulationEngine(SimulationConfig(dimension=8, strength=90, seed=3))
        state = engine.state()
        before = state.cells.copy()
        engine.step()
        assert np.array_equal(state.cells, before)

    def test_conservation_over_long_run(self) -> None:
        config = SimulationConfig(dimension=10, strength=70, vacancy=15, endline=45, seed=8)
        engine = SimulationEngine(config)
        initial = engine.grid.counts()
        for _ in range(1000):
            state = engine.step()
            assert state.counts == initial
            assert 0.0 <= state.happiness <= 1.0

    def test_summary_totals_moves(self) -> None:
        engine = SimulationEngine(SimulationConfig(dimension=10, strength=80, seed=4))
        moves = sum(engine.step().moves for _ in range(5))
        summary = engine.get_summary()
        assert summary['total_cycles'] == 5
        assert summary['total_moves'] == moves
        assert summary['seed'] == 4
