"""Summary report generation for the segregation CA simulation."""

from typing import Optional, TYPE_CHECKING
from pathlib import Path

from ..model.grid import CellKind

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..model.state import CycleState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config: "SimulationConfig", seed: int):
        self.config = config
        self.seed = seed
        self.total_moves = 0
        self.initial_happiness: Optional[float] = None
        self.peak_moves = 0
        self.settled_cycle: Optional[int] = None

    def update(self, state: "CycleState") -> None:
        """Accumulate metrics per cycle."""
        self.total_moves += state.moves

        if self.initial_happiness is None:
            self.initial_happiness = state.happiness

        if state.moves > self.peak_moves:
            self.peak_moves = state.moves

        # First stepped cycle in which nobody moved
        if state.cycle > 0 and state.moves == 0 and self.settled_cycle is None:
            self.settled_cycle = state.cycle

    def generate_summary(self, final_state: "CycleState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        counts = final_state.counts
        initial = self.initial_happiness if self.initial_happiness is not None else 0.0
        settled = (f"cycle {self.settled_cycle}" if self.settled_cycle is not None
                   else "not reached")

        # Build report
        lines = [
            "",
            "=" * 80,
            "                    SEGREGATION CA SIMULATION REPORT",
            "=" * 80,
            f"Board: {self.config.dimension}x{self.config.dimension}, "
            f"strength {self.config.strength}%, vacancy {self.config.vacancy}%, "
            f"endline {self.config.endline}%",
            f"Random Seed: {self.seed}",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Cycles:          {final_state.cycle}",
            f"Total Moves:           {self.total_moves}",
            f"Peak Moves per Cycle:  {self.peak_moves}",
            f"Happiness:             {initial:.4f} -> {final_state.happiness:.4f}",
            f"Settled:               {settled}",
            f"Population:            {counts[CellKind.ENDLINE]} endline, "
            f"{counts[CellKind.NEWLINE]} newline, {counts[CellKind.VACANT]} vacant",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'cycle_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
