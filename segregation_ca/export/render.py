"""Text rendering of cycle snapshots to stdout or a curses screen."""

import curses
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..model.state import CycleState


QUIT_HINT = "Use Control-C to quit."


def format_snapshot(state: "CycleState", config: "SimulationConfig") -> str:
    """
    Render the board and statistics as text.

    Output format:
        <dimension rows of '.', 'e', 'n'>
        cycle: 3
        moves this cycle: 12
        teams' "happiness": 0.734127
        dim: 15, %strength of preference:  50%, %vacancy:  20%, %end:  60%
    """
    lines = state.rows()
    lines.append(f"cycle: {state.cycle}")
    lines.append(f"moves this cycle: {state.moves}")
    lines.append(f"teams' \"happiness\": {state.happiness:f}")
    lines.append(
        f"dim: {config.dimension}, "
        f"%strength of preference: {config.strength:3d}%, "
        f"%vacancy: {config.vacancy:3d}%, "
        f"%end: {config.endline:3d}%"
    )
    return "\n".join(lines) + "\n"


class Renderer(ABC):
    """Destination for rendered snapshots."""

    def __init__(self, config: "SimulationConfig"):
        self.config = config

    @abstractmethod
    def render(self, state: "CycleState") -> None:
        ...

    def close(self) -> None:
        """Release the output surface."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class BatchRenderer(Renderer):
    """Writes each snapshot to a text stream with no cursor control."""

    def __init__(self, config: "SimulationConfig", stream: Optional[TextIO] = None):
        super().__init__(config)
        self.stream = stream if stream is not None else sys.stdout

    def render(self, state: "CycleState") -> None:
        self.stream.write(format_snapshot(state, self.config))
        self.stream.flush()


class CursesRenderer(Renderer):
    """Redraws each snapshot at the top-left of a full-screen curses window."""

    def __init__(self, config: "SimulationConfig", stdscr: "curses.window"):
        super().__init__(config)
        self.stdscr = stdscr

    def render(self, state: "CycleState") -> None:
        self.stdscr.move(0, 0)
        try:
            self.stdscr.addstr(format_snapshot(state, self.config) + QUIT_HINT)
        except curses.error:
            # Terminal smaller than the snapshot; show what fits
            pass
        self.stdscr.refresh()
