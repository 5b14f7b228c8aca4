"""Image export of the board for the segregation CA simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Patch
from pathlib import Path
from collections import deque
from typing import Deque, Optional, TYPE_CHECKING
from PIL import Image
import io

from ..model.grid import CellKind

if TYPE_CHECKING:
    from ..model.state import CycleState


class Visualizer:
    """
    Generates visual outputs using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        CellKind.VACANT: '#ECF0F1',   # Light gray
        CellKind.ENDLINE: '#E67E22',  # Orange
        CellKind.NEWLINE: '#2980B9',  # Blue
    }

    LABELS = {
        CellKind.VACANT: 'Vacant (.)',
        CellKind.ENDLINE: 'Endline (e)',
        CellKind.NEWLINE: 'Newline (n)',
    }

    def __init__(self, dimension: int, max_frames: Optional[int] = None):
        self.dimension = dimension
        # Only the newest max_frames are kept when a cap is given
        self.frames: Deque[Image.Image] = deque(maxlen=max_frames)

    def board_image(self, cells: np.ndarray) -> np.ndarray:
        """Map cell kinds to an RGB array."""
        image = np.ones((self.dimension, self.dimension, 3))
        for kind, color in self.COLORS.items():
            image[cells == kind] = to_rgb(color)
        return image

    def _create_figure(self, state: "CycleState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        fig, ax = plt.subplots(figsize=(6, 6.5))

        # Row 0 at the top, as in the text rendering
        ax.imshow(self.board_image(state.cells), origin='upper', aspect='equal',
                  interpolation='nearest')

        ax.set_title(f'Cycle {state.cycle} | Moves: {state.moves} | '
                     f'Happiness: {state.happiness:.3f}')
        ax.set_xticks([])
        ax.set_yticks([])

        legend_elements = [
            Patch(facecolor=self.COLORS[kind], edgecolor='black',
                  label=self.LABELS[kind])
            for kind in CellKind
        ]
        ax.legend(handles=legend_elements, loc='upper center',
                  bbox_to_anchor=(0.5, -0.02), ncol=3, fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "CycleState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "CycleState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 5) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        frames = list(self.frames)
        frames[0].save(
            output_path,
            save_all=True,
            append_images=frames[1:],
            duration=duration,
            loop=0
        )
