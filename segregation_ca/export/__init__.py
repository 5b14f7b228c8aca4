"""I/O package for the segregation CA simulation."""

from .render import format_snapshot, Renderer, BatchRenderer, CursesRenderer
from .csv_writer import CSVWriter
from .visualizer import Visualizer
from .reporter import Reporter

__all__ = [
    'format_snapshot',
    'Renderer',
    'BatchRenderer',
    'CursesRenderer',
    'CSVWriter',
    'Visualizer',
    'Reporter',
]
