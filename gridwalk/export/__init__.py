"""I/O package for the gridwalk simulation."""

from .csv_writer import CSVWriter
from .text_renderer import render_text
from .visualizer import Visualizer
from .reporter import Reporter

__all__ = ['CSVWriter', 'render_text', 'Visualizer', 'Reporter']
