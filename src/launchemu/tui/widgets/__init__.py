"""Reusable UI widgets for the TUI."""

from .cell_widget import CellWidget
from .launchpad_grid import SIDE_LABELS, TOP_LABELS, LaunchpadGrid
from .status_bar import StatusBar

__all__ = [
    "SIDE_LABELS",
    "TOP_LABELS",
    "CellWidget",
    "LaunchpadGrid",
    "StatusBar",
]
