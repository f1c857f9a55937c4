"""Grid widget laying out pads and round buttons like the hardware."""

from typing import Optional

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static

from launchemu.emulator import DisplayFrame, is_button_cell
from launchemu.emulator.display import SIDE_COLUMN, TOP_ROW

from .cell_widget import CellWidget

TOP_LABELS = ("^", "v", "<", ">", "SES", "USR1", "USR2", "MIX")
SIDE_LABELS = ("VOL", "PAN", "SNDA", "SNDB", "STOP", "TRCK", "SOLO", "ARM")


class LaunchpadGrid(Container):
    """
    9x9 grid: top button row, then 8 rows of pads each ending with a side button.

    The top-right corner has no control and holds a spacer. The grid is
    stateless: frames are pushed in by the app through apply_frame().
    """

    DEFAULT_CSS = """
    LaunchpadGrid {
        layout: grid;
        grid-size: 9 9;
        grid-gutter: 0 1;
        padding: 1;
        height: 1fr;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.cells: dict[tuple[int, int], CellWidget] = {}
        self._frame: Optional[DisplayFrame] = None

    def compose(self) -> ComposeResult:
        for y in range(TOP_ROW, 8):
            for x in range(SIDE_COLUMN + 1):
                if x == SIDE_COLUMN and y == TOP_ROW:
                    yield Static(classes="spacer")
                    continue
                if y == TOP_ROW:
                    label = TOP_LABELS[x]
                elif x == SIDE_COLUMN:
                    label = SIDE_LABELS[y]
                else:
                    label = ""
                widget = CellWidget(x, y, label, is_button=is_button_cell(x, y))
                self.cells[(x, y)] = widget
                yield widget

    def apply_frame(self, frame: DisplayFrame) -> int:
        """
        Redraw the cells that changed since the previous frame.

        Args:
            frame: New display snapshot

        Returns:
            Number of cells redrawn
        """
        changed = frame.changed_cells(self._frame)
        for coord in changed:
            self.cells[coord].set_cell(frame[coord])
        self._frame = frame
        return len(changed)

    def release_all(self) -> None:
        """Release every held cell."""
        for widget in self.cells.values():
            widget.release()
