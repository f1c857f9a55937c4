"""Read-only display snapshots consumed by renderers."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

from launchemu.models import OFF_COLOR

# Display coordinates: pads (0-7, 0-7), top buttons (0-7, -1), side buttons (8, 0-7).
# (8, -1) is the unused corner.
SIDE_COLUMN = 8
TOP_ROW = -1

CELL_COORDINATES: tuple[tuple[int, int], ...] = tuple(
    (x, y)
    for y in range(TOP_ROW, 8)
    for x in range(SIDE_COLUMN + 1)
    if not (x == SIDE_COLUMN and y == TOP_ROW)
)


def is_button_cell(x: int, y: int) -> bool:
    """Check if display coordinates address a round button rather than a pad."""
    return x == SIDE_COLUMN or y == TOP_ROW


@dataclass(frozen=True)
class DisplayCell:
    """Resolved appearance of one pad or button."""

    color: str
    opacity: float

    @property
    def is_lit(self) -> bool:
        return self.color != OFF_COLOR


class DisplayFrame(Mapping):
    """
    Immutable snapshot of all 80 display cells.

    Maps ``(x, y)`` display coordinates to ``DisplayCell``. Renderers keep
    the previous frame and redraw only ``changed_cells``.
    """

    def __init__(
        self,
        cells: Mapping[tuple[int, int], DisplayCell],
        brightness: float,
        visible_buffer: int,
        write_buffer: int,
    ):
        self._cells = dict(cells)
        self.brightness = brightness
        self.visible_buffer = visible_buffer
        self.write_buffer = write_buffer

    def __getitem__(self, key: tuple[int, int]) -> DisplayCell:
        return self._cells[key]

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def changed_cells(self, previous: Optional["DisplayFrame"]) -> list[tuple[int, int]]:
        """
        List coordinates whose appearance differs from a previous frame.

        Args:
            previous: Frame drawn last, or None to redraw everything

        Returns:
            Changed coordinates, in display order
        """
        if previous is None:
            return list(self._cells)
        return [coord for coord, cell in self._cells.items() if previous.get(coord) != cell]
