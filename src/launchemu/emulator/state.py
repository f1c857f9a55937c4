"""Double-buffered illumination model of the emulated device.

The 8x8 pads, the 8 top-row buttons and the 8 right-side buttons share one
9x9 grid per buffer. Display coordinate ``(x, y)`` is stored at
``grid[x][y + 1]``:

- pads: ``x, y`` in 0-7
- top-row button ``i``: ``(i, -1)``
- right-side button ``i``: ``(8, i)``

The device owns two such buffers. One is visible, one receives writes, and
the back buffer is always the one that is not being written.
"""

import logging
from typing import Optional, Sequence

from launchemu.exceptions import ProtocolError
from launchemu.models import (
    AMBER,
    BLACK,
    OFF_COLOR,
    BackBufferOperation,
    Brightness,
    BufferId,
    Color,
    ScrollSpeed,
)
from launchemu.protocols import DeviceListener

from .display import CELL_COORDINATES, SIDE_COLUMN, TOP_ROW, DisplayCell, DisplayFrame

logger = logging.getLogger(__name__)

GRID_SIZE = 9
BUFFER_COUNT = 2

Grid = list[list[Optional[Color]]]


def _empty_grid() -> Grid:
    return [[None] * GRID_SIZE for _ in range(GRID_SIZE)]


def _copy_grid(grid: Grid) -> Grid:
    return [list(column) for column in grid]


def _check_range(field: str, value: int, low: int, high: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or not low <= value <= high:
        raise ProtocolError(field, value, f"must be an integer in [{low}, {high}]")


def _check_color(color: Color) -> None:
    if not isinstance(color, Color):
        raise ProtocolError("c", color, "must be a Color")


def _operation(operation: BackBufferOperation | str) -> BackBufferOperation:
    try:
        return BackBufferOperation(operation)
    except ValueError:
        raise ProtocolError("o", operation, "must be NONE, COPY or CLEAR") from None


def _buffer_index(field: str, buffer: BufferId | str) -> int:
    try:
        return BufferId(buffer).index
    except ValueError:
        raise ProtocolError(field, buffer, "must be BUFFER_0 or BUFFER_1") from None


def brightness_for_level(level: int) -> float:
    """Display opacity for a brightness level (0 -> 0.1, 15 -> 1.0)."""
    return round(0.1 + 0.06 * level, 2)


class DeviceState:
    """
    Illumination state of one emulated device.

    Mutations are not synchronized here. Concurrent writers go through
    CommandDispatcher, which serializes them under its lock.
    """

    def __init__(self, brightness_level: int = Brightness.MAX_VALUE):
        """
        Initialize an all-off device.

        Args:
            brightness_level: Initial brightness level (0-15)
        """
        self.buffers: list[Grid] = [_empty_grid() for _ in range(BUFFER_COUNT)]
        self.visible_buffer = 0
        self.write_buffer = 0
        self.brightness = 1.0
        self._listener: Optional[DeviceListener] = None
        self.set_brightness(brightness_level)

    @property
    def back_buffer(self) -> int:
        """Buffer that is not being written to."""
        return 1 - self.write_buffer

    # =================================================================
    # Lights
    # =================================================================

    def reset(self) -> None:
        """Switch every light off in both buffers (selection and brightness are kept)."""
        self.buffers = [_empty_grid() for _ in range(BUFFER_COUNT)]
        logger.debug("Device reset")

    def set_pad_light(
        self,
        x: int,
        y: int,
        color: Color,
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> None:
        """
        Set the color of a pad in the write buffer.

        Args:
            x: Pad column (0-7)
            y: Pad row (0-7)
            color: Color to apply
            operation: What to do to the same cell of the back buffer
        """
        _check_range("x", x, 0, 7)
        _check_range("y", y, 0, 7)
        self._set_light(x, y, color, operation)

    def set_button_light(
        self,
        is_top: bool,
        index: int,
        color: Color,
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> None:
        """
        Set the color of a round button in the write buffer.

        Args:
            is_top: True for the top row, False for the right side
            index: Button index along its row or column (0-7)
            color: Color to apply
            operation: What to do to the same cell of the back buffer
        """
        _check_range("i", index, 0, 7)
        if is_top:
            self._set_light(index, TOP_ROW, color, operation)
        else:
            self._set_light(SIDE_COLUMN, index, color, operation)

    def _set_light(self, x: int, y: int, color: Color, operation: BackBufferOperation) -> None:
        _check_color(color)
        operation = _operation(operation)
        self.buffers[self.write_buffer][x][y + 1] = color
        if operation is BackBufferOperation.COPY:
            self.buffers[self.back_buffer][x][y + 1] = color
        elif operation is BackBufferOperation.CLEAR:
            self.buffers[self.back_buffer][x][y + 1] = BLACK
        logger.debug(
            f"Light ({x}, {y}) set to {color.to_hex()} "
            f"in buffer {self.write_buffer} ({operation.value})"
        )

    def set_brightness(self, level: int) -> None:
        """Set brightness from a level in 0-15."""
        _check_range("b", level, Brightness.MIN_VALUE, Brightness.MAX_VALUE)
        self.brightness = brightness_for_level(level)
        logger.debug(f"Brightness level {level} -> {self.brightness}")

    def set_buffers(
        self,
        visible: BufferId | str,
        write: BufferId | str,
        copy_visible_to_write: bool = False,
        auto_swap: bool = False,
    ) -> None:
        """
        Select the visible and write buffers.

        Args:
            visible: Buffer shown on the display
            write: Buffer receiving light changes
            copy_visible_to_write: Replace the write buffer with a copy of the visible one
            auto_swap: Accepted for compatibility, buffers are never flashed
        """
        visible_index = _buffer_index("v", visible)
        write_index = _buffer_index("w", write)
        self.visible_buffer = visible_index
        self.write_buffer = write_index
        if copy_visible_to_write:
            self.buffers[write_index] = _copy_grid(self.buffers[visible_index])
        if auto_swap:
            logger.debug("Buffer auto-swap requested but not emulated")
        logger.debug(
            f"Buffers: visible={visible_index} write={write_index} "
            f"copy={copy_visible_to_write}"
        )

    def test_lights(self, level: int) -> None:
        """Set brightness and light every cell of the write buffer amber."""
        self.set_brightness(level)
        self.buffers[self.write_buffer] = [[AMBER] * GRID_SIZE for _ in range(GRID_SIZE)]
        logger.debug(f"Test lights at level {level}")

    def set_lights(
        self,
        colors: Sequence[Color],
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> bool:
        """Bulk light update. Not supported by the emulator; returns False."""
        logger.warning(f"set_lights is not supported by the emulator ({len(colors)} colors ignored)")
        return False

    def scroll_text(
        self,
        text: str,
        color: Color,
        speed: ScrollSpeed,
        loop: bool = False,
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> bool:
        """Scrolling text. Not supported by the emulator; returns False."""
        logger.warning(f"scroll_text is not supported by the emulator (text {text!r} ignored)")
        return False

    # =================================================================
    # Queries
    # =================================================================

    def cell(self, buffer: int, x: int, y: int) -> Optional[Color]:
        """
        Read a raw cell.

        Args:
            buffer: Buffer index (0 or 1)
            x: Display column (0-8)
            y: Display row (-1 to 7)

        Returns:
            The stored color, or None if the cell was never written
        """
        self._check_display_coordinates(x, y)
        if buffer not in (0, 1):
            raise ValueError(f"Invalid buffer index: {buffer}. Must be 0 or 1.")
        return self.buffers[buffer][x][y + 1]

    def display_color(self, x: int, y: int) -> DisplayCell:
        """
        Resolve the appearance of a cell in the visible buffer.

        The off color is always fully opaque; lit colors take the current
        brightness as opacity.
        """
        color = self.cell(self.visible_buffer, x, y)
        hex_color = color.to_hex() if color is not None else OFF_COLOR
        opacity = 1.0 if hex_color == OFF_COLOR else self.brightness
        return DisplayCell(color=hex_color, opacity=opacity)

    def snapshot(self) -> DisplayFrame:
        """Take an immutable copy of the 80 display cells."""
        return DisplayFrame(
            {(x, y): self.display_color(x, y) for x, y in CELL_COORDINATES},
            brightness=self.brightness,
            visible_buffer=self.visible_buffer,
            write_buffer=self.write_buffer,
        )

    def render_text(self, buffer: Optional[int] = None) -> str:
        """
        Render a buffer as a 9x9 text grid.

        Lit cells show their red and green intensity digits, off cells a
        dot, and the unused corner is blank.

        Args:
            buffer: Buffer index to render, or None for the visible buffer
        """
        buffer = self.visible_buffer if buffer is None else buffer
        lines = []
        for y in range(TOP_ROW, GRID_SIZE - 1):
            row = []
            for x in range(GRID_SIZE):
                if x == SIDE_COLUMN and y == TOP_ROW:
                    row.append("  ")
                    continue
                color = self.cell(buffer, x, y)
                row.append(" ." if color is None or color.is_off else f"{color.r}{color.g}")
            lines.append(" ".join(row).rstrip())
        return "\n".join(lines)

    @staticmethod
    def _check_display_coordinates(x: int, y: int) -> None:
        if not (0 <= x <= SIDE_COLUMN and TOP_ROW <= y <= 7) or (x, y) == (SIDE_COLUMN, TOP_ROW):
            raise ValueError(f"Invalid display coordinates: ({x}, {y})")

    # =================================================================
    # Input
    # =================================================================

    @property
    def listener(self) -> Optional[DeviceListener]:
        return self._listener

    def set_listener(self, listener: Optional[DeviceListener]) -> None:
        """Install the receiver of user interaction (None removes it)."""
        self._listener = listener

    def press_pad(self, x: int, y: int) -> None:
        if self._listener is not None:
            self._listener.on_pad_pressed(x, y)

    def release_pad(self, x: int, y: int) -> None:
        if self._listener is not None:
            self._listener.on_pad_released(x, y)

    def press_button(self, is_top: bool, index: int) -> None:
        if self._listener is not None:
            self._listener.on_button_pressed(*self._button_coordinates(is_top, index))

    def release_button(self, is_top: bool, index: int) -> None:
        if self._listener is not None:
            self._listener.on_button_released(*self._button_coordinates(is_top, index))

    def press(self, x: int, y: int) -> None:
        """Press whatever sits at display coordinates ``(x, y)``."""
        self._check_display_coordinates(x, y)
        if y == TOP_ROW:
            self.press_button(True, x)
        elif x == SIDE_COLUMN:
            self.press_button(False, y)
        else:
            self.press_pad(x, y)

    def release(self, x: int, y: int) -> None:
        """Release whatever sits at display coordinates ``(x, y)``."""
        self._check_display_coordinates(x, y)
        if y == TOP_ROW:
            self.release_button(True, x)
        elif x == SIDE_COLUMN:
            self.release_button(False, y)
        else:
            self.release_pad(x, y)

    @staticmethod
    def _button_coordinates(is_top: bool, index: int) -> tuple[int, int]:
        return (index, -1) if is_top else (-1, index)
