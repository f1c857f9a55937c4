"""Widget representing a single pad or round button."""

from textual import events
from textual.color import Color as TextualColor
from textual.message import Message
from textual.widgets import Static

from launchemu.emulator import DisplayCell


class CellWidget(Static):
    """
    One display cell of the emulated device (presentation only).

    The background is the cell's palette color, faded by its opacity.
    Mouse presses and releases are posted as messages for the parent to
    forward to the device. A release made while Ctrl is held is swallowed,
    so the cell stays pressed until it is clicked again.
    """

    DEFAULT_CSS = """
    CellWidget {
        width: 100%;
        height: 100%;
        border: tall $surface;
        content-align: center middle;
        color: $text-muted;
    }

    CellWidget.button {
        border: round $surface;
    }

    CellWidget.held {
        border: tall $warning;
    }

    CellWidget.button.held {
        border: round $warning;
    }
    """

    class Pressed(Message):
        """Posted when the cell is pressed."""

        def __init__(self, x: int, y: int):
            super().__init__()
            self.x = x
            self.y = y

    class Released(Message):
        """Posted when the cell is released."""

        def __init__(self, x: int, y: int):
            super().__init__()
            self.x = x
            self.y = y

    def __init__(self, x: int, y: int, label: str = "", is_button: bool = False) -> None:
        """
        Initialize cell widget.

        Args:
            x: Display column (0-8)
            y: Display row (-1 to 7)
            label: Text shown on the cell
            is_button: Round button rather than square pad
        """
        super().__init__(label, id=f"cell_{x}_{'t' if y < 0 else y}")
        self.x = x
        self.y = y
        self.is_held = False
        self.cell: DisplayCell | None = None
        if is_button:
            self.add_class("button")

    def set_cell(self, cell: DisplayCell) -> None:
        """Show a resolved display cell."""
        self.cell = cell
        self.styles.background = TextualColor.parse(cell.color).with_alpha(cell.opacity)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.is_held:
            return
        self.is_held = True
        self.add_class("held")
        self.post_message(self.Pressed(self.x, self.y))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if not self.is_held or event.ctrl:
            return
        self.release()

    def release(self) -> None:
        """Release the cell if it is held."""
        if not self.is_held:
            return
        self.is_held = False
        self.remove_class("held")
        self.post_message(self.Released(self.x, self.y))
