"""Terminal renderer for the emulated device."""

import logging
import threading
from typing import TYPE_CHECKING, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from launchemu.emulator import CommandDispatcher
from launchemu.protocol import Command

from .widgets import CellWidget, LaunchpadGrid, StatusBar

if TYPE_CHECKING:
    from launchemu.midi import MidiBridge

logger = logging.getLogger(__name__)


class EmulatorApp(App):
    """
    Textual UI drawing the visible buffer of an emulated device.

    Implements DisplayObserver via structural subtyping: the dispatcher
    calls on_display_changed() after each command, from whichever thread
    applied it. Commands from another thread (the MIDI bridge) are
    marshalled onto the UI thread with call_from_thread.

    Clicks on cells are forwarded to the device as presses and releases.
    """

    TITLE = "Launchpad Emulator"

    BINDINGS = [
        Binding("escape", "release_all", "Release held", show=True, priority=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    def __init__(self, dispatcher: CommandDispatcher, bridge: Optional["MidiBridge"] = None):
        """
        Initialize the app.

        Args:
            dispatcher: Dispatcher of the emulated device (already attached)
            bridge: MIDI bridge to report in the status bar, if any
        """
        super().__init__()
        self.dispatcher = dispatcher
        self.bridge = bridge
        self._ui_thread_id: Optional[int] = None
        self.redraw_count = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield LaunchpadGrid()
        yield StatusBar()
        yield Footer()

    def on_mount(self) -> None:
        self._ui_thread_id = threading.get_ident()
        if self.bridge is not None:
            self.sub_title = "MIDI bridged"
        self.dispatcher.register_observer(self)
        self.refresh_display()
        logger.info("Emulator UI mounted")

    def on_unmount(self) -> None:
        self.dispatcher.unregister_observer(self)
        logger.info("Emulator UI unmounted")

    # =================================================================
    # DisplayObserver Protocol
    # =================================================================

    def on_display_changed(self, command: Command) -> None:
        """Redraw after a command; safe to call from any thread."""
        if threading.get_ident() == self._ui_thread_id:
            self.refresh_display()
        else:
            self.call_from_thread(self.refresh_display)

    def refresh_display(self) -> None:
        """Redraw changed cells and the status bar (UI thread only)."""
        frame = self.dispatcher.snapshot()
        self.redraw_count += self.query_one(LaunchpadGrid).apply_frame(frame)

        bridge = self.bridge
        self.query_one(StatusBar).update_state(
            brightness=frame.brightness,
            visible_buffer=frame.visible_buffer,
            write_buffer=frame.write_buffer,
            midi_in=bridge.input_port_name if bridge else None,
            midi_out=bridge.output_port_name if bridge else None,
        )

    # =================================================================
    # Input
    # =================================================================

    def on_cell_widget_pressed(self, message: CellWidget.Pressed) -> None:
        logger.debug(f"Cell pressed: ({message.x}, {message.y})")
        self.dispatcher.state.press(message.x, message.y)

    def on_cell_widget_released(self, message: CellWidget.Released) -> None:
        logger.debug(f"Cell released: ({message.x}, {message.y})")
        self.dispatcher.state.release(message.x, message.y)

    def action_release_all(self) -> None:
        self.query_one(LaunchpadGrid).release_all()
