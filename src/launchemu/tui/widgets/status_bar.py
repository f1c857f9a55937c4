"""Status bar widget showing brightness, buffers and MIDI ports."""

from typing import Optional

from textual.widgets import Static


class StatusBar(Static):
    """
    Status bar displaying current device state.

    Shows:
    - Brightness (as opacity)
    - Visible and write buffers
    - MIDI input/output ports, when bridged
    """

    DEFAULT_CSS = """
    StatusBar {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    StatusBar.midi {
        background: $success;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._brightness = 1.0
        self._visible_buffer = 0
        self._write_buffer = 0
        self._midi_in: Optional[str] = None
        self._midi_out: Optional[str] = None
        self._update_display()

    def update_state(
        self,
        brightness: float,
        visible_buffer: int,
        write_buffer: int,
        midi_in: Optional[str] = None,
        midi_out: Optional[str] = None,
    ) -> None:
        """
        Update all status information.

        Args:
            brightness: Display opacity (0.1-1.0)
            visible_buffer: Index of the displayed buffer
            write_buffer: Index of the buffer receiving writes
            midi_in: MIDI input port name, if bridged
            midi_out: MIDI output port name, if bridged
        """
        self._brightness = brightness
        self._visible_buffer = visible_buffer
        self._write_buffer = write_buffer
        self._midi_in = midi_in
        self._midi_out = midi_out
        self._update_display()

    def _update_display(self) -> None:
        parts = [
            f"☀ {round(self._brightness * 100)}%",
            f"Visible: {self._visible_buffer}",
            f"Write: {self._write_buffer}",
        ]
        if self._midi_in or self._midi_out:
            self.add_class("midi")
            parts.append(f"🎹 in: {self._midi_in or '-'} / out: {self._midi_out or '-'}")
        else:
            self.remove_class("midi")
            parts.append("🎹 No MIDI")
        self.update(" | ".join(parts))
