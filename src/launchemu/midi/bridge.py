"""Bridge between MIDI ports and an emulated device."""

import logging
from threading import Lock
from typing import Any, Optional

import mido

from launchemu.emulator import CommandDispatcher
from launchemu.exceptions import ErrorContext, handle_errors

from .codec import decode_command, encode_event

logger = logging.getLogger(__name__)


def list_ports() -> tuple[list[str], list[str]]:
    """Get the available (input, output) MIDI port names."""
    return mido.get_input_names(), mido.get_output_names()


class MidiBridge:
    """
    Lets controller software drive the emulator over MIDI.

    Messages from the input port are decoded into commands and applied on
    mido's I/O thread; the dispatcher lock serializes them against the UI.
    Input events from the device are encoded and sent to the output port.
    Either port is optional.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        input_port_name: Optional[str] = None,
        output_port_name: Optional[str] = None,
    ):
        """
        Initialize the bridge (ports are opened by start()).

        Args:
            dispatcher: Dispatcher of the emulated device
            input_port_name: MIDI port carrying commands from the controller
            output_port_name: MIDI port receiving input events
        """
        self.dispatcher = dispatcher
        self.input_port_name = input_port_name
        self.output_port_name = output_port_name
        self._input: Optional[mido.ports.BaseInput] = None
        self._output: Optional[mido.ports.BaseOutput] = None
        self._output_lock = Lock()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """
        Open the configured ports and start forwarding.

        Raises:
            Exception: If a port cannot be opened (logged first)
        """
        if self._running:
            logger.warning("MidiBridge is already running")
            return

        if self.input_port_name:
            with ErrorContext(f"open MIDI input '{self.input_port_name}'", logger):
                self._input = mido.open_input(self.input_port_name, callback=self._on_midi_message)
            logger.info(f"Listening for commands on MIDI input: {self.input_port_name}")

        if self.output_port_name:
            with ErrorContext(f"open MIDI output '{self.output_port_name}'", logger):
                self._output = mido.open_output(self.output_port_name)
            self.dispatcher.add_sink(self._on_device_event)
            logger.info(f"Sending input events to MIDI output: {self.output_port_name}")

        self._running = True

    def stop(self) -> None:
        """Close ports and stop forwarding."""
        self.dispatcher.remove_sink(self._on_device_event)

        if self._input is not None:
            try:
                self._input.close()
            except Exception as e:
                logger.error(f"Error closing MIDI input port: {e}")
            self._input = None

        with self._output_lock:
            if self._output is not None:
                try:
                    self._output.close()
                except Exception as e:
                    logger.error(f"Error closing MIDI output port: {e}")
                self._output = None

        if self._running:
            logger.info("MidiBridge stopped")
        self._running = False

    @handle_errors(operation_name="apply MIDI message", re_raise=False)
    def _on_midi_message(self, message: mido.Message) -> None:
        """Called from mido's I/O thread; errors are logged, never raised."""
        command = decode_command(message)
        if command is not None:
            self.dispatcher.apply(command)

    @handle_errors(operation_name="send MIDI event", re_raise=False)
    def _on_device_event(self, event: dict[str, Any]) -> None:
        message = encode_event(event)
        with self._output_lock:
            if self._output is not None:
                self._output.send(message)

    def __enter__(self) -> "MidiBridge":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
