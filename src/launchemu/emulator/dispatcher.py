"""Command dispatch between the wire protocol and the device state."""

import logging
from threading import RLock
from typing import Any, Callable, Mapping, Optional, Union

from launchemu.models import BufferId
from launchemu.protocol import (
    BrightnessCommand,
    BuffersCommand,
    ButtonLightCommand,
    Command,
    InputEvent,
    InputEventType,
    PadLightCommand,
    ResetCommand,
    SelfTestCommand,
    parse_command,
)
from launchemu.protocols import DisplayObserver
from launchemu.utils import ObserverManager

from .display import DisplayFrame
from .state import DeviceState

logger = logging.getLogger(__name__)

EventSink = Callable[[dict[str, Any]], None]


class CommandDispatcher:
    """
    Applies inbound commands to a DeviceState and emits outbound events.

    The dispatcher is the single writer of its DeviceState: every command
    runs under one re-entrant lock, and snapshots are taken under the same
    lock. Observers are notified after the lock is released.

    Once attached, the dispatcher is also the DeviceState listener: user
    interaction is encoded into event messages and handed synchronously
    to every registered sink.
    """

    def __init__(
        self,
        state: DeviceState,
        sink: Optional[EventSink] = None,
        strict: bool = False,
    ):
        """
        Initialize the dispatcher.

        Args:
            state: Device state to drive
            sink: Optional receiver of outbound event messages
            strict: Raise on unknown commands instead of ignoring them
        """
        self.state = state
        self.strict = strict
        self._lock = RLock()
        self._sinks: list[EventSink] = [sink] if sink is not None else []
        self._observers = ObserverManager[DisplayObserver](observer_type_name="display")

    # =================================================================
    # Wiring
    # =================================================================

    def attach(self) -> "CommandDispatcher":
        """Register as the state's listener so user input is encoded."""
        self.state.set_listener(self)
        return self

    def add_sink(self, sink: EventSink) -> None:
        if sink not in self._sinks:
            self._sinks.append(sink)

    def remove_sink(self, sink: EventSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def register_observer(self, observer: DisplayObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: DisplayObserver) -> None:
        self._observers.unregister(observer)

    # =================================================================
    # Inbound
    # =================================================================

    def apply(self, message: Union[Mapping[str, Any], Command]) -> Optional[Command]:
        """
        Apply one command to the device state.

        Args:
            message: Raw wire message or an already parsed command

        Returns:
            The applied command, or None if it was ignored as unknown

        Raises:
            ProtocolError: If a field is invalid (state is left untouched)
            UnknownCommandError: If strict and the command is unknown
        """
        if isinstance(message, Mapping):
            command = parse_command(message, strict=self.strict)
        else:
            command = message
        if command is None:
            return None

        with self._lock:
            self._execute(command)

        self._observers.notify("on_display_changed", command)
        return command

    def _execute(self, command: Command) -> None:
        state = self.state
        if isinstance(command, ResetCommand):
            state.reset()
        elif isinstance(command, PadLightCommand):
            state.set_pad_light(command.x, command.y, command.c, command.o)
        elif isinstance(command, ButtonLightCommand):
            state.set_button_light(command.t, command.i, command.c, command.o)
        elif isinstance(command, BrightnessCommand):
            state.set_brightness(command.b)
        elif isinstance(command, BuffersCommand):
            state.set_buffers(command.v, command.w, command.c, command.a)
        elif isinstance(command, SelfTestCommand):
            state.test_lights(command.i)
        else:
            raise TypeError(f"Unsupported command type: {type(command).__name__}")

    # =================================================================
    # Queries
    # =================================================================

    def snapshot(self) -> DisplayFrame:
        """Take a consistent display snapshot."""
        with self._lock:
            return self.state.snapshot()

    def render_text(self, buffer: Optional[BufferId] = None) -> str:
        """Render the visible buffer (or the given one) as a text grid."""
        with self._lock:
            return self.state.render_text(None if buffer is None else buffer.index)

    # =================================================================
    # Outbound
    # =================================================================

    def encode(self, event: InputEvent) -> None:
        """Send an input event to every sink."""
        message = event.to_message()
        if not self._sinks:
            logger.debug(f"No event sink, dropping {message}")
            return
        for sink in list(self._sinks):
            try:
                sink(message)
            except Exception as e:
                logger.error(f"Error sending event {message} to {sink}: {e}", exc_info=True)

    def on_pad_pressed(self, x: int, y: int) -> None:
        self.encode(InputEvent(evt=InputEventType.PAD_PRESSED, x=x, y=y))

    def on_pad_released(self, x: int, y: int) -> None:
        self.encode(InputEvent(evt=InputEventType.PAD_RELEASED, x=x, y=y))

    def on_button_pressed(self, x: int, y: int) -> None:
        self.encode(InputEvent(evt=InputEventType.BUTTON_PRESSED, x=x, y=y))

    def on_button_released(self, x: int, y: int) -> None:
        self.encode(InputEvent(evt=InputEventType.BUTTON_RELEASED, x=x, y=y))

    def on_text_scrolled(self) -> None:
        self.encode(InputEvent(evt=InputEventType.TEXT_SCROLLED))
