"""Controller-side decoding of device events into typed callbacks."""

import logging
import time
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

from pydantic import ValidationError

from launchemu.exceptions import ProtocolError, wrap_command_error
from launchemu.models import Button, Pad
from launchemu.protocol import InputEvent, InputEventType

logger = logging.getLogger(__name__)


def _milliseconds() -> int:
    return int(time.time() * 1000)


@runtime_checkable
class LaunchpadListener(Protocol):
    """Receiver of controller-level input events (timestamps in milliseconds)."""

    def on_pad_pressed(self, pad: Pad, timestamp: int) -> None: ...

    def on_pad_released(self, pad: Pad, timestamp: int) -> None: ...

    def on_button_pressed(self, button: Button, timestamp: int) -> None: ...

    def on_button_released(self, button: Button, timestamp: int) -> None: ...

    def on_text_scrolled(self, timestamp: int) -> None: ...


class LaunchpadListenerAdapter:
    """LaunchpadListener with empty callbacks; override only what you need."""

    def on_pad_pressed(self, pad: Pad, timestamp: int) -> None:
        pass

    def on_pad_released(self, pad: Pad, timestamp: int) -> None:
        pass

    def on_button_pressed(self, button: Button, timestamp: int) -> None:
        pass

    def on_button_released(self, button: Button, timestamp: int) -> None:
        pass

    def on_text_scrolled(self, timestamp: int) -> None:
        pass


class EventHandler:
    """
    Turns event messages from the device into LaunchpadListener calls.

    Button events carry ``x == -1`` for right-side buttons (index in ``y``);
    anything else is a top-row button (index in ``x``).
    """

    def __init__(
        self,
        listener: Optional[LaunchpadListener] = None,
        clock: Callable[[], int] = _milliseconds,
    ):
        """
        Initialize the handler.

        Args:
            listener: Initial listener (may be set later)
            clock: Source of millisecond timestamps
        """
        self.listener = listener
        self._clock = clock

    def set_listener(self, listener: Optional[LaunchpadListener]) -> None:
        self.listener = listener

    def handle(self, message: Mapping[str, Any]) -> None:
        """
        Dispatch one event message.

        Raises:
            ProtocolError: If the event type or coordinates are invalid
        """
        listener = self.listener
        if listener is None:
            return

        try:
            event = InputEvent.from_message(dict(message))
        except ValidationError as e:
            raise wrap_command_error(e, message) from e

        timestamp = self._clock()
        if event.evt is InputEventType.TEXT_SCROLLED:
            listener.on_text_scrolled(timestamp)
            return

        if event.x is None or event.y is None:
            raise ProtocolError("x" if event.x is None else "y", None, "missing coordinate")

        try:
            if event.evt.is_button:
                button = Button.at_right(event.y) if event.x == -1 else Button.at_top(event.x)
                if event.evt.is_press:
                    listener.on_button_pressed(button, timestamp)
                else:
                    listener.on_button_released(button, timestamp)
            else:
                pad = Pad.at(event.x, event.y)
                if event.evt.is_press:
                    listener.on_pad_pressed(pad, timestamp)
                else:
                    listener.on_pad_released(pad, timestamp)
        except (ValueError, ValidationError) as e:
            raise ProtocolError("x", (event.x, event.y), f"invalid coordinates: {e}") from e
