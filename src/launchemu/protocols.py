"""Observer protocols connecting the device state to its surroundings.

- DeviceListener: receives user interaction from the emulated device
- DisplayObserver: receives a notification after each applied command

The controller-side listener (typed Pad/Button callbacks) lives in
launchemu.client.listener.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from launchemu.protocol import Command


@runtime_checkable
class DeviceListener(Protocol):
    """
    Receiver of user interaction on the emulated device.

    Coordinates follow the wire convention: pads are ``(x, y)``, top-row
    buttons ``(index, -1)`` and right-side buttons ``(-1, index)``.

    Threading:
        Called synchronously from whichever thread produced the input
        (the UI thread for mouse clicks).
    """

    def on_pad_pressed(self, x: int, y: int) -> None: ...

    def on_pad_released(self, x: int, y: int) -> None: ...

    def on_button_pressed(self, x: int, y: int) -> None: ...

    def on_button_released(self, x: int, y: int) -> None: ...

    def on_text_scrolled(self) -> None: ...


@runtime_checkable
class DisplayObserver(Protocol):
    """Observer notified after a command changed the device state."""

    def on_display_changed(self, command: "Command") -> None:
        """
        Handle a state change.

        Args:
            command: The command that was just applied

        Threading:
            Called on the thread that applied the command (the MIDI thread
            for bridged input). UI implementations must marshal onto their
            own thread.
        """
        ...
