"""One emulated device wired to its controller-side API."""

import logging
from typing import Any, Optional

from launchemu.client import EmulatorClient, EventHandler, LaunchpadListener
from launchemu.models import EmulatorConfig
from launchemu.transport import CONTROLLER_ADDRESS, DEVICE_ADDRESS, LoopbackChannel

from .dispatcher import CommandDispatcher
from .state import DeviceState

logger = logging.getLogger(__name__)


class EmulatorLaunchpad:
    """
    Emulator session: device state, dispatcher, channel, client and listener.

    Commands published on the device address are applied by the dispatcher.
    Input events are published on the controller address and decoded by the
    EventHandler into LaunchpadListener calls.

    Example:
        ```python
        with EmulatorLaunchpad() as launchpad:
            launchpad.set_listener(MyListener())
            client = launchpad.get_client()
            client.set_pad_light(Pad.at(0, 0), RED)
        ```
    """

    def __init__(
        self,
        config: Optional[EmulatorConfig] = None,
        channel: Optional[LoopbackChannel] = None,
    ):
        """
        Create and wire a session.

        Args:
            config: Emulator settings (defaults if None)
            channel: Shared message bus (a private one if None)
        """
        self.config = config or EmulatorConfig()
        self.channel = channel or LoopbackChannel()
        self.state = DeviceState(brightness_level=self.config.default_brightness)
        self.dispatcher = CommandDispatcher(
            self.state,
            sink=self._publish_event,
            strict=self.config.strict_commands,
        ).attach()
        self.event_handler = EventHandler()
        self._client: Optional[EmulatorClient] = None
        self._closed = False

        self.channel.register_handler(DEVICE_ADDRESS, self._on_command)
        self.channel.register_handler(CONTROLLER_ADDRESS, self.event_handler.handle)
        logger.info("Emulator session started")

    def _on_command(self, message: dict[str, Any]) -> None:
        self.dispatcher.apply(message)

    def _publish_event(self, message: dict[str, Any]) -> None:
        self.channel.publish(CONTROLLER_ADDRESS, message)

    def _publish_command(self, message: dict[str, Any]) -> None:
        self.channel.publish(DEVICE_ADDRESS, message)

    def get_client(self) -> EmulatorClient:
        """Get the controller-side client (one per session)."""
        if self._client is None:
            self._client = EmulatorClient(self._publish_command)
        return self._client

    def set_listener(self, listener: Optional[LaunchpadListener]) -> None:
        """Install the controller-side listener (None removes it)."""
        self.event_handler.set_listener(listener)

    def close(self) -> None:
        """Detach from the channel. Safe to call more than once."""
        if self._closed:
            return
        self.channel.unregister_handler(DEVICE_ADDRESS, self._on_command)
        self.channel.unregister_handler(CONTROLLER_ADDRESS, self.event_handler.handle)
        self.state.set_listener(None)
        self._closed = True
        logger.info("Emulator session closed")

    def __enter__(self) -> "EmulatorLaunchpad":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
