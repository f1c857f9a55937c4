"""Controller-side API that drives an emulated device."""

import logging
from typing import Any, Callable, Sequence

from launchemu.models import (
    BackBufferOperation,
    Brightness,
    BufferId,
    Button,
    Color,
    LightIntensity,
    Pad,
    ScrollSpeed,
)
from launchemu.protocol import (
    BrightnessCommand,
    BuffersCommand,
    ButtonLightCommand,
    Command,
    PadLightCommand,
    ResetCommand,
    SelfTestCommand,
)

logger = logging.getLogger(__name__)


class EmulatorClient:
    """
    Encodes controller calls into command messages.

    The client never talks to the device directly; it hands each message to
    ``publish``, usually a LoopbackChannel bound to the device address.

    Example:
        ```python
        client = EmulatorClient(lambda message: channel.publish(DEVICE_ADDRESS, message))
        client.reset()
        client.set_pad_light(Pad.at(3, 4), RED, BackBufferOperation.NONE)
        ```
    """

    def __init__(self, publish: Callable[[dict[str, Any]], None]):
        self._publish = publish

    def _send(self, command: Command) -> None:
        message = command.to_message()
        logger.debug(f"Sending {message}")
        self._publish(message)

    def reset(self) -> None:
        self._send(ResetCommand())

    def test_lights(self, intensity: LightIntensity) -> None:
        self._send(SelfTestCommand(i=LightIntensity(intensity).level))

    def set_pad_light(
        self,
        pad: Pad,
        color: Color,
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> None:
        self._send(PadLightCommand(x=pad.x, y=pad.y, c=color, o=operation))

    def set_button_light(
        self,
        button: Button,
        color: Color,
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> None:
        self._send(ButtonLightCommand(t=button.is_top, i=button.coordinate, c=color, o=operation))

    def set_brightness(self, brightness: Brightness) -> None:
        self._send(BrightnessCommand(b=brightness.level))

    def set_buffers(
        self,
        visible: BufferId,
        write: BufferId,
        copy_visible_to_write: bool = False,
        auto_swap: bool = False,
    ) -> None:
        """
        Select the visible and write buffers.

        Args:
            visible: Buffer shown on the device
            write: Buffer receiving subsequent light changes
            copy_visible_to_write: Start the write buffer as a copy of the visible one
            auto_swap: Ask the device to flash between buffers (not emulated)
        """
        self._send(BuffersCommand(v=visible, w=write, c=copy_visible_to_write, a=auto_swap))

    def set_lights(
        self,
        colors: Sequence[Color],
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> None:
        """
        Bulk light update (two colors per message on real hardware).

        The emulator has no equivalent command, so nothing is sent.

        Raises:
            ValueError: If the number of colors is odd
        """
        if len(colors) % 2 != 0:
            raise ValueError(f"Number of colors must be even, got {len(colors)}")
        logger.warning("set_lights is not supported by the emulator, nothing sent")

    def scroll_text(
        self,
        text: str,
        color: Color,
        speed: ScrollSpeed,
        loop: bool = False,
        operation: BackBufferOperation = BackBufferOperation.NONE,
    ) -> None:
        """Scrolling text. The emulator has no equivalent command, so nothing is sent."""
        logger.warning(f"scroll_text is not supported by the emulator, {text!r} not sent")
