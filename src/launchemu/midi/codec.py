"""Launchpad S MIDI mapping.

Translates between raw MIDI messages (as sent by controller software to a
Launchpad S) and the emulator's commands and events.

Layout:
- pads and right-side buttons are notes: ``note = x + 16 * y`` (side
  buttons use ``x = 8``)
- top-row buttons are control changes 104-111
- controller 0 carries reset, test lights and buffer selection
- controllers 30 and 31 carry the LED duty cycle (brightness)

Colors travel in the velocity byte: ``flags + red + 16 * green`` where the
flags select the back-buffer operation.
"""

import logging
from typing import Any, Mapping, Optional

import mido

from launchemu.models import BackBufferOperation, BufferId, Color, LightIntensity
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
)

logger = logging.getLogger(__name__)

# Controllers
MODE_CONTROL = 0
DUTY_CYCLE_LOW_CONTROL = 30
DUTY_CYCLE_HIGH_CONTROL = 31
TOP_BUTTON_CONTROL = 104

# Controller 0 values
RESET_VALUE = 0
TEXT_SCROLLED_VALUE = 3
BUFFER_MODE_MIN = 32
BUFFER_MODE_MAX = 63
TEST_LIGHT_VALUES = {
    125: LightIntensity.LOW,
    126: LightIntensity.MEDIUM,
    127: LightIntensity.HIGH,
}

# Velocity flags
FLAGS_MASK = 12
COPY_FLAGS = 12
CLEAR_FLAGS = 8

# Notes on any other channel are rapid LED updates (bulk set_lights, not emulated)
LIGHT_CHANNEL = 0

PRESSED_VELOCITY = 127
RELEASED_VELOCITY = 0


class LaunchpadSMapper:
    """
    Bidirectional mapping between MIDI notes and grid coordinates.

    Rows are 16 notes apart; columns 0-7 are pads and column 8 is the
    right-side button of that row.
    """

    ROW_SPACING = 16
    SIDE_COLUMN = 8

    def note_to_xy(self, note: int) -> tuple[Optional[int], Optional[int]]:
        """
        Convert a MIDI note to (x, y).

        Returns:
            (x, y), or (None, None) if the note is outside the grid
        """
        x, y = note % self.ROW_SPACING, note // self.ROW_SPACING
        if x > self.SIDE_COLUMN or y > 7:
            return (None, None)
        return (x, y)

    def xy_to_note(self, x: int, y: int) -> int:
        return x + self.ROW_SPACING * y


_mapper = LaunchpadSMapper()


def color_to_velocity(color: Color, operation: BackBufferOperation = BackBufferOperation.NONE) -> int:
    """Pack a color and back-buffer operation into a velocity byte."""
    flags = {
        BackBufferOperation.NONE: 0,
        BackBufferOperation.CLEAR: CLEAR_FLAGS,
        BackBufferOperation.COPY: COPY_FLAGS,
    }[BackBufferOperation(operation)]
    return flags + color.r + 16 * color.g


def velocity_to_color(velocity: int) -> tuple[Color, BackBufferOperation]:
    """Unpack a velocity byte into a color and back-buffer operation."""
    flags = velocity & FLAGS_MASK
    if flags == COPY_FLAGS:
        operation = BackBufferOperation.COPY
    elif flags == CLEAR_FLAGS:
        operation = BackBufferOperation.CLEAR
    else:
        operation = BackBufferOperation.NONE
    return Color.of(velocity & 3, (velocity >> 4) & 3), operation


def duty_cycle_to_level(numerator: int, denominator: int) -> int:
    """Find the brightness level whose duty cycle 1/(18 - level) is closest."""
    duty = numerator / denominator
    return min(range(16), key=lambda level: abs(1 / (18 - level) - duty))


def decode_command(message: mido.Message) -> Optional[Command]:
    """
    Decode a MIDI message sent to the device.

    Args:
        message: Incoming mido message

    Returns:
        The equivalent command, or None if the message has no effect
    """
    if message.type == "note_on":
        return _decode_note(message)
    if message.type == "control_change":
        return _decode_control_change(message.control, message.value)
    if message.type == "sysex":
        logger.warning("Scrolling text (sysex) is not supported by the emulator")
        return None
    logger.debug(f"Ignoring MIDI message: {message}")
    return None


def _decode_note(message: mido.Message) -> Optional[Command]:
    if message.channel != LIGHT_CHANNEL:
        logger.warning("Rapid LED update is not supported by the emulator")
        return None
    x, y = _mapper.note_to_xy(message.note)
    if x is None or y is None:
        logger.debug(f"Ignoring note outside the grid: {message.note}")
        return None
    color, operation = velocity_to_color(message.velocity)
    if x == LaunchpadSMapper.SIDE_COLUMN:
        return ButtonLightCommand(t=False, i=y, c=color, o=operation)
    return PadLightCommand(x=x, y=y, c=color, o=operation)


def _decode_control_change(control: int, value: int) -> Optional[Command]:
    if TOP_BUTTON_CONTROL <= control < TOP_BUTTON_CONTROL + 8:
        color, operation = velocity_to_color(value)
        return ButtonLightCommand(t=True, i=control - TOP_BUTTON_CONTROL, c=color, o=operation)

    if control in (DUTY_CYCLE_LOW_CONTROL, DUTY_CYCLE_HIGH_CONTROL):
        numerator = value // 16 + 1
        if control == DUTY_CYCLE_HIGH_CONTROL:
            numerator += 8
        denominator = value % 16 + 3
        return BrightnessCommand(b=duty_cycle_to_level(numerator, denominator))

    if control == MODE_CONTROL:
        if value == RESET_VALUE:
            return ResetCommand()
        if value in TEST_LIGHT_VALUES:
            return SelfTestCommand(i=TEST_LIGHT_VALUES[value].level)
        if BUFFER_MODE_MIN <= value <= BUFFER_MODE_MAX:
            return BuffersCommand(
                v=BufferId.from_index(value & 1),
                w=BufferId.from_index((value >> 2) & 1),
                c=bool(value & 16),
                a=bool(value & 8),
            )

    logger.debug(f"Ignoring control change {control}={value}")
    return None


def encode_event(event: InputEvent | Mapping[str, Any]) -> mido.Message:
    """
    Encode an input event as the MIDI message a Launchpad S would send.

    Args:
        event: Input event, or its wire message
    """
    if not isinstance(event, InputEvent):
        event = InputEvent.from_message(dict(event))

    if event.evt is InputEventType.TEXT_SCROLLED:
        return mido.Message("control_change", control=MODE_CONTROL, value=TEXT_SCROLLED_VALUE)

    velocity = PRESSED_VELOCITY if event.evt.is_press else RELEASED_VELOCITY
    if event.evt.is_button and event.x != -1:
        return mido.Message("control_change", control=TOP_BUTTON_CONTROL + event.x, value=velocity)

    x = LaunchpadSMapper.SIDE_COLUMN if event.evt.is_button else event.x
    return mido.Message("note_on", note=_mapper.xy_to_note(x, event.y), velocity=velocity)
