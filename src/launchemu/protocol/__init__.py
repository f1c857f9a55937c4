"""Wire protocol between controller and emulated device."""

from .commands import (
    COMMAND_TYPES,
    BrightnessCommand,
    BuffersCommand,
    ButtonLightCommand,
    Command,
    PadLightCommand,
    ResetCommand,
    SelfTestCommand,
    parse_command,
)
from .events import InputEvent, InputEventType

__all__ = [
    "COMMAND_TYPES",
    "BrightnessCommand",
    "BuffersCommand",
    "ButtonLightCommand",
    "Command",
    "InputEvent",
    "InputEventType",
    "PadLightCommand",
    "ResetCommand",
    "SelfTestCommand",
    "parse_command",
]
