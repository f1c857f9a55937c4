"""Data models for the emulated device."""

from .color import AMBER, BLACK, GREEN, OFF_COLOR, ORANGE, PALETTE, RED, YELLOW, Color
from .config import EmulatorConfig
from .controls import Button, Pad
from .enums import BackBufferOperation, BufferId, LightIntensity
from .levels import Brightness, ScrollSpeed

__all__ = [
    "AMBER",
    "BLACK",
    "GREEN",
    "OFF_COLOR",
    "ORANGE",
    "PALETTE",
    "RED",
    "YELLOW",
    # Enums
    "BackBufferOperation",
    "Brightness",
    "BufferId",
    "Button",
    # Models
    "Color",
    "EmulatorConfig",
    "LightIntensity",
    "Pad",
    "ScrollSpeed",
]
