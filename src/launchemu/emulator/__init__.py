"""The emulated device: state, command dispatch and session wiring."""

from .dispatcher import CommandDispatcher, EventSink
from .display import CELL_COORDINATES, DisplayCell, DisplayFrame, is_button_cell
from .session import EmulatorLaunchpad
from .state import DeviceState, brightness_for_level

__all__ = [
    "CELL_COORDINATES",
    "CommandDispatcher",
    "DeviceState",
    "DisplayCell",
    "DisplayFrame",
    "EmulatorLaunchpad",
    "EventSink",
    "brightness_for_level",
    "is_button_cell",
]
