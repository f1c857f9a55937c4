"""Launchemu: an emulated Launchpad S for developing controller software."""

__version__ = "0.1.0"

# Device
from .emulator import CommandDispatcher, DeviceState, EmulatorLaunchpad

__all__ = [
    "CommandDispatcher",
    "DeviceState",
    "EmulatorLaunchpad",
]
