"""Launchpad S MIDI support: message mapping and port bridge."""

from .bridge import MidiBridge, list_ports
from .codec import (
    LaunchpadSMapper,
    color_to_velocity,
    decode_command,
    duty_cycle_to_level,
    encode_event,
    velocity_to_color,
)

__all__ = [
    "LaunchpadSMapper",
    "MidiBridge",
    "color_to_velocity",
    "decode_command",
    "duty_cycle_to_level",
    "encode_event",
    "list_ports",
    "velocity_to_color",
]
