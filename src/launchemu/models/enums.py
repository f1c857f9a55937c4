"""Enumerations for the emulated device."""

from enum import Enum


class BackBufferOperation(str, Enum):
    """What a light-setting command also does to the back buffer."""

    NONE = "NONE"  # Write buffer only
    COPY = "COPY"  # Mirror the color into the back buffer
    CLEAR = "CLEAR"  # Switch the same cell off in the back buffer


class BufferId(str, Enum):
    """Identifier of one of the two illumination buffers."""

    BUFFER_0 = "BUFFER_0"
    BUFFER_1 = "BUFFER_1"

    @property
    def index(self) -> int:
        """Numeric buffer index (0 or 1)."""
        return 0 if self is BufferId.BUFFER_0 else 1

    def other(self) -> "BufferId":
        """Get the complementary buffer."""
        return BufferId.BUFFER_1 if self is BufferId.BUFFER_0 else BufferId.BUFFER_0

    @classmethod
    def from_index(cls, index: int) -> "BufferId":
        """Get the buffer for a numeric index."""
        if index not in (0, 1):
            raise ValueError(f"Invalid buffer index: {index}. Must be 0 or 1.")
        return cls.BUFFER_0 if index == 0 else cls.BUFFER_1


class LightIntensity(str, Enum):
    """Intensity presets for the all-lights-on self test."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def level(self) -> int:
        """Brightness level used by the emulator for this preset."""
        return {
            LightIntensity.LOW: 5,
            LightIntensity.MEDIUM: 10,
            LightIntensity.HIGH: 15,
        }[self]
