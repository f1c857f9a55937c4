"""Outbound events (device -> controller).

Events carry the pad/button coordinate convention used on the wire:

- pads: ``(x, y)`` with ``x, y`` in 0-7
- top-row buttons: ``(index, -1)``
- right-side buttons: ``(-1, index)``
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class InputEventType(str, Enum):
    """Kinds of user interaction reported to the controller."""

    PAD_PRESSED = "PP"
    PAD_RELEASED = "PR"
    BUTTON_PRESSED = "BP"
    BUTTON_RELEASED = "BR"
    TEXT_SCROLLED = "TS"

    @property
    def is_press(self) -> bool:
        return self in (InputEventType.PAD_PRESSED, InputEventType.BUTTON_PRESSED)

    @property
    def is_button(self) -> bool:
        return self in (InputEventType.BUTTON_PRESSED, InputEventType.BUTTON_RELEASED)


class InputEvent(BaseModel):
    """A single user interaction on the emulated device."""

    model_config = ConfigDict(frozen=True)

    evt: InputEventType
    x: Optional[int] = Field(default=None, ge=-1, le=7)
    y: Optional[int] = Field(default=None, ge=-1, le=7)

    def to_message(self) -> dict[str, Any]:
        """Serialize to a wire message (coordinates omitted when absent)."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_message(cls, message: dict[str, Any]) -> "InputEvent":
        return cls.model_validate(message)
