"""Inbound commands (controller -> device).

Each command is a message with an ``evt`` discriminator and short field
names, for example::

    {"evt": "PADLGT", "x": 3, "y": 4, "c": {"r": 2, "g": 1}, "o": "NONE"}

Commands are parsed into a closed tagged union before they reach the
device state. Fields are type- and range-checked without coercion and
unexpected fields are rejected.
"""

import logging
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    TypeAdapter,
    ValidationError,
)

from launchemu.exceptions import UnknownCommandError, wrap_command_error
from launchemu.models import BackBufferOperation, BufferId, Color

logger = logging.getLogger(__name__)


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_message(self) -> dict[str, Any]:
        """Serialize to a wire message."""
        return self.model_dump(mode="json")


class ResetCommand(_Command):
    """Switch every light off in both buffers."""

    evt: Literal["RST"] = "RST"


class PadLightCommand(_Command):
    """Light a pad of the 8x8 grid."""

    evt: Literal["PADLGT"] = "PADLGT"
    x: StrictInt = Field(ge=0, le=7)
    y: StrictInt = Field(ge=0, le=7)
    c: Color
    o: BackBufferOperation = BackBufferOperation.NONE


class ButtonLightCommand(_Command):
    """Light a top-row (t=True) or right-side (t=False) button."""

    evt: Literal["BTNLGT"] = "BTNLGT"
    t: StrictBool
    i: StrictInt = Field(ge=0, le=7)
    c: Color
    o: BackBufferOperation = BackBufferOperation.NONE


class BrightnessCommand(_Command):
    evt: Literal["BRGHT"] = "BRGHT"
    b: StrictInt = Field(ge=0, le=15)


class BuffersCommand(_Command):
    """Select visible and write buffers, optionally copying visible into write."""

    evt: Literal["BUF"] = "BUF"
    v: BufferId
    w: BufferId
    c: StrictBool = False
    a: StrictBool = False


class SelfTestCommand(_Command):
    """Light everything at the given intensity level."""

    evt: Literal["TST"] = "TST"
    i: StrictInt = Field(ge=0, le=15)


Command = Annotated[
    Union[
        ResetCommand,
        PadLightCommand,
        ButtonLightCommand,
        BrightnessCommand,
        BuffersCommand,
        SelfTestCommand,
    ],
    Field(discriminator="evt"),
]

COMMAND_TYPES: frozenset[str] = frozenset({"RST", "PADLGT", "BTNLGT", "BRGHT", "BUF", "TST"})

_command_adapter: TypeAdapter = TypeAdapter(Command)


def parse_command(message: Mapping[str, Any], strict: bool = False) -> Optional[Command]:
    """
    Parse a raw inbound message into a typed command.

    Args:
        message: Decoded wire message
        strict: Raise on unknown discriminators instead of ignoring them

    Returns:
        The parsed command, or None if the discriminator is not recognized

    Raises:
        ProtocolError: If a recognized command carries an invalid field
        UnknownCommandError: If strict is set and the discriminator is unknown
    """
    discriminator = message.get("evt")
    if not isinstance(discriminator, str) or discriminator not in COMMAND_TYPES:
        if strict:
            raise UnknownCommandError(discriminator)
        logger.debug(f"Ignoring unknown command: {discriminator!r}")
        return None

    try:
        return _command_adapter.validate_python(dict(message))
    except ValidationError as e:
        raise wrap_command_error(e, message) from e
