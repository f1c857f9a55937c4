"""Tests for wire command parsing and event messages."""

import pytest

from launchemu.exceptions import ProtocolError, UnknownCommandError
from launchemu.models import BackBufferOperation, BufferId, Color
from launchemu.protocol import (
    COMMAND_TYPES,
    BuffersCommand,
    ButtonLightCommand,
    InputEvent,
    InputEventType,
    PadLightCommand,
    ResetCommand,
    SelfTestCommand,
    parse_command,
)


class TestParseCommand:
    """Test parsing raw messages into commands."""

    def test_every_discriminator_is_known(self):
        """Test the set of command discriminators."""
        assert COMMAND_TYPES == {"RST", "PADLGT", "BTNLGT", "BRGHT", "BUF", "TST"}

    def test_reset(self):
        """Test parsing RST."""
        assert isinstance(parse_command({"evt": "RST"}), ResetCommand)

    def test_pad_light(self):
        """Test parsing PADLGT."""
        command = parse_command(
            {"evt": "PADLGT", "x": 3, "y": 4, "c": {"r": 2, "g": 1}, "o": "CLEAR"}
        )

        assert isinstance(command, PadLightCommand)
        assert (command.x, command.y) == (3, 4)
        assert command.c == Color.of(2, 1)
        assert command.o is BackBufferOperation.CLEAR

    def test_button_light(self):
        """Test parsing BTNLGT."""
        command = parse_command({"evt": "BTNLGT", "t": True, "i": 7, "c": {"r": 0, "g": 1}})

        assert isinstance(command, ButtonLightCommand)
        assert command.t is True
        assert command.o is BackBufferOperation.NONE

    def test_buffers_defaults(self):
        """Test the BUF defaults."""
        command = parse_command({"evt": "BUF", "v": "BUFFER_1", "w": "BUFFER_0"})

        assert isinstance(command, BuffersCommand)
        assert command.v is BufferId.BUFFER_1
        assert command.c is False
        assert command.a is False

    def test_self_test(self):
        """Test parsing TST."""
        assert parse_command({"evt": "TST", "i": 15}) == SelfTestCommand(i=15)

    @pytest.mark.parametrize("message", [{"evt": "XYZ"}, {}, {"evt": None}, {"evt": ["RST"]}])
    def test_unknown_is_ignored(self, message):
        """Test that unknown commands parse to None."""
        assert parse_command(message) is None

    def test_unknown_in_strict_mode(self):
        """Test that strict parsing rejects unknown commands."""
        with pytest.raises(UnknownCommandError):
            parse_command({"evt": "XYZ"}, strict=True)

    def test_missing_discriminator_in_strict_mode(self):
        """Test that strict parsing rejects a missing evt."""
        with pytest.raises(UnknownCommandError) as exc_info:
            parse_command({"x": 1}, strict=True)
        assert exc_info.value.discriminator is None

    def test_protocol_error_details(self):
        """Test the fields of a ProtocolError."""
        with pytest.raises(ProtocolError) as exc_info:
            parse_command({"evt": "PADLGT", "x": 0, "y": 12, "c": {"r": 0, "g": 0}})

        error = exc_info.value
        assert error.field == "y"
        assert error.value == 12
        assert "'y'" in error.user_message
        assert error.recoverable

    def test_commands_are_immutable(self):
        """Test that commands are frozen."""
        command = parse_command({"evt": "BRGHT", "b": 3})
        with pytest.raises(Exception):
            command.b = 4


class TestCommandMessages:
    """Test command serialization."""

    def test_pad_light_message(self):
        """Test serializing a pad light command."""
        command = PadLightCommand(x=1, y=2, c=Color.of(3, 2), o=BackBufferOperation.COPY)

        assert command.to_message() == {
            "evt": "PADLGT",
            "x": 1,
            "y": 2,
            "c": {"r": 3, "g": 2},
            "o": "COPY",
        }

    def test_buffers_message(self):
        """Test serializing a buffers command."""
        command = BuffersCommand(v=BufferId.BUFFER_0, w=BufferId.BUFFER_1, c=True)

        assert command.to_message() == {
            "evt": "BUF",
            "v": "BUFFER_0",
            "w": "BUFFER_1",
            "c": True,
            "a": False,
        }


class TestInputEvent:
    """Test outbound event messages."""

    def test_pad_event_message(self):
        """Test serializing a pad event."""
        event = InputEvent(evt=InputEventType.PAD_PRESSED, x=0, y=7)
        assert event.to_message() == {"evt": "PP", "x": 0, "y": 7}

    def test_text_scrolled_has_no_coordinates(self):
        """Test that TS carries no coordinates."""
        assert InputEvent(evt=InputEventType.TEXT_SCROLLED).to_message() == {"evt": "TS"}

    def test_from_message(self):
        """Test parsing an event message."""
        event = InputEvent.from_message({"evt": "BR", "x": -1, "y": 3})
        assert event.evt is InputEventType.BUTTON_RELEASED
        assert event.evt.is_button
        assert not event.evt.is_press

    def test_coordinate_range(self):
        """Test that event coordinates are range-checked."""
        with pytest.raises(ValueError):
            InputEvent(evt=InputEventType.PAD_PRESSED, x=8, y=0)
