"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from launchemu.emulator import CommandDispatcher, DeviceState
from launchemu.models import Color


class RecordingSink:
    """Event sink remembering every outbound message."""

    def __init__(self):
        self.messages: list[dict] = []

    def __call__(self, message: dict) -> None:
        self.messages.append(message)


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def state():
    """Create a fresh all-off device state."""
    return DeviceState()


@pytest.fixture
def sink():
    """Create a recording event sink."""
    return RecordingSink()


@pytest.fixture
def dispatcher(state, sink):
    """Create a dispatcher attached to the state, recording events."""
    return CommandDispatcher(state, sink=sink).attach()


@pytest.fixture
def red():
    return Color.of(3, 0)


@pytest.fixture
def commands_file(temp_dir):
    """Create a JSON-lines command file lighting a few cells."""
    path = temp_dir / "commands.jsonl"
    path.write_text(
        "# corners\n"
        '{"evt": "RST"}\n'
        '{"evt": "PADLGT", "x": 0, "y": 0, "c": {"r": 3, "g": 0}}\n'
        "\n"
        '{"evt": "PADLGT", "x": 7, "y": 7, "c": {"r": 0, "g": 3}}\n'
        '{"evt": "BTNLGT", "t": true, "i": 2, "c": {"r": 3, "g": 3}}\n'
        '{"evt": "BTNLGT", "t": false, "i": 5, "c": {"r": 1, "g": 2}}\n'
        '{"evt": "NOPE"}\n'
        '{"evt": "BRGHT", "b": 10}\n',
        encoding="utf-8",
    )
    return path
