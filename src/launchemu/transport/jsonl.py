"""JSON-lines framing for command and event streams.

One message per line. Blank lines and lines starting with ``#`` are
skipped when reading, so command files can be commented::

    # light the corners red
    {"evt": "PADLGT", "x": 0, "y": 0, "c": {"r": 3, "g": 0}}
    {"evt": "PADLGT", "x": 7, "y": 7, "c": {"r": 3, "g": 0}}
"""

import json
from typing import Any, Iterator, TextIO

from launchemu.exceptions import ProtocolError


def read_messages(stream: TextIO) -> Iterator[dict[str, Any]]:
    """
    Yield messages from a JSON-lines stream.

    Raises:
        ProtocolError: If a line is not a JSON object (field names the line)
    """
    for line_number, line in enumerate(stream, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            raise ProtocolError(f"line {line_number}", line, f"invalid JSON: {e.msg}") from e
        if not isinstance(message, dict):
            raise ProtocolError(f"line {line_number}", message, "expected a JSON object")
        yield message


def write_message(stream: TextIO, message: dict[str, Any]) -> None:
    """Write one message as a single JSON line."""
    stream.write(json.dumps(message, separators=(",", ":")))
    stream.write("\n")
