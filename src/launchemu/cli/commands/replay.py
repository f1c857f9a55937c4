"""Replay command - applies a command file headlessly and prints the display."""

import logging
import sys
from pathlib import Path

import click

from launchemu.emulator import CommandDispatcher, DeviceState
from launchemu.exceptions import LaunchEmuError
from launchemu.models import BufferId
from launchemu.transport import read_messages

from ..output import echo_error

logger = logging.getLogger(__name__)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strict", is_flag=True, help="Fail on unknown commands instead of ignoring them")
@click.option(
    "--buffer",
    "buffer",
    type=click.Choice(["visible", "0", "1"]),
    default="visible",
    help="Buffer to print (default: the visible one)",
)
def replay(file: Path, strict: bool, buffer: str):
    """
    Apply a JSON-lines command file and print the resulting display.

    Cells print as '.' when off, or as their red and green intensity
    digits when lit (e.g. '30' is full red). The first row is the top
    button row and the last column holds the side buttons.

    \b
    Example:
      launchemu replay demo.jsonl --buffer 1
    """
    dispatcher = CommandDispatcher(DeviceState(), strict=strict)
    applied = 0
    ignored = 0

    try:
        with open(file, encoding="utf-8") as f:
            for message in read_messages(f):
                if dispatcher.apply(message) is None:
                    ignored += 1
                else:
                    applied += 1
    except LaunchEmuError as e:
        logger.error(f"Replay of {file} failed after {applied} commands: {e.technical_message}")
        echo_error(e)
        sys.exit(1)

    state = dispatcher.state
    selected = None if buffer == "visible" else BufferId.from_index(int(buffer))
    click.echo(dispatcher.render_text(selected))
    click.echo("")
    click.echo(f"Brightness: {state.brightness:.2f}")
    click.echo(f"Visible buffer: {state.visible_buffer}  Write buffer: {state.write_buffer}")
    click.echo(f"Commands: {applied} applied, {ignored} ignored")
