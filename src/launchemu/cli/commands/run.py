"""Run command - launches the terminal emulator."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--commands",
    "-c",
    "commands_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON-lines command file applied before the display opens",
)
@click.option("--midi-in", type=str, default=None, help="MIDI input port carrying commands")
@click.option("--midi-out", type=str, default=None, help="MIDI output port receiving input events")
@click.option(
    "--strict/--lenient",
    default=None,
    help="Reject unknown commands instead of ignoring them (default: from config)",
)
@click.pass_context
def run(
    ctx,
    commands_file: Optional[Path],
    midi_in: Optional[str],
    midi_out: Optional[str],
    strict: Optional[bool],
):
    """
    Launch the terminal emulator.

    Click a pad or button to press it; Ctrl+click keeps it pressed until
    it is clicked again (or Escape releases everything).

    \b
    Examples:
      # Plain emulator
      launchemu run

      # Pre-light the grid from a file
      launchemu run --commands intro.jsonl

      # Bridge to controller software over MIDI
      launchemu run --midi-in "LP Emu In" --midi-out "LP Emu Out"
    """
    # Lazy imports keep `--help` fast
    from launchemu.emulator import EmulatorLaunchpad
    from launchemu.midi import MidiBridge
    from launchemu.models import EmulatorConfig
    from launchemu.transport import read_messages
    from launchemu.tui import EmulatorApp

    from ..main import resolve_log_path, setup_logging
    from ..output import echo_error

    log_options = (ctx.obj or {}).get("logging", {})
    debug = log_options.get("debug", False)
    log_file = log_options.get("log_file")
    log_path = resolve_log_path(debug, log_file)

    launchpad = None
    bridge = None
    try:
        config_obj = EmulatorConfig.load_or_default()
        log_path = setup_logging(
            log_options.get("verbose", 0),
            debug,
            log_file,
            log_options.get("log_level", "INFO"),
            config_obj.log_dir,
        )
        logger.info("Starting Launchpad Emulator")

        if strict is not None:
            config_obj = config_obj.model_copy(update={"strict_commands": strict})

        launchpad = EmulatorLaunchpad(config_obj)

        if commands_file:
            with open(commands_file, encoding="utf-8") as f:
                for message in read_messages(f):
                    launchpad.dispatcher.apply(message)
            logger.info(f"Applied commands from {commands_file}")

        input_port = midi_in or config_obj.midi_input_port
        output_port = midi_out or config_obj.midi_output_port
        if input_port or output_port:
            bridge = MidiBridge(launchpad.dispatcher, input_port, output_port)
            bridge.start()

        EmulatorApp(launchpad.dispatcher, bridge=bridge).run()

    except KeyboardInterrupt:
        logger.info("Emulator interrupted by user")
        click.echo("\nShutting down...", err=True)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running emulator")
        echo_error(e, log_path)
        sys.exit(1)
    finally:
        if bridge is not None:
            bridge.stop()
        if launchpad is not None:
            launchpad.close()
