"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from launchemu import __version__
from launchemu.models.config import DEFAULT_HOME

from .commands import config, midi_group, replay, run

logger = logging.getLogger(__name__)


def resolve_log_path(debug: bool, log_file: Optional[Path], log_dir: Optional[Path] = None) -> Path:
    """Get the log file used for a combination of logging flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "launchemu-debug.log"
    return (log_dir or DEFAULT_HOME / "logs") / "launchemu.log"


def setup_logging(
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
    log_dir: Optional[Path] = None,
) -> Path:
    """
    Configure logging for the application.

    The terminal UI owns stdout, so everything goes to a rotating log file.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode logging to ./launchemu-debug.log
        log_file: Custom log file path (optional)
        log_level: Log level for a custom log file (DEBUG/INFO/WARNING/ERROR)
        log_dir: Directory of the default log file

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit log level wins for custom log files
    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file, log_dir)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="launchemu")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG)")
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug mode (DEBUG level, logs to ./launchemu-debug.log)",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Custom log file path",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Log level for file logging (default: INFO)",
)
def cli(ctx, verbose: int, debug: bool, log_file: Optional[Path], log_level: str):
    """
    Launchpad Emulator - an on-screen Launchpad S driven over MIDI or JSON commands.

    Without a subcommand, starts the terminal emulator (same as `launchemu run`).

    \b
    Examples:
      # Start the emulator
      launchemu

      # Drive it from controller software through virtual MIDI ports
      launchemu run --midi-in "Launchpad Emu In" --midi-out "Launchpad Emu Out"

      # Apply a command file and print the resulting display
      launchemu replay commands.jsonl

      # Enable debug logging
      launchemu --debug run

      # List MIDI ports
      launchemu midi list
    """
    ctx.ensure_object(dict)
    ctx.obj["logging"] = {
        "verbose": verbose,
        "debug": debug,
        "log_file": log_file,
        "log_level": log_level,
    }

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


cli.add_command(run)
cli.add_command(replay)
cli.add_command(config)
cli.add_command(midi_group)

if __name__ == "__main__":
    cli()
