"""Error output shared by CLI commands."""

from pathlib import Path
from typing import Optional

import click

from launchemu.exceptions import format_error_for_display


def echo_error(error: Exception, log_path: Optional[Path] = None) -> None:
    """Print an error banner with its recovery hint to stderr."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    if log_path is not None:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
        click.echo("For logging options, run: launchemu --help", err=True)
