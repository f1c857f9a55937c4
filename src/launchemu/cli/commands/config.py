"""Config command implementations."""

from pathlib import Path
from typing import Optional

import click

from launchemu.exceptions import ConfigurationError
from launchemu.models import EmulatorConfig
from launchemu.models.config import DEFAULT_CONFIG_PATH
from launchemu.utils import PydanticPersistence


@click.group(name="config")
@click.option(
    "--path",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file to use (default: {DEFAULT_CONFIG_PATH})",
)
@click.pass_context
def config(ctx, config_path: Optional[Path]):
    """Show or create the emulator configuration."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path or DEFAULT_CONFIG_PATH


@config.command(name="show")
@click.pass_context
def show_config(ctx):
    """Display the effective configuration."""
    from ..output import echo_error

    path: Path = ctx.obj["config_path"]
    try:
        config_obj = EmulatorConfig.load_or_default(path)
    except ConfigurationError as e:
        echo_error(e)
        ctx.exit(1)
        return

    source = str(path) if path.exists() else "defaults (no config file)"
    click.echo(f"Configuration from: {source}\n")
    for name, value in config_obj.model_dump(mode="json").items():
        click.echo(f"  {name}: {value}")


@config.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the config file location."""
    click.echo(str(ctx.obj["config_path"]))


@config.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init_config(ctx, force: bool):
    """Write a config file with default values."""
    path: Path = ctx.obj["config_path"]
    if force:
        EmulatorConfig().save(path)
        click.echo(f"Wrote default configuration to {path}")
        return

    if path.exists():
        click.echo(f"Config file already exists: {path} (use --force to overwrite)")
        return

    PydanticPersistence.ensure_valid_or_create(path, EmulatorConfig)
    click.echo(f"Wrote default configuration to {path}")
