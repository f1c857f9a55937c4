"""Allow running as `python -m launchemu`."""

from launchemu.cli.main import cli

if __name__ == "__main__":
    cli()
