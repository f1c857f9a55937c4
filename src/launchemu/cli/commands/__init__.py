"""CLI commands for launchemu."""

from .config import config
from .midi import midi_group
from .replay import replay
from .run import run

__all__ = ["config", "midi_group", "replay", "run"]
