"""Emulator configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_serializer

from launchemu.utils.persistence import PydanticPersistence

DEFAULT_HOME = Path.home() / ".launchemu"
DEFAULT_CONFIG_PATH = DEFAULT_HOME / "config.json"


class EmulatorConfig(BaseModel):
    """Emulator configuration and settings."""

    # Protocol
    strict_commands: bool = Field(
        default=False,
        description="Reject unknown commands with an error instead of ignoring them",
    )

    # Display
    default_brightness: int = Field(
        default=15, ge=0, le=15, description="Brightness level applied at startup (0-15)"
    )

    # MIDI bridge
    midi_input_port: str | None = Field(
        default=None, description="MIDI input port carrying controller commands (None = disabled)"
    )
    midi_output_port: str | None = Field(
        default=None, description="MIDI output port receiving input events (None = disabled)"
    )

    # Logging
    log_dir: Path = Field(
        default_factory=lambda: DEFAULT_HOME / "logs",
        description="Directory for rotating log files",
    )

    @field_serializer("log_dir")
    def serialize_path(self, path: Path) -> str:
        """Serialize Path to string."""
        return str(path)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "EmulatorConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.launchemu/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        path = path or DEFAULT_CONFIG_PATH
        try:
            return PydanticPersistence.load_json(path, cls)
        except FileNotFoundError:
            return cls()

    def save(self, path: Path | None = None) -> None:
        """Save config to file (keeps a .bak of the previous version)."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
