"""Errors raised while loading the emulator configuration file.

- ConfigurationError: Base class for configuration errors
- ConfigFileInvalidError: The file is not readable JSON
- ConfigValidationError: A value is outside what EmulatorConfig accepts
"""

from typing import Any, Optional

from .base import LaunchEmuError

# Substring of the parse error -> (user message, hint)
_PARSE_HINTS = {
    "trailing comma": (
        "Configuration file has a trailing comma",
        "JSON does not allow a comma after the last item of an object or array.",
    ),
    "empty": (
        "Configuration file is empty",
        "Run 'launchemu config init --force' to write the defaults.",
    ),
}

# Substring of the field name -> hint
_FIELD_HINTS = {
    "brightness": "Brightness levels range from 0 (dimmest) to 15 (brightest).",
    "midi": "Run 'launchemu midi list' to see the available MIDI ports.",
}


class ConfigurationError(LaunchEmuError):
    """Configuration is invalid or cannot be loaded."""
    pass


class ConfigFileInvalidError(ConfigurationError):
    """Configuration file cannot be parsed."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Args:
            file_path: Path of the config file
            parse_error: Message of the underlying parser
        """
        user_msg = "Configuration file has invalid syntax"
        hint = "Check for missing quotes, unclosed braces or stray commas."
        for needle, (message, specific_hint) in _PARSE_HINTS.items():
            if needle in parse_error.lower():
                user_msg, hint = message, specific_hint
                break

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=f"{hint}\nConfig file: {file_path}",
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A configuration value is rejected by the model."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        """
        Args:
            field: Dotted name of the rejected field
            value: The rejected value
            error_msg: Validation message
            file_path: Config file the value came from
        """
        lines = [f"Fix '{field}' in your configuration."]
        if file_path:
            lines.append(f"Config file: {file_path}")
        lines.extend(hint for needle, hint in _FIELD_HINTS.items() if needle in field.lower())

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(lines),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
