"""Protocol-related exceptions.

This module defines exceptions raised at the device boundary:
- ProtocolError: A recognized command or event carries an invalid field
- UnknownCommandError: A command discriminator is not recognized (strict mode only)
"""

from typing import Any

from .base import LaunchEmuError


class ProtocolError(LaunchEmuError):
    """A protocol message failed validation and was rejected."""

    def __init__(self, field: str, value: Any = None, reason: str = "invalid value"):
        """
        Initialize protocol error.

        Args:
            field: Name of the offending message field (dotted for nested fields)
            value: The rejected value
            reason: Why the value was rejected
        """
        super().__init__(
            user_message=f"Invalid protocol field '{field}': {reason}",
            technical_message=f"Protocol validation failed for {field}={value!r}: {reason}",
            recoverable=True,
            recovery_hint="Fix the controller so it only sends values within the documented ranges.",
        )
        self.field = field
        self.value = value
        self.reason = reason


class UnknownCommandError(ProtocolError):
    """Command discriminator is not part of the protocol."""

    def __init__(self, discriminator: Any):
        """
        Initialize unknown command error.

        Args:
            discriminator: The unrecognized `evt` value
        """
        super().__init__(
            field="evt",
            value=discriminator,
            reason=f"unknown command {discriminator!r}",
        )
        self.recovery_hint = (
            "Disable strict mode (strict_commands: false) to ignore unknown commands."
        )
        self.discriminator = discriminator
