"""Root of the launchemu exception hierarchy.

Every error raised on purpose by launchemu is a LaunchEmuError, so the CLI
and the UI can report them uniformly from `user_message` and
`recovery_hint` while logs get `technical_message`.
"""

from typing import Optional


class LaunchEmuError(Exception):
    """
    Base exception for all launchemu errors.

    Attributes:
        user_message: Short message for the terminal
        technical_message: Message for the log file (defaults to user_message)
        recoverable: The emulator can keep running after this error
        recovery_hint: What the user can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
