"""Textual terminal UI for the emulator."""

from .app import EmulatorApp

__all__ = ["EmulatorApp"]
