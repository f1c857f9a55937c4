"""Controller-side API: command client and event listener."""

from .client import EmulatorClient
from .listener import EventHandler, LaunchpadListener, LaunchpadListenerAdapter

__all__ = [
    "EmulatorClient",
    "EventHandler",
    "LaunchpadListener",
    "LaunchpadListenerAdapter",
]
