"""Message transport: in-process loopback bus and JSON-lines framing."""

from .channel import CONTROLLER_ADDRESS, DEVICE_ADDRESS, LoopbackChannel, MessageHandler
from .jsonl import read_messages, write_message

__all__ = [
    "CONTROLLER_ADDRESS",
    "DEVICE_ADDRESS",
    "LoopbackChannel",
    "MessageHandler",
    "read_messages",
    "write_message",
]
