"""In-process message bus between controller and emulated device."""

import json
import logging
from collections import defaultdict
from threading import Lock
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEVICE_ADDRESS = "launchemu:device"
CONTROLLER_ADDRESS = "launchemu:controller"

MessageHandler = Callable[[dict[str, Any]], None]


class LoopbackChannel:
    """
    Address-based synchronous message bus.

    Each published message is serialized to JSON and decoded again before
    delivery, so handlers only ever see wire-compatible payloads and never
    share objects with the publisher. Delivery happens on the publishing
    thread, to every handler of the address in registration order.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[MessageHandler]] = defaultdict(list)
        self._lock = Lock()

    def register_handler(self, address: str, handler: MessageHandler) -> None:
        """Subscribe a handler to an address."""
        with self._lock:
            self._handlers[address].append(handler)
        logger.debug(f"Registered handler on {address}: {handler}")

    def unregister_handler(self, address: str, handler: MessageHandler) -> None:
        """Unsubscribe a handler. Unknown handlers are ignored."""
        with self._lock:
            handlers = self._handlers.get(address, [])
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Unregistered handler on {address}: {handler}")

    def has_handlers(self, address: str) -> bool:
        with self._lock:
            return bool(self._handlers.get(address))

    def publish(self, address: str, message: dict[str, Any]) -> None:
        """
        Deliver a message to every handler of an address.

        Args:
            address: Destination address
            message: JSON-serializable message

        Raises:
            TypeError: If the message is not JSON-serializable
        """
        payload = json.dumps(message)
        with self._lock:
            handlers = list(self._handlers.get(address, []))
        if not handlers:
            logger.debug(f"No handler on {address}, dropping {payload}")
            return
        for handler in handlers:
            handler(json.loads(payload))
