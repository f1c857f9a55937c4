"""Thread-safe observer list shared by the dispatcher and the bridge layers."""

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Observer list with thread-safe registration and notification.

    Callbacks run outside the lock, so an observer may register or
    unregister others while being notified. A failing observer is logged
    and does not prevent the remaining observers from being called.

    Example:
        ```python
        observers = ObserverManager[DisplayObserver](observer_type_name="display")
        observers.register(renderer)
        observers.notify("on_display_changed", command)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Initialize the observer manager.

        Args:
            observer_type_name: Name of the observer type for logging (e.g., "display")
        """
        self._observers: list[T] = []
        self._lock = Lock()
        self._observer_type_name = observer_type_name

    def register(self, observer: T) -> None:
        """Register an observer (idempotent)."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"{self._observer_type_name} observer already registered: {observer}")
                return
            self._observers.append(observer)
        logger.debug(f"Registered {self._observer_type_name} observer: {observer}")

    def unregister(self, observer: T) -> None:
        """Unregister an observer. Unknown observers are logged and ignored."""
        with self._lock:
            if observer not in self._observers:
                logger.warning(
                    f"Attempted to unregister unknown {self._observer_type_name} observer: {observer}"
                )
                return
            self._observers.remove(observer)
        logger.debug(f"Unregistered {self._observer_type_name} observer: {observer}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Call ``callback_name`` on every registered observer.

        Args:
            callback_name: Name of the observer method to call
            *args: Positional arguments for the callback
            **kwargs: Keyword arguments for the callback
        """
        with self._lock:
            observers = list(self._observers)

        for observer in observers:
            try:
                getattr(observer, callback_name)(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Error notifying {self._observer_type_name} observer {observer} "
                    f"via {callback_name}: {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Remove all registered observers."""
        with self._lock:
            self._observers.clear()

    def __contains__(self, observer: T) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)
