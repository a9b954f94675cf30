"""Property notifications for devices that support them."""

from typing import Any, Callable, Protocol, runtime_checkable
import logging

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


@runtime_checkable
class Notifiable(Protocol):
    """Capability of an interface view that can notify property changes."""

    def on(self, event: str, callback: Listener) -> Any:
        ...

    def remove_listener(self, event: str, callback: Listener) -> Any:
        ...


class Notifier:
    """Mixin giving a device or interface view the notification capability.

    Listeners are keyed by property name and are called with the new value
    of the property, in the order they were added.
    """

    @property
    def _listeners(self) -> dict[str, list[Listener]]:
        try:
            return self.__dict__["_notifier_listeners"]
        except KeyError:
            listeners: dict[str, list[Listener]] = {}
            self.__dict__["_notifier_listeners"] = listeners
            return listeners

    def on(self, event: str, callback: Listener) -> "Notifier":
        """Add a listener for an event.

        Args:
            event: Name of the event, usually a property name
            callback: Function to call with the event value

        Returns:
            self, so calls can be chained
        """
        self._listeners.setdefault(event, []).append(callback)
        return self

    def remove_listener(self, event: str, callback: Listener) -> "Notifier":
        """Remove the most recently added registration of a listener.

        Removing a listener that was never added is not an error.
        """
        callbacks = self._listeners.get(event)
        if callbacks:
            for i in range(len(callbacks) - 1, -1, -1):
                if callbacks[i] == callback:
                    del callbacks[i]
                    break
            if not callbacks:
                del self._listeners[event]
        return self

    def emit(self, event: str, value: Any = None) -> bool:
        """Call every listener of an event with a value.

        Args:
            event: Name of the event
            value: Value passed to each listener

        Returns:
            True if the event had listeners
        """
        callbacks = list(self._listeners.get(event, ()))
        for callback in callbacks:
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Error in listener for {event}: {e}")
        return bool(callbacks)

    def listener_count(self, event: str) -> int:
        """Get the number of listeners registered for an event."""
        return len(self._listeners.get(event, ()))
