"""Synchronous front end for the device accessor."""

from typing import Any, Callable, Optional, Sequence
import logging

from . import accessor
from .accessor import InterfaceDesignator
from ..storage.settings import AccessSettings
from ..utils.async_helpers import AsyncBridge

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# Per-call marker for "use the accessor timeout"
_USE_DEFAULT = object()


class BlockingDeviceAccessor:
    """Blocking access to devices for code that does not run an event loop.

    Calls are run on an AsyncBridge loop and waited for with a timeout, so a
    device that never completes an asynchronous getter, setter or method
    does not hang the caller forever.

    Usage::

        with BlockingDeviceAccessor(timeout=5) as devices:
            devices.set_property(thermostat, "Thermostat", "target", 21.5)
            temperature = devices.get_property(thermostat, "Thermostat", "temperature")
    """

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        bridge: Optional[AsyncBridge] = None,
    ):
        """Initialize the accessor.

        Args:
            timeout: Default seconds to wait per call, or None for no limit
            bridge: Bridge to run calls on; a private one is created and
                owned by this accessor if not given
        """
        self.timeout = timeout
        self._owns_bridge = bridge is None
        self._bridge = bridge or AsyncBridge(name="DeviceAccessBridge")

    @classmethod
    def from_settings(
        cls, settings: AccessSettings, bridge: Optional[AsyncBridge] = None
    ) -> "BlockingDeviceAccessor":
        """Create an accessor using the configured call timeout."""
        return cls(timeout=settings.call_timeout, bridge=bridge)

    def start(self) -> None:
        self._bridge.start()

    def close(self) -> None:
        """Stop the bridge if this accessor created it."""
        if self._owns_bridge:
            self._bridge.stop()

    def _wait(self, coro, timeout: Any) -> Any:
        if not self._bridge.is_running:
            self.start()
        try:
            return self._bridge.run(coro, self.timeout if timeout is _USE_DEFAULT else timeout)
        except TimeoutError:
            logger.warning("Device call timed out")
            raise

    def get_property(
        self,
        device: Any,
        interface: InterfaceDesignator,
        property_name: str,
        timeout: Any = _USE_DEFAULT,
    ) -> Any:
        """Get a property value, blocking until the device returns it.

        Args:
            timeout: Seconds to wait for this call, None for no limit;
                defaults to the accessor timeout
        """
        return self._wait(accessor.get_property(device, interface, property_name), timeout)

    def set_property(
        self,
        device: Any,
        interface: InterfaceDesignator,
        property_name: str,
        value: Any,
        timeout: Any = _USE_DEFAULT,
    ) -> None:
        """Set a property value, blocking until the device accepts it."""
        self._wait(accessor.set_property(device, interface, property_name, value), timeout)

    def invoke_method(
        self,
        device: Any,
        interface: InterfaceDesignator,
        method_name: str,
        args: Sequence = (),
        timeout: Any = _USE_DEFAULT,
    ) -> Any:
        """Invoke a method, blocking until it returns."""
        return self._wait(
            accessor.invoke_method(device, interface, method_name, args), timeout
        )

    def add_property_listener(
        self,
        device: Any,
        interface: InterfaceDesignator,
        property_name: str,
        callback: Callable[[Any], None],
    ) -> None:
        accessor.add_property_listener(device, interface, property_name, callback)

    def remove_property_listener(
        self,
        device: Any,
        interface: InterfaceDesignator,
        property_name: str,
        callback: Callable[[Any], None],
    ) -> None:
        accessor.remove_property_listener(device, interface, property_name, callback)

    def __enter__(self) -> "BlockingDeviceAccessor":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
