"""Base device abstraction layer."""

from typing import Any, Optional, Protocol, runtime_checkable
import logging

logger = logging.getLogger(__name__)


@runtime_checkable
class InterfaceProvider(Protocol):
    """Capability of a device that hands out views of itself by interface name."""

    def as_interface(self, name: str) -> Optional[Any]:
        ...


class BaseDevice:
    """Convenience base class for devices that implement several interfaces.

    Each interface is backed by a view object registered under the
    interface name. Views are usually small objects (or dicts) that expose
    the properties, getters, setters and methods of one interface. A device
    that implements every member directly does not need this class at all.
    """

    def __init__(self, device_id: str, name: str, model: Optional[str] = None):
        """Initialize a device.

        Args:
            device_id: Unique identifier for the device
            name: Human-readable name
            model: Device model (if known)
        """
        self.device_id = device_id
        self.name = name
        self.model = model
        self._interfaces: dict[str, Any] = {}

    @property
    def interface_names(self) -> list[str]:
        """Get the names of all implemented interfaces."""
        return list(self._interfaces)

    def add_interface(self, name: str, view: Any) -> None:
        """Register the view that implements an interface.

        Args:
            name: Interface name, usually a dotted schema name
            view: Object or mapping implementing the interface members
        """
        if not name:
            raise ValueError("Interface name must be nonempty")
        if view is None:
            raise ValueError("Interface view must not be None")

        if name in self._interfaces:
            logger.debug(f"Replacing interface {name} on {self.device_id}")
        self._interfaces[name] = view

    def remove_interface(self, name: str) -> Optional[Any]:
        """Remove an interface, returning its view if it was registered."""
        return self._interfaces.pop(name, None)

    def implements(self, name: str) -> bool:
        """Check if the device implements an interface."""
        return name in self._interfaces

    def as_interface(self, name: str) -> Optional[Any]:
        """Get the view of this device that implements an interface.

        Args:
            name: Interface name

        Returns:
            The registered view, or None if the interface is not implemented
        """
        return self._interfaces.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Convert device to a dictionary for serialization."""
        return {
            "id": self.device_id,
            "name": self.name,
            "model": self.model,
            "interfaces": self.interface_names,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.device_id} name={self.name}>"
