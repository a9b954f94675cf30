"""Device abstraction and access layer."""

from .base import BaseDevice, InterfaceProvider
from .accessor import (
    add_property_listener,
    capitalize,
    get_property,
    invoke_method,
    remove_property_listener,
    resolve_interface,
    set_property,
    validate_member_name,
)
from .blocking import BlockingDeviceAccessor

__all__ = [
    "BaseDevice",
    "InterfaceProvider",
    "BlockingDeviceAccessor",
    "add_property_listener",
    "capitalize",
    "get_property",
    "invoke_method",
    "remove_property_listener",
    "resolve_interface",
    "set_property",
    "validate_member_name",
]
