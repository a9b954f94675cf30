"""Uniform access to device properties, methods and notifications."""

from .core.errors import (
    DeviceAccessError,
    InvalidArgumentError,
    MemberNotImplementedError,
    UnsupportedContractError,
)
from .core.events import Notifiable, Notifier
from .devices.accessor import (
    add_property_listener,
    capitalize,
    get_property,
    invoke_method,
    remove_property_listener,
    resolve_interface,
    set_property,
    validate_member_name,
)
from .devices.base import BaseDevice, InterfaceProvider
from .devices.blocking import BlockingDeviceAccessor

__version__ = "0.1.0"

__all__ = [
    "DeviceAccessError",
    "InvalidArgumentError",
    "MemberNotImplementedError",
    "UnsupportedContractError",
    "Notifiable",
    "Notifier",
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
