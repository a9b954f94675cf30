"""Core modules for device access."""

from .errors import (
    DeviceAccessError,
    InvalidArgumentError,
    MemberNotImplementedError,
    UnsupportedContractError,
)
from .events import Notifiable, Notifier

__all__ = [
    "DeviceAccessError",
    "InvalidArgumentError",
    "MemberNotImplementedError",
    "UnsupportedContractError",
    "Notifiable",
    "Notifier",
]
