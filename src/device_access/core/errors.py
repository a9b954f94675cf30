"""Exceptions raised by the device access layer."""

from typing import Optional


class DeviceAccessError(Exception):
    """Base class for all device access errors."""


class InvalidArgumentError(DeviceAccessError, TypeError):
    """A call into the accessor was made with malformed inputs."""


class MemberNotImplementedError(DeviceAccessError, NotImplementedError):
    """The device does not implement a requested interface or member.

    Attributes:
        interface_name: Name of the interface the call was made through
        member_name: Name of the missing member, or None when the whole
            interface is missing
    """

    def __init__(
        self,
        message: str,
        interface_name: Optional[str] = None,
        member_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.interface_name = interface_name
        self.member_name = member_name


class UnsupportedContractError(DeviceAccessError, ValueError):
    """A schema describes a contract that cannot be expressed."""
