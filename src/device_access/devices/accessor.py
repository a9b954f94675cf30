"""Uniform access to device properties, methods and notifications.

Devices expose their interfaces in whatever shape is natural to them: plain
attributes, ``get<Name>``/``set<Name>`` methods, ``get<Name>Async``/
``set<Name>Async`` coroutines, or a mapping of member names. The functions in
this module locate the right member for a named interface, await the result if
the device returned something awaitable, and raise a uniform error when the
device has no implementation of the member.

Every call resolves the interface view afresh; nothing is cached between calls.
"""

from collections.abc import Mapping, Sequence
from concurrent.futures import Future
from types import MemberDescriptorType
from typing import Any, Callable, Union
import asyncio
import inspect
import logging

from ..core.errors import InvalidArgumentError, MemberNotImplementedError

logger = logging.getLogger(__name__)

# Designator is an interface name or anything with a ``name`` attribute,
# such as a ThingSchema.
InterfaceDesignator = Union[str, Any]

_MISSING = object()

_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool)


def capitalize(name: str) -> str:
    """Uppercase the first character of a member name.

    Names of one character or fewer are returned unchanged.
    """
    if len(name) > 1:
        return name[0].upper() + name[1:]
    return name


def validate_member_name(name: Any) -> None:
    """Check that a property, method or event name is a nonempty string.

    Raises:
        InvalidArgumentError: If the name is not a string or is empty
    """
    if not isinstance(name, str):
        raise InvalidArgumentError("Member name argument must be a string.")
    if not name:
        raise InvalidArgumentError("Member name argument must be nonempty.")


def _interface_name(interface: InterfaceDesignator) -> Any:
    if isinstance(interface, str):
        return interface
    return getattr(interface, "name", None)


def _describe(interface: InterfaceDesignator) -> str:
    name = _interface_name(interface)
    return name if isinstance(name, str) else repr(interface)


def _lookup(view: Any, member: str) -> Any:
    """Get a member of an interface view, or _MISSING if it has none."""
    if isinstance(view, Mapping):
        return view.get(member, _MISSING)
    try:
        declared = inspect.getattr_static(view, member)
    except AttributeError:
        # Only __getattr__ can still supply it; its AttributeError means absent
        return getattr(view, member, _MISSING)
    if isinstance(declared, MemberDescriptorType):
        # Unset __slots__ entry
        return getattr(view, member, _MISSING)
    # Declared member: errors raised while reading it belong to the device
    return getattr(view, member)


def _assign(view: Any, member: str, value: Any) -> None:
    if isinstance(view, Mapping):
        view[member] = value
    else:
        setattr(view, member, value)


async def _settle(result: Any) -> Any:
    """Wait for a pending result from a device, or pass a ready one through."""
    if isinstance(result, Future):
        return await asyncio.wrap_future(result)
    if inspect.isawaitable(result):
        return await result
    return result


def resolve_interface(device: Any, interface: InterfaceDesignator) -> Any:
    """Get the view of a device that implements an interface.

    A device with an ``as_interface`` method is asked for a view by interface
    name. A device without one is assumed to implement the interface members
    directly and is returned as is.

    Args:
        device: Device instance
        interface: Interface name, or an object with a ``name`` attribute

    Returns:
        The interface view to dispatch against

    Raises:
        InvalidArgumentError: If the device is not an object, or the
            interface designator has no name
        MemberNotImplementedError: If the device returned no view
    """
    if device is None or isinstance(device, _SCALAR_TYPES):
        raise InvalidArgumentError("Device argument must be an object.")

    as_interface = _lookup(device, "as_interface")
    if not callable(as_interface):
        return device

    name = _interface_name(interface)
    if not isinstance(name, str):
        raise InvalidArgumentError(
            "Interface argument must be a string or have a string name."
        )

    view = as_interface(name)
    if view is None:
        logger.debug(f"Device {device!r} has no view for interface {name}")
        raise MemberNotImplementedError(
            f"Interface not implemented by device: {name}", interface_name=name
        )

    return view


async def get_property(
    device: Any, interface: InterfaceDesignator, property_name: str
) -> Any:
    """Get the value of a property on a device, using a specified interface.

    The property is looked up as a plain value on the interface view first,
    then through a ``get<Name>`` method, then through a ``get<Name>Async``
    method.

    Args:
        device: Device instance
        interface: Interface name, or an object with a ``name`` attribute
        property_name: Name of the property to get

    Returns:
        The property value, awaited if the device returned an awaitable

    Raises:
        InvalidArgumentError: If the arguments are malformed
        MemberNotImplementedError: If no convention yields the property
    """
    view = resolve_interface(device, interface)
    validate_member_name(property_name)

    value = _lookup(view, property_name)
    if value is not _MISSING:
        logger.debug(f"Got {property_name} from field")
    else:
        method_name = "get" + capitalize(property_name)
        for candidate in (method_name, method_name + "Async"):
            getter = _lookup(view, candidate)
            if callable(getter):
                logger.debug(f"Got {property_name} through {candidate}()")
                value = getter()
                break

    if value is _MISSING:
        raise MemberNotImplementedError(
            f"Property '{property_name}' getter for interface "
            f"{_describe(interface)} not implemented by device.",
            interface_name=_describe(interface),
            member_name=property_name,
        )

    return await _settle(value)


async def set_property(
    device: Any, interface: InterfaceDesignator, property_name: str, value: Any
) -> None:
    """Set the value of a property on a device, using a specified interface.

    If the interface view currently holds a value for the property, the new
    value is assigned directly. Otherwise a ``set<Name>`` method is called,
    then a ``set<Name>Async`` method.

    A property that holds a value is assigned even if its schema marks it
    read-only; write access is not checked here.

    Args:
        device: Device instance
        interface: Interface name, or an object with a ``name`` attribute
        property_name: Name of the property to set
        value: New value of the property

    Raises:
        InvalidArgumentError: If the arguments are malformed
        MemberNotImplementedError: If the device has no field or setter
    """
    view = resolve_interface(device, interface)
    validate_member_name(property_name)

    result = None
    if _lookup(view, property_name) is not _MISSING:
        logger.debug(f"Setting {property_name} by assignment")
        _assign(view, property_name, value)
    else:
        method_name = "set" + capitalize(property_name)
        for candidate in (method_name, method_name + "Async"):
            setter = _lookup(view, candidate)
            if callable(setter):
                logger.debug(f"Setting {property_name} through {candidate}()")
                result = setter(value)
                break
        else:
            raise MemberNotImplementedError(
                f"Property '{property_name}' setter for interface "
                f"{_describe(interface)} not implemented by device.",
                interface_name=_describe(interface),
                member_name=property_name,
            )

    await _settle(result)


def _check_callback(callback: Any) -> None:
    if not callable(callback):
        raise InvalidArgumentError("Callback argument must be callable.")


def add_property_listener(
    device: Any,
    interface: InterfaceDesignator,
    property_name: str,
    callback: Callable[[Any], None],
) -> None:
    """Add a listener that is called when a property sends notifications.

    The listener is registered through the ``on`` method of the interface
    view, under an event named after the property.

    Args:
        device: Device instance
        interface: Interface name, or an object with a ``name`` attribute
        property_name: Name of the property to listen to
        callback: Function called with each notified value

    Raises:
        InvalidArgumentError: If the arguments are malformed
        MemberNotImplementedError: If the view cannot notify
    """
    view = resolve_interface(device, interface)
    validate_member_name(property_name)
    _check_callback(callback)

    add_listener = _lookup(view, "on")
    if not callable(add_listener):
        raise MemberNotImplementedError(
            f"Property '{property_name}' notifier for interface "
            f"{_describe(interface)} not implemented by device.",
            interface_name=_describe(interface),
            member_name=property_name,
        )

    add_listener(property_name, callback)


def remove_property_listener(
    device: Any,
    interface: InterfaceDesignator,
    property_name: str,
    callback: Callable[[Any], None],
) -> None:
    """Remove a listener previously added to a property.

    Uses ``remove_listener`` on the interface view, or ``removeListener``
    if the view only has that.

    Raises:
        InvalidArgumentError: If the arguments are malformed
        MemberNotImplementedError: If the view cannot remove listeners
    """
    view = resolve_interface(device, interface)
    validate_member_name(property_name)
    _check_callback(callback)

    for candidate in ("remove_listener", "removeListener"):
        remove_listener = _lookup(view, candidate)
        if callable(remove_listener):
            remove_listener(property_name, callback)
            return

    raise MemberNotImplementedError(
        f"Property '{property_name}' notifier removal for interface "
        f"{_describe(interface)} not implemented by device.",
        interface_name=_describe(interface),
        member_name=property_name,
    )


async def invoke_method(
    device: Any, interface: InterfaceDesignator, method_name: str, args: Sequence
) -> Any:
    """Invoke a method on a device, using a specified interface.

    Args:
        device: Device instance
        interface: Interface name, or an object with a ``name`` attribute
        method_name: Name of the method to invoke
        args: Positional arguments for the method, as a list or tuple

    Returns:
        The method result, awaited if the method returned an awaitable;
        None for methods that return nothing

    Raises:
        InvalidArgumentError: If the arguments are malformed
        MemberNotImplementedError: If the view has no such method
    """
    view = resolve_interface(device, interface)
    validate_member_name(method_name)
    if not isinstance(args, Sequence) or isinstance(args, (str, bytes, bytearray)):
        raise InvalidArgumentError("Args argument must be a list or tuple.")

    method = _lookup(view, method_name)
    if not callable(method):
        raise MemberNotImplementedError(
            f"Method '{method_name}' for interface "
            f"{_describe(interface)} not implemented by device.",
            interface_name=_describe(interface),
            member_name=method_name,
        )

    logger.debug(f"Invoking {method_name} with {len(args)} argument(s)")
    return await _settle(method(*args))
