"""Typed extraction of call parameters.

Every accessor either returns a value of the requested wire type or raises
InvalidParams with a ``msg`` naming the parameter, so handlers can validate
all input before a transaction is attempted.
"""

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from modbus_gateway.handler.errors import InvalidParams

MIN_BYTE = 0
MAX_BYTE = 0xFF

MIN_UINT16 = 0
MAX_UINT16 = 0xFFFF

MIN_INT64 = -(2**63)
MAX_INT64 = 2**63 - 1


def get_integer(params: Mapping[str, Any], key: str, default: int | None = None) -> int:
    """
    Get an integral JSON number.

    Args:
        params: Call parameters
        key: Parameter name
        default: Returned when the key is absent or null; None makes it required

    Returns:
        Integer value

    Raises:
        InvalidParams: If required and absent, not a number, or not integral
    """
    value = params.get(key)
    if value is None:
        if default is not None:
            return default
        raise InvalidParams(msg=f"{key} required")

    # bool is an int subclass but a JSON boolean, not a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParams(msg=f"{key} should be number")
    # Integral numbers outside the signed 64-bit range are not ints either
    if isinstance(value, float) or not MIN_INT64 <= value <= MAX_INT64:
        raise InvalidParams(msg=f"{key} should be int")

    return value


def get_slave_id(params: Mapping[str, Any]) -> int:
    """Get ``slave_id`` (0-255), defaulting to 0."""
    value = get_integer(params, "slave_id", 0)
    if not MIN_BYTE <= value <= MAX_BYTE:
        raise InvalidParams(msg="slave_id should be byte")
    return value


def get_register_value(params: Mapping[str, Any], key: str, default: int | None = None) -> int:
    """Get an unsigned 16-bit value (0-65535)."""
    value = get_integer(params, key, default)
    if not MIN_UINT16 <= value <= MAX_UINT16:
        raise InvalidParams(msg=f"{key} should be uint16")
    return value


def get_address_and_quantity(params: Mapping[str, Any]) -> tuple[int, int]:
    """Get the required ``address`` and ``quantity`` pair."""
    return get_register_value(params, "address"), get_register_value(params, "quantity")


def get_address_and_value(params: Mapping[str, Any]) -> tuple[int, int]:
    """Get the required ``address`` and ``value`` pair."""
    return get_register_value(params, "address"), get_register_value(params, "value")


def get_bytes(params: Mapping[str, Any], key: str) -> bytes:
    """
    Get a binary payload supplied as standard base64 text.

    Line breaks inside the text are ignored.

    Raises:
        InvalidParams: If absent, not a string, or not valid base64
    """
    value = params.get(key)
    if not isinstance(value, str):
        raise InvalidParams(msg=f"{key} required and should be base64")

    try:
        return base64.b64decode(value.replace("\r", "").replace("\n", ""), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidParams(msg=str(e)) from None
