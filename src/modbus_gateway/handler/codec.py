"""Conversion between raw Modbus payloads and JSON results."""

from modbus_gateway.handler.errors import InvalidParams
from modbus_gateway.protocol.constants import COIL_OFF, COIL_ON
from modbus_gateway.protocol.errors import ModbusResponseError


def decode(raw: bytes) -> list[int]:
    """
    Decode a response payload into unsigned integers.

    Odd-length payloads are byte streams (e.g. packed coil bytes) and yield
    one value per byte. Even-length payloads are big-endian 16-bit words.

    Args:
        raw: Payload returned by a client transaction

    Returns:
        List of unsigned values

    Example:
        >>> decode(b'\\x00\\x0a\\x00\\x14')
        [10, 20]
        >>> decode(b'\\x05')
        [5]
    """
    if len(raw) % 2 != 0:
        return list(raw)

    return [int.from_bytes(raw[i : i + 2], "big") for i in range(0, len(raw) - 1, 2)]


def encode_coil(value: int) -> int:
    """
    Translate a caller boolean (0 or 1) to the coil wire value.

    Raises:
        InvalidParams: If value is neither 0 nor 1
    """
    if value == 1:
        return COIL_ON
    if value == 0:
        return COIL_OFF
    raise InvalidParams(msg="bad value. only 0 or 1 allowed", v=value)


def normalize_coil(values: list[int]) -> int:
    """Report a decoded single-coil acknowledgement as 0/1."""
    if not values:
        raise ModbusResponseError("coil acknowledgement is empty")

    # Devices echo ON as 0xFF00
    if values[0] == COIL_ON:
        return 1
    return values[0]
