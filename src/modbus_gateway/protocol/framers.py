"""Framing strategy per Modbus variant."""

from collections.abc import Callable

from pymodbus import FramerType

FramerFactory = Callable[[int], FramerType]

FRAMERS: dict[str, FramerType] = {
    "tcp": FramerType.SOCKET,
    "rtuovertcp": FramerType.RTU,
    "rtu": FramerType.RTU,
    "ascii": FramerType.ASCII,
}


def framer_factory(mode: str) -> FramerFactory:
    """
    Get the framer factory for a Modbus variant.

    Every slave on one link shares its framing, so the returned factory
    ignores the slave id it is given.

    Args:
        mode: Variant name ('tcp', 'rtuovertcp', 'rtu' or 'ascii')

    Returns:
        Callable mapping a slave id to a pymodbus FramerType

    Raises:
        ValueError: If the mode is unknown
    """
    try:
        framer = FRAMERS[mode]
    except KeyError:
        raise ValueError(f"unknown Modbus mode '{mode}'") from None

    def factory(slave_id: int) -> FramerType:
        return framer

    return factory
