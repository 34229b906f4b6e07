"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest
from pymodbus import FramerType

from modbus_gateway.handler.service import ModbusService
from modbus_gateway.protocol.framers import framer_factory


@dataclass
class Response:
    """Stand-in for a pymodbus response PDU."""

    address: int = 0
    count: int = 0
    bits: list[bool] = field(default_factory=list)
    registers: list[int] = field(default_factory=list)
    function_code: int = 0
    exception_code: int = 0

    def isError(self) -> bool:
        return self.function_code > 0x80


Reply = Callable[[str, dict[str, Any]], Response]


def acknowledge(function: str, kwargs: dict[str, Any]) -> Response:
    """Device reply that echoes writes the way a compliant slave does."""
    if function == "write_coil":
        return Response(address=kwargs["address"], bits=[kwargs["value"]])
    if function == "write_register":
        return Response(address=kwargs["address"], registers=[kwargs["value"]])
    if function in ("write_coils", "write_registers"):
        return Response(address=kwargs["address"], count=len(kwargs["values"]))
    raise AssertionError(f"no reply configured for {function}")


def reading(bits: list[bool] | None = None, registers: list[int] | None = None) -> Reply:
    """Device reply for read functions."""

    def _reply(function: str, kwargs: dict[str, Any]) -> Response:
        return Response(bits=bits or [], registers=registers or [])

    return _reply


def bits_of(data: bytes) -> list[bool]:
    """Bits of every byte, least significant first, as pymodbus unpacks them."""
    return [bool(byte >> i & 1) for byte in data for i in range(8)]


class RecordingTransport:
    """Transport double that records pymodbus requests and answers like a device."""

    def __init__(self, reply: Reply = acknowledge):
        self.calls: list[tuple[FramerType, str, dict[str, Any]]] = []
        self.reply = reply

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last_call(self) -> tuple[str, dict[str, Any]]:
        _, function, kwargs = self.calls[-1]
        return function, kwargs

    async def execute(self, framer: FramerType, function: str, **kwargs: Any) -> Response:
        self.calls.append((framer, function, kwargs))
        return self.reply(function, kwargs)


@pytest.fixture
def make_service() -> Callable[..., tuple[ModbusService, RecordingTransport]]:
    """Build a service over a recording transport with the given reply."""

    def _make(reply: Reply = acknowledge) -> tuple[ModbusService, RecordingTransport]:
        transport = RecordingTransport(reply)
        return ModbusService(transport, framer_factory("rtu")), transport

    return _make
