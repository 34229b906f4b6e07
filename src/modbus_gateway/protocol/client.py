"""Modbus master client.

Issues requests through a shared pymodbus-backed transport and validates
the response against the request. Every method performs exactly one
transaction and returns the response payload as it appeared on the wire:
packed bits for coil reads, big-endian words for register reads and the
two echoed bytes for writes.
"""

import logging
import struct
from typing import Any, Protocol

from pymodbus import FramerType
from pymodbus.pdu import ModbusPDU

from modbus_gateway.protocol.constants import (
    COIL_OFF,
    COIL_ON,
    MAX_BYTE_COUNT,
    MAX_READ_BITS,
    MAX_READ_REGISTERS,
    MAX_WRITE_BITS,
    MAX_WRITE_REGISTERS,
)
from modbus_gateway.protocol.errors import ModbusExceptionResponse, ModbusRequestError, ModbusResponseError
from modbus_gateway.protocol.framers import FramerFactory

logger = logging.getLogger(__name__)


class Transporter(Protocol):
    """Shared link carrying one request/response exchange at a time."""

    async def execute(self, framer: FramerType, function: str, **kwargs: Any) -> ModbusPDU: ...


def pack_bits(bits: list[bool]) -> bytes:
    """Pack bits into bytes, first bit in the least significant position."""
    packed = bytearray((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        if bit:
            packed[i // 8] |= 1 << (i % 8)
    return bytes(packed)


def unpack_bits(data: bytes, count: int) -> list[bool]:
    """Unpack the first ``count`` bits of ``data``, least significant bit first."""
    return [bool(data[i // 8] >> (i % 8) & 1) for i in range(count)]


class ModbusClient:
    """Modbus master bound to one transport, one framer and one slave."""

    def __init__(self, transport: Transporter, framer: FramerType, slave_id: int):
        self.transport = transport
        self.framer = framer
        self.slave_id = slave_id

    # -- bit access ------------------------------------------------------------

    async def read_coils(self, address: int, quantity: int) -> bytes:
        """Read coil status (FC 1). Returns the packed coil bytes."""
        self._check_quantity(quantity, MAX_READ_BITS)
        response = await self._execute("read_coils", address=address, count=quantity)
        return self._packed_bits(response, quantity)

    async def read_discrete_inputs(self, address: int, quantity: int) -> bytes:
        """Read discrete inputs (FC 2). Returns the packed input bytes."""
        self._check_quantity(quantity, MAX_READ_BITS)
        response = await self._execute("read_discrete_inputs", address=address, count=quantity)
        return self._packed_bits(response, quantity)

    async def write_single_coil(self, address: int, value: int) -> bytes:
        """Write a single coil (FC 5). Value must be 0x0000 or 0xFF00.

        Returns:
            The two echoed value bytes
        """
        if value not in (COIL_OFF, COIL_ON):
            raise ModbusRequestError(f"state '{value}' must be either 0xFF00 (ON) or 0x0000 (OFF)")
        response = await self._execute("write_coil", address=address, value=value == COIL_ON)

        echoed = COIL_ON if response.bits and response.bits[0] else COIL_OFF
        return self._write_echo(response.address, echoed, address, value)

    async def write_multiple_coils(self, address: int, quantity: int, value: bytes) -> bytes:
        """Force multiple coils (FC 15) from bit-packed bytes.

        Returns:
            The two echoed quantity bytes
        """
        self._check_quantity(quantity, MAX_WRITE_BITS)
        self._check_byte_count(value, (quantity + 7) // 8)
        response = await self._execute("write_coils", address=address, values=unpack_bits(value, quantity))
        return self._write_echo(response.address, response.count, address, quantity)

    # -- register access -------------------------------------------------------

    async def read_input_registers(self, address: int, quantity: int) -> bytes:
        """Read input registers (FC 4). Returns the big-endian register bytes."""
        self._check_quantity(quantity, MAX_READ_REGISTERS)
        response = await self._execute("read_input_registers", address=address, count=quantity)
        return self._packed_registers(response, quantity)

    async def read_holding_registers(self, address: int, quantity: int) -> bytes:
        """Read holding registers (FC 3). Returns the big-endian register bytes."""
        self._check_quantity(quantity, MAX_READ_REGISTERS)
        response = await self._execute("read_holding_registers", address=address, count=quantity)
        return self._packed_registers(response, quantity)

    async def write_single_register(self, address: int, value: int) -> bytes:
        """Write a single holding register (FC 6). Returns the echoed value bytes."""
        response = await self._execute("write_register", address=address, value=value)

        echoed = response.registers[0] if response.registers else None
        return self._write_echo(response.address, echoed, address, value)

    async def write_multiple_registers(self, address: int, quantity: int, value: bytes) -> bytes:
        """Write a block of holding registers (FC 16). Returns the echoed quantity bytes."""
        self._check_quantity(quantity, MAX_WRITE_REGISTERS)
        self._check_byte_count(value, quantity * 2)
        registers = list(struct.unpack(f">{quantity}H", value))
        response = await self._execute("write_registers", address=address, values=registers)
        return self._write_echo(response.address, response.count, address, quantity)

    # -- transaction -----------------------------------------------------------

    async def _execute(self, function: str, **kwargs: Any) -> ModbusPDU:
        logger.debug("TX slave=%d %s %s", self.slave_id, function, kwargs)
        response = await self.transport.execute(self.framer, function, device_id=self.slave_id, **kwargs)
        logger.debug("RX slave=%d %s", self.slave_id, response)

        if response.isError():
            raise ModbusExceptionResponse(response.function_code, response.exception_code)

        return response

    @staticmethod
    def _check_quantity(quantity: int, maximum: int) -> None:
        if not 1 <= quantity <= maximum:
            raise ModbusRequestError(f"quantity '{quantity}' must be between '1' and '{maximum}'")

    @staticmethod
    def _check_byte_count(value: bytes, expected: int) -> None:
        if len(value) > MAX_BYTE_COUNT:
            raise ModbusRequestError(f"byte count '{len(value)}' must not exceed '{MAX_BYTE_COUNT}'")
        if len(value) != expected:
            raise ModbusRequestError(f"byte count '{len(value)}' does not match quantity, expected '{expected}'")

    @staticmethod
    def _packed_bits(response: ModbusPDU, quantity: int) -> bytes:
        # pymodbus unpacks every received byte, so the padding bits are still there
        bits = list(response.bits)
        if len(bits) < quantity:
            raise ModbusResponseError(f"response bit count '{len(bits)}' is less than quantity '{quantity}'")
        return pack_bits(bits[: (quantity + 7) // 8 * 8])

    @staticmethod
    def _packed_registers(response: ModbusPDU, quantity: int) -> bytes:
        registers = list(response.registers)
        if len(registers) != quantity:
            raise ModbusResponseError(
                f"response register count '{len(registers)}' does not match quantity '{quantity}'"
            )
        return struct.pack(f">{quantity}H", *registers)

    @staticmethod
    def _write_echo(resp_address: int, resp_value: int | None, address: int, value: int) -> bytes:
        if resp_address != address:
            raise ModbusResponseError(f"response address '{resp_address}' does not match request '{address}'")
        if resp_value != value:
            raise ModbusResponseError(f"response value '{resp_value}' does not match request '{value}'")

        return struct.pack(">H", value)


def build_client(transport: Transporter, framer_factory: FramerFactory, slave_id: int) -> ModbusClient:
    """
    Build a client addressing one slave over a shared transport.

    Clients hold no state beyond this binding and are meant to be
    created per call and discarded.

    Args:
        transport: Link the request is sent over
        framer_factory: Picks the framing for a slave id
        slave_id: Target device address (0-255)

    Returns:
        New ModbusClient
    """
    return ModbusClient(transport, framer_factory(slave_id), slave_id)
