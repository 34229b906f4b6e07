"""Modbus master protocol implementation."""

from modbus_gateway.protocol.client import ModbusClient, Transporter, build_client, pack_bits, unpack_bits
from modbus_gateway.protocol.constants import COIL_OFF, COIL_ON
from modbus_gateway.protocol.errors import (
    ModbusError,
    ModbusExceptionResponse,
    ModbusRequestError,
    ModbusResponseError,
    ModbusTimeoutError,
)
from modbus_gateway.protocol.framers import FRAMERS, FramerFactory, framer_factory

__all__ = [
    "COIL_OFF",
    "COIL_ON",
    "FRAMERS",
    "FramerFactory",
    "ModbusClient",
    "ModbusError",
    "ModbusExceptionResponse",
    "ModbusRequestError",
    "ModbusResponseError",
    "ModbusTimeoutError",
    "Transporter",
    "build_client",
    "framer_factory",
    "pack_bits",
    "unpack_bits",
]
