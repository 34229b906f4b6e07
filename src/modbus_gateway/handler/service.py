"""Modbus RPC service.

Translates named calls into single Modbus transactions. Each handler
extracts and validates its parameters, builds a client for the call's
slave id, issues one transaction and decodes the response. Transaction
errors propagate unchanged.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from modbus_gateway.core.models import RPCRequest
from modbus_gateway.handler.codec import decode, encode_coil, normalize_coil
from modbus_gateway.handler.errors import MethodNotFound
from modbus_gateway.handler.params import (
    get_address_and_quantity,
    get_address_and_value,
    get_bytes,
    get_slave_id,
)
from modbus_gateway.protocol.client import ModbusClient, Transporter, build_client
from modbus_gateway.protocol.framers import FramerFactory

logger = logging.getLogger(__name__)

Params = Mapping[str, Any]


class ModbusService:
    """Stateless dispatcher from RPC method names to Modbus transactions."""

    def __init__(self, transport: Transporter, framer_factory: FramerFactory):
        """
        Initialize the service.

        Args:
            transport: Shared link; responsible for serialising access
            framer_factory: Picks the framing for a slave id
        """
        self.transport = transport
        self.framer_factory = framer_factory

    def _client(self, slave_id: int) -> ModbusClient:
        return build_client(self.transport, self.framer_factory, slave_id)

    async def call(self, request: RPCRequest) -> Any:
        """
        Dispatch a call to its handler.

        Args:
            request: Call naming the method and carrying its parameters

        Returns:
            Decoded result: an int or a list of ints

        Raises:
            MethodNotFound: If the method name is not registered
            InvalidParams: If a parameter fails validation
            ModbusError: If the transaction fails
        """
        handler = METHODS.get(request.method)
        if handler is None:
            logger.warning("Unknown method: %s", request.method)
            raise MethodNotFound(method=request.method)

        params = request.params or {}
        logger.debug("Dispatching %s %s", request.method, params)
        return await handler(self, params)

    # -- bit access ------------------------------------------------------------

    async def read_coils(self, params: Params) -> list[int]:
        address, quantity = get_address_and_quantity(params)
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).read_coils(address, quantity)
        return decode(raw)

    async def read_discrete_inputs(self, params: Params) -> list[int]:
        address, quantity = get_address_and_quantity(params)
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).read_discrete_inputs(address, quantity)
        return decode(raw)

    async def write_single_coil(self, params: Params) -> int:
        """Write one coil; the caller's 0/1 travels as 0x0000/0xFF00."""
        address, value = get_address_and_value(params)
        value = encode_coil(value)
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).write_single_coil(address, value)
        return normalize_coil(decode(raw))

    async def write_multiple_coils(self, params: Params) -> list[int]:
        address, quantity = get_address_and_quantity(params)
        value = get_bytes(params, "value")
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).write_multiple_coils(address, quantity, value)
        return decode(raw)

    # -- register access -------------------------------------------------------

    async def read_input_registers(self, params: Params) -> list[int]:
        address, quantity = get_address_and_quantity(params)
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).read_input_registers(address, quantity)
        return decode(raw)

    async def read_holding_registers(self, params: Params) -> list[int]:
        address, quantity = get_address_and_quantity(params)
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).read_holding_registers(address, quantity)
        return decode(raw)

    async def write_single_register(self, params: Params) -> list[int]:
        address, value = get_address_and_value(params)
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).write_single_register(address, value)
        return decode(raw)

    async def write_multiple_registers(self, params: Params) -> list[int]:
        address, quantity = get_address_and_quantity(params)
        value = get_bytes(params, "value")
        slave_id = get_slave_id(params)

        raw = await self._client(slave_id).write_multiple_registers(address, quantity, value)
        return decode(raw)


Handler = Callable[[ModbusService, Params], Awaitable[Any]]

# Read/write multiple registers, mask write register and read FIFO queue
# are not exposed and fall through to MethodNotFound.
METHODS: dict[str, Handler] = {
    "modbus-read-coil": ModbusService.read_coils,
    "modbus-read-discrete": ModbusService.read_discrete_inputs,
    "modbus-write-coil": ModbusService.write_single_coil,
    "modbus-write-multiple-coils": ModbusService.write_multiple_coils,
    "modbus-read-input": ModbusService.read_input_registers,
    "modbus-read-holding": ModbusService.read_holding_registers,
    "modbus-write-register": ModbusService.write_single_register,
    "modbus-write-multiple-registers": ModbusService.write_multiple_registers,
}
