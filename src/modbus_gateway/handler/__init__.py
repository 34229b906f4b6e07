"""RPC handlers translating named calls into Modbus transactions."""

from modbus_gateway.handler.errors import InvalidParams, MethodNotFound, RPCError
from modbus_gateway.handler.service import METHODS, ModbusService

__all__ = ["InvalidParams", "METHODS", "MethodNotFound", "ModbusService", "RPCError"]
