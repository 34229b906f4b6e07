"""Core application functionality."""

from modbus_gateway.core.config import Settings, setup_logging
from modbus_gateway.core.models import HealthResponse, RPCErrorObject, RPCErrorResponse, RPCRequest, RPCResult

__all__ = [
    "HealthResponse",
    "RPCErrorObject",
    "RPCErrorResponse",
    "RPCRequest",
    "RPCResult",
    "Settings",
    "setup_logging",
]
