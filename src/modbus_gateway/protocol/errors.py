"""Errors raised by Modbus transactions."""

from modbus_gateway.protocol.constants import EXCEPTION_NAMES


class ModbusError(Exception):
    """Base class for all Modbus transaction failures."""


class ModbusRequestError(ModbusError):
    """Request rejected by the client before it was sent."""


class ModbusResponseError(ModbusError):
    """Response PDU does not match the request."""


class ModbusTimeoutError(ModbusError, TimeoutError):
    """Device did not answer within the transport timeout."""


class ModbusExceptionResponse(ModbusError):
    """Device answered with a Modbus exception code.

    Attributes:
        function_code: Function code of the response (request code | 0x80)
        exception_code: Exception code reported by the device
    """

    def __init__(self, function_code: int, exception_code: int):
        self.function_code = function_code
        self.exception_code = exception_code
        name = EXCEPTION_NAMES.get(exception_code, "unknown")
        super().__init__(f"exception '{exception_code}' ({name}), function '{function_code}'")
