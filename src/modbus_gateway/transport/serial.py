"""Modbus RTU/ASCII transport using pymodbus over pyserial."""

from pymodbus import FramerType
from pymodbus.client import AsyncModbusSerialClient

from modbus_gateway.transport.base import ModbusTransport


class SerialTransport(ModbusTransport):
    """Modbus link over a serial line."""

    def __init__(
        self,
        port: str,
        baudrate: int = 19200,
        bytesize: int = 8,
        parity: str = "E",
        stopbits: int = 1,
        timeout: float = 1.0,
    ):
        """
        Initialize serial transport.

        Args:
            port: Serial port path (e.g., '/dev/ttyUSB0')
            baudrate: Communication speed (default: 19200)
            bytesize: Data bits
            parity: 'N', 'E' or 'O'
            stopbits: Stop bits
            timeout: Seconds to wait for a response
        """
        super().__init__(timeout)
        self.port = port
        self.baudrate = baudrate
        self.bytesize = bytesize
        self.parity = parity
        self.stopbits = stopbits

    @property
    def description(self) -> str:
        return f"{self.port}@{self.baudrate}"

    def _create_client(self, framer: FramerType) -> AsyncModbusSerialClient:
        return AsyncModbusSerialClient(
            self.port,
            framer=framer,
            baudrate=self.baudrate,
            bytesize=self.bytesize,
            parity=self.parity,
            stopbits=self.stopbits,
            timeout=self.timeout,
            retries=0,
        )
