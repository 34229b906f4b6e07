"""Modbus TCP transport using pymodbus."""

from pymodbus import FramerType
from pymodbus.client import AsyncModbusTcpClient

from modbus_gateway.transport.base import ModbusTransport


class TCPTransport(ModbusTransport):
    """Modbus link over one TCP connection.

    Carries MBAP (socket) framing for plain Modbus TCP, or RTU framing
    for serial devices behind a transparent TCP gateway.
    """

    def __init__(self, host: str, port: int = 502, timeout: float = 1.0):
        """
        Initialize TCP transport.

        Args:
            host: Device or gateway hostname
            port: Modbus TCP port (default: 502)
            timeout: Connect and response timeout in seconds
        """
        super().__init__(timeout)
        self.host = host
        self.port = port

    @property
    def description(self) -> str:
        return f"{self.host}:{self.port}"

    def _create_client(self, framer: FramerType) -> AsyncModbusTcpClient:
        return AsyncModbusTcpClient(
            self.host,
            port=self.port,
            framer=framer,
            timeout=self.timeout,
            retries=0,
        )
