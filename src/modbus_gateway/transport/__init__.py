"""Modbus link transports."""

from modbus_gateway.core.config import Settings
from modbus_gateway.transport.base import ModbusTransport
from modbus_gateway.transport.serial import SerialTransport
from modbus_gateway.transport.tcp import TCPTransport

__all__ = ["ModbusTransport", "SerialTransport", "TCPTransport", "build_transport"]


def build_transport(settings: Settings) -> ModbusTransport:
    """Create the transport for the configured Modbus variant."""
    if settings.mode in ("tcp", "rtuovertcp"):
        return TCPTransport(host=settings.tcp_host, port=settings.tcp_port, timeout=settings.timeout)

    return SerialTransport(
        port=settings.serial_port,
        baudrate=settings.serial_baud,
        bytesize=settings.serial_bytesize,
        parity=settings.serial_parity,
        stopbits=settings.serial_stopbits,
        timeout=settings.timeout,
    )
