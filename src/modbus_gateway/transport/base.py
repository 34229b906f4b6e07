"""Shared Modbus link backed by a pymodbus async client."""

import asyncio
import logging
from typing import Any

from pymodbus import FramerType
from pymodbus.client import ModbusBaseClient
from pymodbus.exceptions import ConnectionException, ModbusException, ModbusIOException
from pymodbus.pdu import ModbusPDU

from modbus_gateway.protocol.errors import ModbusError, ModbusTimeoutError

logger = logging.getLogger(__name__)


class ModbusTransport:
    """Runs pymodbus requests over one connection.

    The pymodbus client is created for the framer of the first request,
    connected on first use and reconnected after a failure. Requests are
    serialised with an asyncio.Lock, so clients built for concurrent calls
    may share one instance. pymodbus retries are disabled: each call is
    exactly one transaction.
    """

    def __init__(self, timeout: float = 1.0):
        self.timeout = timeout

        self._client: ModbusBaseClient | None = None
        self._framer: FramerType | None = None
        self._lock = asyncio.Lock()

    @property
    def description(self) -> str:
        """Human-readable link name for log messages."""
        raise NotImplementedError

    @property
    def connected(self) -> bool:
        """Check if a connection is open."""
        return self._client is not None and self._client.connected

    def _create_client(self, framer: FramerType) -> ModbusBaseClient:
        raise NotImplementedError

    async def _connect(self, framer: FramerType) -> ModbusBaseClient:
        if self._client is not None and self._framer != framer:
            self._close()

        if self._client is None:
            self._client = self._create_client(framer)
            self._framer = framer

        if not self._client.connected:
            logger.info("Connecting to %s (%s framer)", self.description, framer.value)
            if not await self._client.connect():
                logger.error("Failed to connect to %s", self.description)
                self._close()
                raise ConnectionError(f"unable to connect to {self.description}")
            logger.info("Connected to %s", self.description)

        return self._client

    def _close(self) -> None:
        if self._client is None:
            return

        self._client.close()
        self._client = None
        self._framer = None
        logger.info("Closed %s", self.description)

    async def close(self) -> None:
        """Close the connection if open."""
        async with self._lock:
            self._close()

    async def execute(self, framer: FramerType, function: str, **kwargs: Any) -> ModbusPDU:
        """
        Run one pymodbus client request.

        Args:
            framer: Framing for the request
            function: Name of the pymodbus client method (e.g., 'read_coils')
            **kwargs: Arguments of that method

        Returns:
            Response PDU, possibly an exception response

        Raises:
            ModbusTimeoutError: If the device does not answer
            ConnectionError: If the link cannot be opened or fails
            ModbusError: If pymodbus rejects the request or response
        """
        async with self._lock:
            client = await self._connect(framer)
            try:
                return await getattr(client, function)(**kwargs)
            except ModbusIOException as e:
                raise ModbusTimeoutError(f"no response from {self.description} within {self.timeout}s") from e
            except ConnectionException as e:
                logger.error("I/O error on %s: %s", self.description, e)
                self._close()
                raise ConnectionError(str(e)) from e
            except ModbusException as e:
                raise ModbusError(str(e)) from e
