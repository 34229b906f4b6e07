"""Unit tests for the Modbus RPC service."""

import base64

import pytest
from conftest import Response, bits_of, reading
from pymodbus import FramerType

from modbus_gateway.core.models import RPCRequest
from modbus_gateway.handler.errors import InvalidParams, MethodNotFound
from modbus_gateway.handler.service import METHODS
from modbus_gateway.protocol.errors import ModbusExceptionResponse, ModbusRequestError


def call(method: str, **params) -> RPCRequest:
    return RPCRequest(id=1, method=method, params=params)


# ============================================================================
# Dispatch
# ============================================================================


class TestDispatch:
    """Tests for method dispatch."""

    def test_method_table(self):
        """Test exactly the eight supported methods are registered."""
        assert set(METHODS) == {
            "modbus-read-coil",
            "modbus-read-discrete",
            "modbus-write-coil",
            "modbus-write-multiple-coils",
            "modbus-read-input",
            "modbus-read-holding",
            "modbus-write-register",
            "modbus-write-multiple-registers",
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method",
        [
            "modbus-bogus",
            "MODBUS-READ-COIL",
            "modbus-read-holding ",
            "read-write-multiple-registers",
            "mask-write-register",
            "read-fifo-queue",
            "modbus-read-write-multiple-registers",
            "modbus-mask-write-register",
            "modbus-read-fifo-queue",
        ],
    )
    async def test_unknown_method(self, make_service, method):
        """Test unknown and unimplemented names raise MethodNotFound."""
        service, transport = make_service()

        with pytest.raises(MethodNotFound) as exc_info:
            await service.call(call(method, address=0, quantity=1))

        assert exc_info.value.data == {"method": method}
        assert not transport.called

    @pytest.mark.asyncio
    async def test_null_params(self, make_service):
        """Test absent params are treated as an empty mapping."""
        service, transport = make_service()

        with pytest.raises(InvalidParams) as exc_info:
            await service.call(RPCRequest(method="modbus-read-coil"))

        assert exc_info.value.data["msg"] == "address required"
        assert not transport.called


# ============================================================================
# Reads
# ============================================================================


class TestReads:
    """Tests for read handlers."""

    @pytest.mark.asyncio
    async def test_read_holding_end_to_end(self, make_service):
        """Test reading two holding registers from slave 1."""
        service, transport = make_service(reading(registers=[1, 2]))

        result = await service.call(call("modbus-read-holding", address=0, quantity=2, slave_id=1))

        assert result == [1, 2]
        assert transport.calls == [
            (FramerType.RTU, "read_holding_registers", {"address": 0, "count": 2, "device_id": 1}),
        ]

    @pytest.mark.asyncio
    async def test_read_input(self, make_service):
        """Test reading input registers."""
        service, transport = make_service(reading(registers=[0x1234]))

        result = await service.call(call("modbus-read-input", address=100, quantity=1))

        assert result == [0x1234]
        assert transport.last_call == ("read_input_registers", {"address": 100, "count": 1, "device_id": 0})

    @pytest.mark.asyncio
    async def test_read_coils_odd_payload(self, make_service):
        """Test a single packed coil byte decodes to one value."""
        service, transport = make_service(reading(bits=bits_of(b"\x05")))

        result = await service.call(call("modbus-read-coil", address=19, quantity=3))

        assert result == [5]
        assert transport.last_call == ("read_coils", {"address": 19, "count": 3, "device_id": 0})

    @pytest.mark.asyncio
    async def test_read_coils_even_payload(self, make_service):
        """Test two packed coil bytes decode as one big-endian word."""
        service, _ = make_service(reading(bits=bits_of(b"\xcd\x01")))

        result = await service.call(call("modbus-read-coil", address=19, quantity=10))

        assert result == [0xCD01]

    @pytest.mark.asyncio
    async def test_read_discrete(self, make_service):
        """Test reading discrete inputs."""
        service, transport = make_service(reading(bits=bits_of(b"\xac\xdb\x35")))

        result = await service.call(call("modbus-read-discrete", address=196, quantity=22))

        assert result == [0xAC, 0xDB, 0x35]
        assert transport.last_call[0] == "read_discrete_inputs"

    @pytest.mark.asyncio
    async def test_default_slave_id(self, make_service):
        """Test slave id defaults to 0."""
        service, transport = make_service(reading(registers=[0]))

        await service.call(call("modbus-read-holding", address=0, quantity=1))

        assert transport.last_call[1]["device_id"] == 0


# ============================================================================
# Writes
# ============================================================================


class TestWriteCoil:
    """Tests for modbus-write-coil."""

    @pytest.mark.asyncio
    async def test_write_on(self, make_service):
        """Test 1 is sent as ON and the echo reports 1."""
        service, transport = make_service()

        result = await service.call(call("modbus-write-coil", address=172, value=1))

        assert transport.last_call == ("write_coil", {"address": 172, "value": True, "device_id": 0})
        assert result == 1

    @pytest.mark.asyncio
    async def test_write_off(self, make_service):
        """Test 0 round-trips to 0."""
        service, transport = make_service()

        result = await service.call(call("modbus-write-coil", address=172, value=0))

        assert transport.last_call == ("write_coil", {"address": 172, "value": False, "device_id": 0})
        assert result == 0

    @pytest.mark.asyncio
    async def test_write_invalid_value(self, make_service):
        """Test values other than 0/1 fail before any transaction."""
        service, transport = make_service()

        with pytest.raises(InvalidParams) as exc_info:
            await service.call(call("modbus-write-coil", address=172, value=2))

        assert exc_info.value.data == {"msg": "bad value. only 0 or 1 allowed", "v": 2}
        assert not transport.called


class TestWriteRegisters:
    """Tests for register and multiple-write handlers."""

    @pytest.mark.asyncio
    async def test_write_register(self, make_service):
        """Test single register write returns the echoed value."""
        service, transport = make_service()

        result = await service.call(call("modbus-write-register", address=1, value=3, slave_id=17))

        assert result == [3]
        assert transport.last_call == ("write_register", {"address": 1, "value": 3, "device_id": 17})

    @pytest.mark.asyncio
    async def test_write_multiple_registers(self, make_service):
        """Test payload words are sent and the echoed quantity is returned."""
        service, transport = make_service()

        result = await service.call(
            call("modbus-write-multiple-registers", address=1, quantity=2, value="AAoBAg==")
        )

        assert result == [2]
        assert transport.last_call == ("write_registers", {"address": 1, "values": [0x000A, 0x0102], "device_id": 0})

    @pytest.mark.asyncio
    async def test_write_multiple_coils(self, make_service):
        """Test bit-packed coil bytes are sent as individual coils."""
        service, transport = make_service()

        result = await service.call(call("modbus-write-multiple-coils", address=19, quantity=10, value="zQE="))

        assert result == [10]
        function, kwargs = transport.last_call
        assert function == "write_coils"
        assert kwargs["values"] == [True, False, True, True, False, False, True, True, True, False]

    @pytest.mark.asyncio
    async def test_write_multiple_coils_bad_base64(self, make_service):
        """Test non-base64 payload fails before any transaction."""
        service, transport = make_service()

        with pytest.raises(InvalidParams):
            await service.call(call("modbus-write-multiple-coils", address=19, quantity=10, value="%%%"))

        assert not transport.called

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "quantity"),
        [("modbus-write-multiple-registers", 10), ("modbus-write-multiple-coils", 1968)],
    )
    async def test_oversized_payload(self, make_service, method, quantity):
        """Test payloads longer than the one-byte count field are rejected before sending."""
        service, transport = make_service()
        value = base64.b64encode(bytes(256)).decode()

        with pytest.raises(ModbusRequestError, match="byte count '256'"):
            await service.call(call(method, address=0, quantity=quantity, value=value))

        assert not transport.called

    @pytest.mark.asyncio
    async def test_payload_quantity_mismatch(self, make_service):
        """Test a payload that does not cover the quantity is rejected before sending."""
        service, transport = make_service()

        with pytest.raises(ModbusRequestError, match="expected '4'"):
            await service.call(call("modbus-write-multiple-registers", address=0, quantity=2, value="AAo="))

        assert not transport.called


# ============================================================================
# Validation before transaction
# ============================================================================


class TestValidation:
    """Tests that invalid input never reaches the transport."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "params", "msg"),
        [
            ("modbus-read-coil", {"quantity": 1}, "address required"),
            ("modbus-read-holding", {"address": 0}, "quantity required"),
            ("modbus-read-input", {"address": 65536, "quantity": 1}, "address should be uint16"),
            ("modbus-read-discrete", {"address": 0, "quantity": -1}, "quantity should be uint16"),
            ("modbus-write-register", {"address": 0, "value": 70000}, "value should be uint16"),
            ("modbus-write-register", {"address": 0}, "value required"),
            ("modbus-read-holding", {"address": 0, "quantity": 1, "slave_id": 256}, "slave_id should be byte"),
            ("modbus-read-holding", {"address": 0, "quantity": 1, "slave_id": -1}, "slave_id should be byte"),
            ("modbus-read-holding", {"address": "0", "quantity": 1}, "address should be number"),
            ("modbus-read-holding", {"address": 0.5, "quantity": 1}, "address should be int"),
            ("modbus-read-holding", {"address": 2**63, "quantity": 1}, "address should be int"),
            ("modbus-write-multiple-registers", {"address": 0, "quantity": 1}, "value required and should be base64"),
        ],
    )
    async def test_rejected(self, make_service, method, params, msg):
        """Test parameter failures name the parameter and skip the transaction."""
        service, transport = make_service()

        with pytest.raises(InvalidParams) as exc_info:
            await service.call(call(method, **params))

        assert exc_info.value.data["msg"] == msg
        assert not transport.called


# ============================================================================
# Transaction errors
# ============================================================================


class TestTransactionErrors:
    """Tests that transaction failures propagate unchanged."""

    @pytest.mark.asyncio
    async def test_exception_response(self, make_service):
        """Test device exception codes propagate."""
        service, _ = make_service(lambda function, kwargs: Response(function_code=0x83, exception_code=2))

        with pytest.raises(ModbusExceptionResponse) as exc_info:
            await service.call(call("modbus-read-holding", address=0, quantity=1))

        assert exc_info.value.exception_code == 2
        assert exc_info.value.function_code == 0x83

    @pytest.mark.asyncio
    async def test_client_quantity_limit(self, make_service):
        """Test client-side quantity limits surface as request errors."""
        service, transport = make_service()

        with pytest.raises(ModbusRequestError):
            await service.call(call("modbus-read-holding", address=0, quantity=0))

        assert not transport.called

    @pytest.mark.asyncio
    async def test_transport_error(self, make_service):
        """Test transport failures propagate."""

        def fail(function, kwargs):
            raise ConnectionError("link down")

        service, _ = make_service(fail)

        with pytest.raises(ConnectionError, match="link down"):
            await service.call(call("modbus-read-holding", address=0, quantity=1))

    @pytest.mark.asyncio
    async def test_independent_calls(self, make_service):
        """Test a failed call leaves the next call unaffected."""
        service, transport = make_service(reading(registers=[7]))

        with pytest.raises(InvalidParams):
            await service.call(call("modbus-read-holding", address=0, quantity=1, slave_id=300))

        assert await service.call(call("modbus-read-holding", address=0, quantity=1, slave_id=2)) == [7]
        assert len(transport.calls) == 1
