"""JSON-RPC route handler."""

import logging

from fastapi import APIRouter, Depends

from modbus_gateway.api.dependencies import get_service
from modbus_gateway.core.models import RPCErrorObject, RPCErrorResponse, RPCRequest, RPCResult
from modbus_gateway.handler.errors import INTERNAL_ERROR, SERVER_ERROR, RPCError
from modbus_gateway.handler.service import ModbusService
from modbus_gateway.protocol.errors import ModbusError, ModbusExceptionResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/rpc", response_model=RPCResult | RPCErrorResponse)
async def rpc(
    request: RPCRequest,
    service: ModbusService = Depends(get_service),
):
    """Execute one JSON-RPC call against the Modbus link."""
    try:
        result = await service.call(request)
    except RPCError as e:
        return RPCErrorResponse(
            id=request.id,
            error=RPCErrorObject(code=e.code, message=e.message, data=e.data),
        )
    except (ModbusError, OSError) as e:
        logger.error("%s failed: %s", request.method, e)
        data: dict = {"msg": str(e)}
        if isinstance(e, ModbusExceptionResponse):
            data["exception_code"] = e.exception_code
        return RPCErrorResponse(
            id=request.id,
            error=RPCErrorObject(code=SERVER_ERROR, message="Server error", data=data),
        )
    except Exception as e:
        logger.exception("%s failed unexpectedly", request.method)
        return RPCErrorResponse(
            id=request.id,
            error=RPCErrorObject(code=INTERNAL_ERROR, message="Internal error", data={"msg": str(e)}),
        )

    return RPCResult(id=request.id, result=result)
