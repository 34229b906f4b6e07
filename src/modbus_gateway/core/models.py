"""JSON-RPC and API data models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class RPCRequest(BaseModel):
    """A JSON-RPC 2.0 call naming one gateway method."""

    jsonrpc: Literal["2.0"] = Field("2.0", description="Protocol version")
    id: int | str | None = Field(None, description="Request id echoed in the response")
    method: str = Field(..., min_length=1, description="Method name, e.g. modbus-read-holding")
    params: dict[str, Any] | None = Field(None, description="Method parameters")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "modbus-read-holding",
                "params": {"address": 0, "quantity": 2, "slave_id": 1},
            }
        }
    )


class RPCErrorObject(BaseModel):
    """Error member of a JSON-RPC response."""

    code: int = Field(..., description="JSON-RPC error code")
    message: str = Field(..., description="Short error description")
    data: dict[str, Any] | None = Field(None, description="Structured error details")


class RPCResult(BaseModel):
    """Successful JSON-RPC response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None = None
    result: Any = Field(..., description="Decoded Modbus result")


class RPCErrorResponse(BaseModel):
    """Failed JSON-RPC response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: int | str | None = None
    error: RPCErrorObject


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status: healthy or unhealthy")
    mode: str | None = Field(None, description="Configured Modbus variant")
    link: str | None = Field(None, description="Configured Modbus link")
