"""Caller-facing JSON-RPC errors."""

from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000


class RPCError(Exception):
    """JSON-RPC error carrying structured data.

    Keyword arguments become the error's ``data`` member.
    """

    code = INTERNAL_ERROR
    message = "Internal error"

    def __init__(self, **data: Any):
        self.data = data
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a JSON-RPC error object."""
        return {"code": self.code, "message": self.message, "data": self.data}

    def __str__(self) -> str:
        return f"{self.message}: {self.data}" if self.data else self.message


class InvalidParams(RPCError):
    """Missing, malformed, wrong-typed or out-of-range parameter."""

    code = INVALID_PARAMS
    message = "Invalid params"


class MethodNotFound(RPCError):
    """Method name has no handler."""

    code = METHOD_NOT_FOUND
    message = "Method not found"
