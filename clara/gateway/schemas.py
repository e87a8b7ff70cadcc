"""Pydantic schemas for JSON-RPC 2.0 protocol messages."""

from typing import Annotated, Any, Literal
from pydantic import BaseModel, Field, Strict


class JSONRPCRequest(BaseModel):
    """Inbound JSON-RPC 2.0 request.

    Attributes:
        jsonrpc: JSON-RPC version (always "2.0").
        method: The method to call (e.g., "zks.getMainContract").
        params: Positional (array) or named (object) params.
        id: Request identifier; absent for notifications.
    """

    jsonrpc: Literal["2.0"] = Field(..., description="JSON-RPC version")
    method: str = Field(..., description="Method to call")
    params: list[Any] | dict[str, Any] | None = Field(default=None, description="Call params")
    # Strict so that booleans are not taken for ids
    id: Annotated[int, Strict()] | str | None = Field(default=None, description="Request ID for correlation")

    @property
    def is_notification(self) -> bool:
        """True if the request carried no ``id`` member."""
        return "id" not in self.model_fields_set


class RPCErrorDetail(BaseModel):
    """Error details in JSON-RPC format.

    Attributes:
        code: Error code (negative integers for protocol errors).
        message: Human-readable error message.
        data: Optional additional error data.
    """

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any | None = Field(default=None, description="Additional error data")


class JSONRPCResponse(BaseModel):
    """JSON-RPC 2.0 response wrapper.

    Attributes:
        jsonrpc: JSON-RPC version (always "2.0").
        result: Result on success.
        error: Error details on failure.
        id: Request ID for correlation.
    """

    jsonrpc: Literal["2.0"] = Field(default="2.0", description="JSON-RPC version")
    result: Any | None = Field(default=None, description="Result on success")
    error: RPCErrorDetail | None = Field(default=None, description="Error on failure")
    id: str | int | None = Field(..., description="Request ID for correlation")

    @classmethod
    def success(cls, id: str | int | None, result: Any) -> "JSONRPCResponse":
        """Create a successful response.

        Args:
            id: Request ID.
            result: Result data, passed through untouched.

        Returns:
            JSONRPCResponse with result field populated.
        """
        return cls(id=id, result=result)

    @classmethod
    def error_response(
        cls,
        id: str | int | None,
        code: int,
        message: str,
        data: Any | None = None
    ) -> "JSONRPCResponse":
        """Create an error response.

        Args:
            id: Request ID.
            code: Error code.
            message: Error message.
            data: Optional error data.

        Returns:
            JSONRPCResponse with error field populated.
        """
        return cls(id=id, error=RPCErrorDetail(code=code, message=message, data=data))

    def to_wire(self) -> dict[str, Any]:
        """Serialize with exactly one of ``result`` or ``error`` present."""
        if self.error is not None:
            return {
                "jsonrpc": self.jsonrpc,
                "error": self.error.model_dump(exclude_none=True),
                "id": self.id,
            }
        return {"jsonrpc": self.jsonrpc, "result": self.result, "id": self.id}


# Standard JSON-RPC error codes
class RPCErrorCodes:
    """Standard JSON-RPC error codes and the gateway's own sentinel."""

    # JSON-RPC standard errors
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Every upstream or internal call failure (server error range)
    CALL_FAILED = -32000
