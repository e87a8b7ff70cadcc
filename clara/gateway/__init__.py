"""Gateway module - JSON-RPC dispatch and error translation."""

from .schemas import (
    JSONRPCRequest,
    JSONRPCResponse,
    RPCErrorDetail,
    RPCErrorCodes,
)
from .errors import CANONICAL_ERROR_CODE, translate_error
from .service import CallFailed, dispatch, handle_payload
from .router import router


__all__ = [
    # Schemas
    "JSONRPCRequest",
    "JSONRPCResponse",
    "RPCErrorDetail",
    "RPCErrorCodes",
    # Errors
    "CANONICAL_ERROR_CODE",
    "translate_error",
    # Service
    "CallFailed",
    "dispatch",
    "handle_payload",
    # Router
    "router",
]
