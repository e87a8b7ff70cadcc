"""Failures raised by the upstream zkSync client."""

from typing import Any

from clara.exceptions import ClaraError


class UpstreamError(ClaraError):
    """Base exception for failures talking to the upstream node."""
    pass


class UpstreamRpcError(UpstreamError):
    """Raised when upstream answers with a JSON-RPC error object.

    Attributes:
        rpc_code: Error code reported by upstream.
        data: Optional structured error data from upstream.
    """

    def __init__(self, rpc_code: int, message: str, data: Any | None = None):
        super().__init__(message=message, code="UPSTREAM_RPC_ERROR")
        self.rpc_code = rpc_code
        self.data = data


class UpstreamTransportError(UpstreamError):
    """Raised when the upstream request fails below the JSON-RPC layer.

    Attributes:
        upstream_url: URL of the upstream node.
        reason: Description of the failure.
    """

    def __init__(self, upstream_url: str, reason: str):
        super().__init__(
            message=f"Upstream at '{upstream_url}' request failed: {reason}",
            code="UPSTREAM_TRANSPORT_ERROR"
        )
        self.upstream_url = upstream_url
        self.reason = reason


class UpstreamDecodeError(UpstreamError):
    """Raised when an upstream response can't be decoded.

    Attributes:
        method: Upstream method whose response was malformed.
        detail: What was wrong with the response.
    """

    def __init__(self, method: str, detail: str):
        super().__init__(
            message=f"Failed to decode response of '{method}': {detail}",
            code="UPSTREAM_DECODE_ERROR"
        )
        self.method = method
        self.detail = detail
