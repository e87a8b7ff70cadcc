"""Upstream module - typed JSON-RPC client for the zkSync node."""

from .client import ZksClient
from .exceptions import (
    UpstreamError,
    UpstreamRpcError,
    UpstreamTransportError,
    UpstreamDecodeError,
)


__all__ = [
    "ZksClient",
    "UpstreamError",
    "UpstreamRpcError",
    "UpstreamTransportError",
    "UpstreamDecodeError",
]
