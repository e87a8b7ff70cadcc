"""Translation of call failures into the gateway's single error shape.

Upstream error codes and data are intentionally discarded: every failed call
is reported with ``CANONICAL_ERROR_CODE`` and a message, so callers can only
tell failures apart by their text.
"""

from clara.upstream.exceptions import UpstreamRpcError

from .schemas import RPCErrorCodes, RPCErrorDetail


CANONICAL_ERROR_CODE = RPCErrorCodes.CALL_FAILED


def describe_error(exc: BaseException) -> str:
    """Render the human-readable description of a failure.

    Args:
        exc: The exception raised while serving a call.

    Returns:
        The upstream message for structured errors, otherwise ``str(exc)``.
    """
    if isinstance(exc, UpstreamRpcError):
        return exc.message
    return str(exc) or exc.__class__.__name__


def translate_error(exc: BaseException) -> RPCErrorDetail:
    """Map any call failure to the canonical error.

    Args:
        exc: The exception raised while serving a call.

    Returns:
        RPCErrorDetail with the sentinel code, the failure description and
        no data.
    """
    return RPCErrorDetail(code=CANONICAL_ERROR_CODE, message=describe_error(exc))
