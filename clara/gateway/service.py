"""Dispatch of inbound JSON-RPC calls to the upstream client."""

import asyncio
from typing import Any

from pydantic import ValidationError

from clara.exceptions import InvalidParamsError
from clara.upstream.client import ZksClient
from clara.zks.api import MethodDescriptor, lookup_method

from .errors import translate_error
from .logger import rpc_call_log
from .schemas import JSONRPCRequest, JSONRPCResponse, RPCErrorCodes, RPCErrorDetail


class CallFailed(Exception):
    """Carries the canonical error of a failed upstream call."""

    def __init__(self, error: RPCErrorDetail):
        super().__init__(error.message)
        self.error = error


async def dispatch(client: ZksClient, descriptor: MethodDescriptor, params: Any) -> Any:
    """Serve one call of a declared method.

    Decodes the params, invokes the identically-named client coroutine once
    and returns its result unchanged.

    Args:
        client: Upstream client.
        descriptor: The method being called.
        params: Raw ``params`` member of the request.

    Returns:
        The upstream result.

    Raises:
        InvalidParamsError: If params don't match the declaration. The
            client is not called.
        CallFailed: If the upstream call fails for any reason.
    """
    args = descriptor.decode_params(params)
    handler = getattr(client, descriptor.client_method)
    try:
        return await handler(*args)
    except Exception as e:
        raise CallFailed(translate_error(e)) from e


async def handle_request(client: ZksClient, request: JSONRPCRequest) -> JSONRPCResponse:
    """Turn one validated request into its response.

    Args:
        client: Upstream client.
        request: Inbound request.

    Returns:
        The JSON-RPC response (also built for notifications; the caller
        decides whether to send it).
    """
    descriptor = lookup_method(request.method)
    if descriptor is None:
        return JSONRPCResponse.error_response(
            id=request.id,
            code=RPCErrorCodes.METHOD_NOT_FOUND,
            message=f"Method not found: {request.method}",
        )

    async with rpc_call_log(request.method, request.id) as call:
        try:
            result = await dispatch(client, descriptor, request.params)
        except InvalidParamsError as e:
            call.mark_invalid_params(e.message)
            return JSONRPCResponse.error_response(
                id=request.id,
                code=RPCErrorCodes.INVALID_PARAMS,
                message=e.message,
            )
        except CallFailed as e:
            call.mark_error(e.error.message)
            return JSONRPCResponse(id=request.id, error=e.error)

    return JSONRPCResponse.success(id=request.id, result=result)


async def handle_message(client: ZksClient, message: Any) -> dict[str, Any] | None:
    """Handle a single decoded JSON-RPC message.

    Returns:
        The wire response, or None for a notification.
    """
    if not isinstance(message, dict):
        return _invalid_request(None)

    try:
        request = JSONRPCRequest.model_validate(message)
    except ValidationError:
        request_id = message.get("id")
        if not isinstance(request_id, (str, int)) or isinstance(request_id, bool):
            request_id = None
        return _invalid_request(request_id)

    response = await handle_request(client, request)
    if request.is_notification:
        return None
    return response.to_wire()


async def handle_payload(client: ZksClient, payload: Any) -> dict[str, Any] | list[dict[str, Any]] | None:
    """Handle a decoded request body: a single request or a batch.

    Batch entries are served concurrently and answered in request order.

    Args:
        client: Upstream client.
        payload: Parsed JSON body.

    Returns:
        A response object, a list of responses, or None if nothing needs
        to be sent back.
    """
    if isinstance(payload, list):
        if not payload:
            return _invalid_request(None)
        responses = await asyncio.gather(
            *(handle_message(client, message) for message in payload)
        )
        answered = [response for response in responses if response is not None]
        return answered or None

    return await handle_message(client, payload)


def parse_error() -> dict[str, Any]:
    return JSONRPCResponse.error_response(
        id=None,
        code=RPCErrorCodes.PARSE_ERROR,
        message="Parse error",
    ).to_wire()


def _invalid_request(request_id: str | int | None) -> dict[str, Any]:
    return JSONRPCResponse.error_response(
        id=request_id,
        code=RPCErrorCodes.INVALID_REQUEST,
        message="Invalid request",
    ).to_wire()
