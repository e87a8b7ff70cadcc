"""FastAPI router for the JSON-RPC endpoint."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from clara.dependencies import get_upstream_client
from clara.upstream.client import ZksClient

from .service import handle_payload, parse_error


router = APIRouter(tags=["rpc"])


@router.post("/")
async def rpc_endpoint(
    request: Request,
    client: Annotated[ZksClient, Depends(get_upstream_client)],
) -> Response:
    """Serve a JSON-RPC 2.0 request or batch.

    Protocol errors are reported in the JSON-RPC envelope with HTTP 200;
    a body made only of notifications gets an empty 204.
    """
    body = await request.body()
    try:
        payload = json.loads(body)
    except ValueError:
        return JSONResponse(content=parse_error())

    content = await handle_payload(client, payload)
    if content is None:
        return Response(status_code=204)
    return JSONResponse(content=content)
