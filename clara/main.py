import httpx
from fastapi import FastAPI
from contextlib import asynccontextmanager

from .config import get_settings
from .gateway.router import router as rpc_router
from .upstream.client import ZksClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Client handed to create_app is owned by the caller
    if getattr(app.state, "upstream", None) is not None:
        yield
        return

    settings = get_settings()
    # timeout=None removes the global default; the upstream timeout is per request
    http_client = httpx.AsyncClient(timeout=None)
    app.state.upstream = ZksClient(
        settings.UPSTREAM_URL,
        http_client,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )

    yield

    await http_client.aclose()
    app.state.upstream = None


def create_app(client: ZksClient | None = None) -> FastAPI:
    """Build the gateway application.

    Args:
        client: Upstream client to forward calls to. When omitted, the
            lifespan builds one from settings.

    Returns:
        The FastAPI application serving the JSON-RPC endpoint.
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.APP_NAME,
        lifespan=lifespan,
        debug=settings.DEBUG
    )
    app.state.upstream = client

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "app": settings.APP_NAME}

    app.include_router(rpc_router)
    return app


app = create_app()
