"""Global dependencies for the application."""

from fastapi import Request

from clara.upstream.client import ZksClient


async def get_upstream_client(request: Request) -> ZksClient:
    """Dependency to get the shared upstream client.

    The client is created in the app lifespan (or passed to ``create_app``)
    and shared by every request so its HTTP connections are pooled.

    Args:
        request: The FastAPI request object.

    Returns:
        The application's ZksClient instance.
    """
    return request.app.state.upstream
