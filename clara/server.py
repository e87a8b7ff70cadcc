"""Gateway listener: bind, serve and stop."""

import asyncio
import socket
import sys
from typing import NamedTuple

import httpx
import structlog
import uvicorn

from .config import Settings, get_settings
from .exceptions import ServerStartError
from .log import configure_logging
from .main import create_app
from .upstream.client import ZksClient

logger = structlog.get_logger("clara.server")


class BoundAddress(NamedTuple):
    host: str
    port: int

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class ServerHandle:
    """Live handle of a started gateway server."""

    def __init__(self, server: uvicorn.Server, task: asyncio.Task) -> None:
        self._server = server
        self._task = task

    def stop(self) -> None:
        """Ask the server to shut down."""
        self._server.should_exit = True

    def is_stopped(self) -> bool:
        return self._task.done()

    async def stopped(self) -> None:
        """Block until the server has shut down."""
        await self._task


class GatewayServer:
    """Serves the `zks` API on one TCP listener.

    Attributes:
        client: Upstream client every call is forwarded to.
        host: Interface to bind.
        port: Port to bind; 0 picks a free one.
    """

    def __init__(self, client: ZksClient, host: str = "127.0.0.1", port: int = 7000) -> None:
        self.client = client
        self.host = host
        self.port = port

    def _bind(self) -> socket.socket:
        try:
            family, kind, proto, _, sockaddr = socket.getaddrinfo(
                self.host, self.port, type=socket.SOCK_STREAM
            )[0]
        except socket.gaierror as e:
            raise ServerStartError(f"{self.host}:{self.port}", e.strerror or str(e))

        sock = socket.socket(family, kind, proto)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind(sockaddr)
        except OSError as e:
            sock.close()
            raise ServerStartError(f"{self.host}:{self.port}", e.strerror or str(e))
        return sock

    async def start(self) -> tuple[BoundAddress, ServerHandle]:
        """Bind the listener and start serving in the background.

        Returns:
            The bound address and a handle to stop or await the server.

        Raises:
            ServerStartError: If the listener can't be bound or the server
                exits during startup.
        """
        sock = self._bind()
        address = BoundAddress(*sock.getsockname()[:2])

        config = uvicorn.Config(
            create_app(self.client),
            log_config=None,
            access_log=False,
        )
        server = uvicorn.Server(config)
        task = asyncio.create_task(server.serve(sockets=[sock]))

        while not server.started:
            if task.done():
                sock.close()
                error = task.exception()
                raise ServerStartError(str(address), str(error) if error else "server exited during startup")
            await asyncio.sleep(0.01)

        logger.info("server_started", address=str(address), upstream=self.client.url)
        return address, ServerHandle(server, task)


async def serve(settings: Settings) -> int:
    """Run the gateway until it is stopped.

    Returns:
        Process exit status: 0 after a clean shutdown, 1 if the listener
        could not be bound.
    """
    async with httpx.AsyncClient(timeout=None) as http_client:
        client = ZksClient(
            settings.UPSTREAM_URL,
            http_client,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )
        server = GatewayServer(client, settings.HOST, settings.PORT)
        try:
            address, handle = await server.start()
        except ServerStartError as e:
            print(f"Failed to start server: {e}")
            return 1

        print(f"port {address}")
        await handle.stopped()
        logger.info("server_stopped", address=str(address))
    return 0


def main() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    sys.exit(asyncio.run(serve(settings)))
