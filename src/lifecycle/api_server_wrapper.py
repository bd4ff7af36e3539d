from __future__ import annotations
import asyncio
import uvicorn
from fastapi import FastAPI
from typing import Optional
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs uvicorn inside the viewer's event loop.

    Uvicorn's own signal handlers are disabled so the ShutdownCoordinator
    owns SIGINT/SIGTERM. serve() returns when stop() is called.
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8000):
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level="info",
            access_log=False,
            server_header=False,
        )
        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore
        return server

    async def serve(self) -> None:
        if self._server is not None:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        log.info(f"🌐 Launching API server on http://{self.host}:{self.port}")
        try:
            await self._server.serve()
        finally:
            self._server = None

    async def stop(self, timeout: float = 2.0) -> None:
        """Ask uvicorn to exit and give it `timeout` seconds to do so."""
        server = self._server
        if server is None:
            log.debug("API server not running")
            return

        log.info("🌐 Stopping API server...")
        server.should_exit = True

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self._server is not None and loop.time() < deadline:
            await asyncio.sleep(0.05)

        if self._server is not None:
            log.warn("🌐 API server did not exit in time, forcing")
            server.force_exit = True

    @property
    def is_running(self) -> bool:
        return self._server is not None
