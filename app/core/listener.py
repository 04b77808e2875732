import asyncio
import logging
import socket
from typing import Optional

import uvicorn

from app.core.exceptions import BindError

logger = logging.getLogger(__name__)


class UvicornListener:
    """HTTP сервер uvicorn на заранее занятом сокете"""

    def __init__(self, app, graceful_timeout: Optional[int] = None):
        self.app = app
        self.graceful_timeout = graceful_timeout
        self.server: Optional[uvicorn.Server] = None
        self._socket: Optional[socket.socket] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def port(self) -> Optional[int]:
        if self._socket is None:
            return None
        return self._socket.getsockname()[1]

    async def bind(self, host: str, port: int) -> None:
        """Занять порт и дождаться запуска сервера"""
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
        except OSError as e:
            sock.close()
            raise BindError(f"Could not bind to {host}:{port}: {e}") from e

        config = uvicorn.Config(
            self.app,
            log_config=None,
            lifespan="off",
            timeout_graceful_shutdown=self.graceful_timeout
        )
        server = uvicorn.Server(config)
        task = asyncio.create_task(server.serve(sockets=[sock]))

        while not server.started and not task.done():
            await asyncio.sleep(0.01)

        if not server.started:
            sock.close()
            cause = None if task.cancelled() else task.exception()
            raise BindError(f"Server on {host}:{port} failed to start") from cause

        self.server = server
        self._socket = sock
        self._task = task

    async def wait_closed(self) -> None:
        """Ожидание завершения сервера (например по SIGINT)"""
        if self._task is not None:
            await self._task

    async def close(self) -> None:
        """Остановка сервера с ожиданием активных соединений"""
        if self.server is None:
            return

        self.server.should_exit = True
        try:
            await self._task
        finally:
            self._socket.close()
            self.server = None
            self._socket = None
            self._task = None
