import asyncio
import enum
import logging
from typing import Callable, Optional

from app.core.config import settings
from app.core.db import Database
from app.core.exceptions import (
    DatabaseConnectionError, InvalidStateError, ListenerCloseError
)
from app.core.listener import UvicornListener

logger = logging.getLogger(__name__)


class LifecycleState(str, enum.Enum):
    STOPPED = "stopped"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class ServerLifecycle:
    """Запуск и остановка HTTP сервера вместе с подключением к базе данных.

    При запуске сначала подключается база данных, затем занимается порт.
    При остановке сначала закрывается база данных, затем HTTP сервер.
    """

    def __init__(
        self,
        app,
        database: Optional[Database] = None,
        listener_factory: Optional[Callable] = None
    ):
        self.app = app
        self.database = database or app.state.database
        self.listener_factory = listener_factory or UvicornListener
        self.listener = None
        self.state = LifecycleState.STOPPED
        self._lock = asyncio.Lock()

    @property
    def port(self) -> Optional[int]:
        return self.listener.port if self.listener is not None else None

    async def start(
        self,
        database_url: Optional[str] = None,
        port: Optional[int] = None,
        host: Optional[str] = None
    ) -> None:
        database_url = database_url or settings.database_url
        port = settings.port if port is None else port
        host = host or settings.host

        async with self._lock:
            if self.state is not LifecycleState.STOPPED:
                raise InvalidStateError(f"Cannot start server in state '{self.state.value}'")

            self.state = LifecycleState.STARTING
            try:
                await self.database.connect(database_url)
            except BaseException:
                self.state = LifecycleState.STOPPED
                raise

            try:
                listener = self.listener_factory(self.app)
                await listener.bind(host, port)
            except BaseException as e:
                logger.error(f"Could not start listener: {e}")
                try:
                    await self.database.disconnect()
                except DatabaseConnectionError as disconnect_error:
                    logger.error(f"Could not release database after failed start: {disconnect_error}")
                finally:
                    self.state = LifecycleState.STOPPED
                raise

            self.listener = listener
            self.state = LifecycleState.RUNNING
            logger.info(f"Your app is listening on port {listener.port}")

    async def stop(self) -> None:
        async with self._lock:
            if self.state is not LifecycleState.RUNNING:
                raise InvalidStateError(f"Cannot stop server in state '{self.state.value}'")

            self.state = LifecycleState.STOPPING
            try:
                await self.database.disconnect()
            except DatabaseConnectionError:
                self.state = LifecycleState.RUNNING
                raise

            logger.info("Closing server")
            listener = self.listener
            self.listener = None
            try:
                await listener.close()
            except Exception as e:
                logger.error(f"Error while closing server: {e}")
                raise ListenerCloseError(f"Error while closing server: {e}") from e
            finally:
                self.state = LifecycleState.STOPPED

    async def wait_closed(self) -> None:
        """Ожидание остановки HTTP сервера"""
        if self.listener is not None:
            await self.listener.wait_closed()
