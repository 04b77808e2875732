import asyncio
import logging
import sys
from typing import Optional

from app.core.config import settings
from app.core.exceptions import BlogError
from app.core.lifecycle import ServerLifecycle
from app.core.logging import configure_logging
from app.main import app

logger = logging.getLogger(__name__)


async def run_server(database_url: Optional[str] = None, port: Optional[int] = None) -> None:
    """Запуск сервера до получения сигнала остановки"""
    lifecycle = ServerLifecycle(app)
    await lifecycle.start(database_url, port)
    try:
        await lifecycle.wait_closed()
    finally:
        await lifecycle.stop()


def main() -> None:
    configure_logging(settings.log_level)
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except BlogError as e:
        logger.error(e.message)
        sys.exit(1)


if __name__ == "__main__":
    main()
