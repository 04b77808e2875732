import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.exceptions import (
    DatabaseConnectionError, DatabaseUnavailableError, InvalidStateError
)

logger = logging.getLogger(__name__)

# Базовый класс для моделей
Base = declarative_base()


class Database:
    """Единственное подключение к базе данных процесса"""

    def __init__(self, echo: bool = False):
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[sessionmaker] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self, database_url: str) -> None:
        """Подключение к базе данных и создание таблиц"""
        if self.engine is not None:
            raise InvalidStateError("Database is already connected")

        # Регистрируем модели в метаданных
        import app.db.models  # noqa: F401

        engine = None
        try:
            engine = create_async_engine(database_url, future=True, echo=self.echo)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError, ImportError, ValueError, asyncio.TimeoutError) as e:
            if engine is not None:
                await engine.dispose()
            logger.error(f"Could not connect to database: {e}")
            raise DatabaseConnectionError(f"Could not connect to database: {e}") from e

        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        logger.info(f"Connected to database {engine.url.render_as_string(hide_password=True)}")

    async def disconnect(self) -> None:
        """Закрытие всех соединений пула"""
        if self.engine is None:
            return

        engine = self.engine
        try:
            await engine.dispose()
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseConnectionError(f"Could not disconnect from database: {e}") from e

        self.engine = None
        self.session_factory = None
        logger.info("Disconnected from database")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self.session_factory is None:
            raise DatabaseUnavailableError("Database is not connected")
        async with self.session_factory() as session:
            yield session


# Функция для dependency injection в FastAPI
async def get_db(request: Request):
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
