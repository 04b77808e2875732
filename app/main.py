from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.http.health import router as health_router
from app.api.http.posts import router as posts_router
from app.core.config import settings
from app.core.db import Database
from app.core.exceptions import (
    BlogError, DatabaseUnavailableError, InvalidIdentifier, NotFound, ValidationError
)

ERROR_STATUS_CODES = {
    ValidationError: 422,
    InvalidIdentifier: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    DatabaseUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def blog_error_handler(request: Request, exc: BlogError):
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content={"message": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Несуществующие маршруты отдают {"message": "Not Found"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Сборка приложения с собственным подключением к базе данных"""
    app = FastAPI(
        title="Blog Posts API",
        description="CRUD API for blog posts",
        version="1.0.0"
    )
    app.state.database = database or Database(echo=settings.sql_echo)

    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(posts_router)

    return app


app = create_app()
