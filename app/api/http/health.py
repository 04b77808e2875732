from fastapi import APIRouter, Request

from app.domains.posts.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(request: Request):
    """Проверка состояния сервиса"""
    return HealthResponse(status="ok", database=request.app.state.database.is_connected)
