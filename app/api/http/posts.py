from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.domains.posts.schemas import (
    MessageResponse, PostCreate, PostUpdate, PostResponse, PostListResponse
)
from app.domains.posts.services import PostService

router = APIRouter(prefix="/posts", tags=["posts"])

NOT_FOUND_RESPONSES = {
    400: {"model": MessageResponse},
    404: {"model": MessageResponse},
}


@router.get("", response_model=PostListResponse)
async def list_posts(db: AsyncSession = Depends(get_db)):
    """Получение списка всех постов"""
    post_service = PostService(db)

    posts = await post_service.list_posts()

    return [PostResponse(**post_service.public_view(post)) for post in posts]


@router.get("/{post_id}", response_model=PostResponse, responses=NOT_FOUND_RESPONSES)
async def get_post(post_id: str, db: AsyncSession = Depends(get_db)):
    """Получение поста по id"""
    post_service = PostService(db)

    post = await post_service.get_post(post_id)

    return PostResponse(**post_service.public_view(post))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(post_data: PostCreate, db: AsyncSession = Depends(get_db)):
    """Создание нового поста"""
    post_service = PostService(db)

    post = await post_service.create_post(post_data)

    return PostResponse(**post_service.public_view(post))


@router.put("/{post_id}", response_model=PostResponse, responses=NOT_FOUND_RESPONSES)
async def update_post(
    post_id: str,
    update_data: PostUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Частичное обновление поста"""
    post_service = PostService(db)

    post = await post_service.update_post(post_id, update_data)

    return PostResponse(**post_service.public_view(post))


@router.delete(
    "/{post_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND_RESPONSES
)
async def delete_post(post_id: str, db: AsyncSession = Depends(get_db)):
    """Удаление поста"""
    post_service = PostService(db)

    await post_service.delete_post(post_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
