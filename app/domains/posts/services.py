import logging
from typing import Optional, List, Mapping, Sequence, Dict, Any, Union
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from app.core.config import settings
from app.core.exceptions import InvalidIdentifier, NotFound, ValidationError
from app.db.repositories.post_repository import PostRepository
from app.domains.posts.entities import Author, BlogPost
from app.domains.posts.schemas import PostCreate, PostUpdate

logger = logging.getLogger(__name__)


class PostService:
    """Сервис для работы с постами блога"""

    def __init__(self, session: AsyncSession, author_separator: Optional[str] = None):
        self.session = session
        self.post_repository = PostRepository(session)
        self.author_separator = (
            settings.author_separator if author_separator is None else author_separator
        )

    async def create_post(self, post_data: Union[PostCreate, Mapping[str, Any]]) -> BlogPost:
        """Создание нового поста"""
        post = build_post(post_data)
        created_post = await self.post_repository.create(post)
        logger.info(f"Created blog post {created_post.id}")
        return created_post

    async def insert_many(self, items: Sequence[Union[PostCreate, Mapping[str, Any]]]) -> List[BlogPost]:
        """Массовое создание: либо все посты, либо ни одного"""
        posts = []
        for index, item in enumerate(items):
            try:
                posts.append(build_post(item))
            except ValidationError as e:
                raise ValidationError(f"Item {index}: {e.message}") from e

        if not posts:
            return []

        created_posts = await self.post_repository.create_many(posts)
        logger.info(f"Inserted {len(created_posts)} blog posts")
        return created_posts

    async def find_by_id(self, post_id: Union[str, uuid.UUID]) -> Optional[BlogPost]:
        """Поиск поста по id; None если поста нет"""
        return await self.post_repository.get_by_id(parse_id(post_id))

    async def get_post(self, post_id: Union[str, uuid.UUID]) -> BlogPost:
        """Получение поста по id"""
        post = await self.find_by_id(post_id)
        if not post:
            raise NotFound(f"Blog post {post_id} not found")
        return post

    async def list_posts(self) -> List[BlogPost]:
        """Получение всех постов"""
        return await self.post_repository.list_all()

    async def count_posts(self) -> int:
        return await self.post_repository.count()

    async def update_post(
        self,
        post_id: Union[str, uuid.UUID],
        update_data: PostUpdate
    ) -> BlogPost:
        """Частичное обновление поста"""
        parsed_id = parse_id(post_id)

        if update_data.id is not None and parse_id(update_data.id) != parsed_id:
            raise ValidationError(
                f"Request path id ({parsed_id}) and request body id ({update_data.id}) must match"
            )

        post = await self.post_repository.get_by_id(parsed_id)
        if not post:
            raise NotFound(f"Blog post {post_id} not found")

        author = update_data.author
        post.update(
            title=update_data.title,
            content=update_data.content,
            first_name=author.first_name if author else None,
            last_name=author.last_name if author else None
        )

        updated_post = await self.post_repository.update(post)
        if not updated_post:
            raise NotFound(f"Blog post {post_id} not found")

        logger.info(f"Updated blog post {parsed_id}")
        return updated_post

    async def delete_post(self, post_id: Union[str, uuid.UUID]) -> None:
        """Удаление поста"""
        parsed_id = parse_id(post_id)

        if not await self.post_repository.delete(parsed_id):
            raise NotFound(f"Blog post {post_id} not found")

        logger.info(f"Deleted blog post {parsed_id}")

    def public_view(self, post: BlogPost) -> Dict[str, Any]:
        return post.to_public_view(self.author_separator)


def parse_id(post_id: Union[str, uuid.UUID]) -> uuid.UUID:
    if isinstance(post_id, uuid.UUID):
        return post_id
    try:
        return uuid.UUID(str(post_id))
    except ValueError:
        raise InvalidIdentifier(f"Malformed blog post id: {post_id}")


def build_post(data: Union[PostCreate, Mapping[str, Any]]) -> BlogPost:
    """Сборка доменной сущности из схемы или словаря с проверкой полей"""
    if isinstance(data, PostCreate):
        author = data.author
        return BlogPost.create_post(
            title=data.title,
            content=data.content,
            author=Author(
                first_name=author.first_name if author else None,
                last_name=author.last_name if author else None
            )
        )

    author = data.get("author") or {}
    return BlogPost.create_post(
        title=data.get("title"),
        content=data.get("content"),
        author=Author(
            first_name=author.get("firstName", author.get("first_name")),
            last_name=author.get("lastName", author.get("last_name"))
        )
    )
