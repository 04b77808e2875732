from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
import uuid

from app.db.models.post import BlogPost as BlogPostModel

if TYPE_CHECKING:
    from app.domains.posts.entities import BlogPost


class PostRepository:
    """Репозиторий для работы с постами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: "BlogPost") -> "BlogPost":
        """Создание нового поста"""
        created = await self.create_many([post])
        return created[0]

    async def create_many(self, posts: List["BlogPost"]) -> List["BlogPost"]:
        """Вставка пачки постов в одной транзакции"""
        db_posts = [self._to_model(post) for post in posts]

        self.session.add_all(db_posts)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        for db_post in db_posts:
            await self.session.refresh(db_post)
        return [self._to_domain(db_post) for db_post in db_posts]

    async def get_by_id(self, post_id: uuid.UUID) -> Optional["BlogPost"]:
        """Получение поста по id"""
        result = await self.session.execute(
            select(BlogPostModel).where(BlogPostModel.id == post_id)
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    async def list_all(self) -> List["BlogPost"]:
        """Получение всех постов в порядке создания"""
        result = await self.session.execute(
            select(BlogPostModel).order_by(BlogPostModel.created_at, BlogPostModel.id)
        )
        db_posts = result.scalars().all()
        return [self._to_domain(post) for post in db_posts]

    async def count(self) -> int:
        """Подсчет количества постов"""
        result = await self.session.execute(select(func.count(BlogPostModel.id)))
        return result.scalar()

    async def update(self, post: "BlogPost") -> Optional["BlogPost"]:
        """Обновление поста"""
        db_post = await self.session.get(BlogPostModel, post.id)
        if db_post is None:
            return None

        db_post.title = post.title
        db_post.content = post.content
        db_post.author_first_name = post.author.first_name
        db_post.author_last_name = post.author.last_name

        await self.session.commit()
        await self.session.refresh(db_post)

        return self._to_domain(db_post)

    async def delete(self, post_id: uuid.UUID) -> bool:
        """Удаление поста"""
        stmt = delete(BlogPostModel).where(BlogPostModel.id == post_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def delete_all(self) -> int:
        """Удаление всех постов"""
        result = await self.session.execute(delete(BlogPostModel))
        await self.session.commit()
        return result.rowcount

    def _to_model(self, post: "BlogPost") -> BlogPostModel:
        return BlogPostModel(
            id=post.id or uuid.uuid4(),
            title=post.title,
            content=post.content,
            author_first_name=post.author.first_name,
            author_last_name=post.author.last_name
        )

    def _to_domain(self, db_post: BlogPostModel) -> "BlogPost":
        """Преобразование модели БД в доменную сущность"""
        from app.domains.posts.entities import Author, BlogPost

        return BlogPost(
            id=db_post.id,
            title=db_post.title,
            content=db_post.content,
            author=Author(
                first_name=db_post.author_first_name,
                last_name=db_post.author_last_name
            ),
            created_at=db_post.created_at,
            updated_at=db_post.updated_at
        )
