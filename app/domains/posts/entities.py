import uuid
from datetime import datetime
from typing import Optional, Dict, Any

from app.core.exceptions import ValidationError


class Author:
    """Автор поста (имя и фамилия не обязательны)"""

    def __init__(self, first_name: Optional[str] = None, last_name: Optional[str] = None):
        self.first_name = first_name
        self.last_name = last_name

    def full_name(self, separator: str = "") -> str:
        """Склейка имени и фамилии; отсутствующие части считаются пустыми строками"""
        return f"{self.first_name or ''}{separator}{self.last_name or ''}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Author):
            return False
        return (self.first_name, self.last_name) == (other.first_name, other.last_name)

    def __repr__(self) -> str:
        return f"Author(first_name={self.first_name!r}, last_name={self.last_name!r})"


class BlogPost:
    """Сущность поста блога"""

    def __init__(
        self,
        id: Optional[uuid.UUID],
        title: str,
        content: str,
        author: Optional[Author] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.title = title
        self.content = content
        self.author = author or Author()
        self.created_at = created_at
        self.updated_at = updated_at

    def to_public_view(self, separator: str = "") -> Dict[str, Any]:
        """Публичное представление поста: только id, title, author, content"""
        return {
            "id": str(self.id) if self.id is not None else None,
            "title": self.title,
            "author": self.author.full_name(separator),
            "content": self.content,
        }

    def update(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> None:
        """Частичное обновление: меняются только переданные поля"""
        if title is not None:
            self.title = require_text("title", title)
        if content is not None:
            self.content = require_text("content", content)
        if first_name is not None:
            self.author.first_name = first_name
        if last_name is not None:
            self.author.last_name = last_name

    @classmethod
    def create_post(
        cls,
        title: Optional[str],
        content: Optional[str],
        author: Optional[Author] = None
    ) -> "BlogPost":
        """Создание нового поста; id назначается при вставке"""
        return cls(
            id=None,
            title=require_text("title", title),
            content=require_text("content", content),
            author=author
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, BlogPost):
            return False
        return self.id is not None and self.id == other.id

    def __repr__(self) -> str:
        return f"BlogPost(id={self.id}, title={self.title!r})"


def require_text(field: str, value: Optional[str]) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing `{field}` in request body")
    return value
