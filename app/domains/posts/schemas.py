from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List


class AuthorSchema(BaseModel):
    """Схема автора поста"""
    first_name: Optional[str] = Field(None, alias="firstName", max_length=255)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=255)

    model_config = ConfigDict(populate_by_name=True)


class PostBase(BaseModel):
    """Базовая схема поста"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    author: Optional[AuthorSchema] = None

    @field_validator('title', 'content')
    @classmethod
    def validate_not_blank(cls, v, info):
        if not v.strip():
            raise ValueError(f'{info.field_name.capitalize()} cannot be empty')
        return v


class PostCreate(PostBase):
    """Схема для создания поста"""
    pass


class PostUpdate(BaseModel):
    """Схема для частичного обновления поста"""
    id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    author: Optional[AuthorSchema] = None

    @field_validator('title', 'content')
    @classmethod
    def validate_not_blank(cls, v, info):
        if v is not None and not v.strip():
            raise ValueError(f'{info.field_name.capitalize()} cannot be empty')
        return v


class PostResponse(BaseModel):
    """Публичное представление поста"""
    id: str
    title: str
    author: str
    content: str


class HealthResponse(BaseModel):
    status: str
    database: bool


class MessageResponse(BaseModel):
    message: str


PostListResponse = List[PostResponse]
