from app.domains.posts.entities import Author, BlogPost
from app.domains.posts.schemas import (
    AuthorSchema, PostBase, PostCreate, PostUpdate, PostResponse,
    PostListResponse, HealthResponse, MessageResponse
)
from app.domains.posts.services import PostService

__all__ = [
    "Author", "BlogPost",
    "AuthorSchema", "PostBase", "PostCreate", "PostUpdate", "PostResponse",
    "PostListResponse", "HealthResponse", "MessageResponse",
    "PostService"
]
