from sqlalchemy import Column, String, Text

from app.db.base import BaseModel


class BlogPost(BaseModel):
    __tablename__ = "blog_posts"

    title = Column(String(255), nullable=False)
    author_first_name = Column(String(255), nullable=True)
    author_last_name = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
