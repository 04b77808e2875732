from app.db.models.post import BlogPost

__all__ = [
    "BlogPost"
]
