from .base import MongoDocument
from .post import Post, NewPost
from .comment import Comment
from .user import User

__all__ = [
    "MongoDocument",
    "Post",
    "NewPost",
    "Comment",
    "User",
]
