"""
MongoDB model for comments. Comments are global, not attached to a post.
"""
from blogapi.models.base import MongoDocument


class Comment(MongoDocument):
    date: str  # Free-form, as sent by the client
    description: str
