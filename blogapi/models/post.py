"""
MongoDB models for blog posts.

Post and NewPost share a shape but live in separate collections and are never
queried together.
"""
from blogapi.models.base import MongoDocument


class Post(MongoDocument):
    """Published post, collection ``posts``."""

    image: str  # Absolute URL of the stored image
    title: str
    slug: str
    description: str = ""
    content: str = ""


class NewPost(MongoDocument):
    """Post created through the upload workflow, collection ``newposts``."""

    image: str
    title: str
    slug: str
    description: str = ""
    content: str = ""
