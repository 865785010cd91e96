"""
MongoDB model for users. Schema only; no endpoint reads or writes users.
"""
from typing import Optional

from blogapi.models.base import MongoDocument


class User(MongoDocument):
    username: str
    email: str
    image: Optional[str] = None
