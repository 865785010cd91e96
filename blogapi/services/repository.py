"""
Typed document repositories over MongoDB collections.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from blogapi.core.errors import NotFound, PersistenceError, QueryError
from blogapi.core.mongodb import COMMENTS, NEW_POSTS, POSTS, USERS, MongoDB
from blogapi.models import Comment, MongoDocument, NewPost, Post, User

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=MongoDocument)


class DocumentRepository(Generic[DocumentT]):
    """Create and read access to one collection, validated into ``model``."""

    def __init__(self, collection, model: Type[DocumentT]):
        self.collection = collection
        self.model = model

    async def create(self, fields: Dict[str, Any]) -> DocumentT:
        """Insert a document with fresh timestamps and return it with its id."""
        now = datetime.now(timezone.utc)
        # MongoDB stores milliseconds; keep the returned document equal to a re-read
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        document = {**fields, "created_at": now, "updated_at": now}
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to insert {self.model.__name__}: {e}")
            raise PersistenceError(f"Could not save {self.model.__name__}") from e

        document["_id"] = result.inserted_id
        return self.model.model_validate(document)

    async def find_all(self) -> List[DocumentT]:
        """All documents in storage order."""
        try:
            documents = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list {self.model.__name__}: {e}")
            raise QueryError(f"Could not list {self.model.__name__}") from e
        return [self._validate(doc) for doc in documents]

    async def find_by_id(self, document_id: str) -> DocumentT:
        """Fetch one document, raising NotFound if the id was never assigned."""
        try:
            object_id = ObjectId(document_id)
        except (InvalidId, TypeError):
            raise NotFound(f"{self.model.__name__} {document_id} not found")

        try:
            document = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to fetch {self.model.__name__} {document_id}: {e}")
            raise QueryError(f"Could not fetch {self.model.__name__}") from e

        if document is None:
            raise NotFound(f"{self.model.__name__} {document_id} not found")
        return self._validate(document)

    def _validate(self, document: Dict[str, Any]) -> DocumentT:
        try:
            return self.model.model_validate(document)
        except ValidationError as e:
            logger.error(f"Malformed {self.model.__name__} {document.get('_id')}: {e}")
            raise QueryError(f"Stored {self.model.__name__} is malformed") from e


class Repositories:
    """One repository per entity type, sharing a single connection."""

    def __init__(self, mongodb: MongoDB):
        self.posts = DocumentRepository(mongodb.get_collection(POSTS), Post)
        self.new_posts = DocumentRepository(mongodb.get_collection(NEW_POSTS), NewPost)
        self.comments = DocumentRepository(mongodb.get_collection(COMMENTS), Comment)
        self.users = DocumentRepository(mongodb.get_collection(USERS), User)
