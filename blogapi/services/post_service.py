"""
Post ingestion: validate the upload, store the image, derive the slug and
save the post document.
"""
import logging
import re
from typing import Optional

from blogapi.core.errors import BadRequest, PersistenceError
from blogapi.models import NewPost
from blogapi.services.asset_store import AssetStore
from blogapi.services.repository import DocumentRepository

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Lower-case the title and replace each whitespace run with one hyphen."""
    return _WHITESPACE.sub("-", title.lower())


class PostService:
    """Runs the create-post workflow. Single pass, no retries."""

    def __init__(self, asset_store: AssetStore, repository: DocumentRepository[NewPost]):
        self.asset_store = asset_store
        self.repository = repository

    async def create_post(
        self,
        title: Optional[str],
        description: Optional[str],
        content: Optional[str],
        filename: Optional[str],
        data: Optional[bytes],
    ) -> NewPost:
        """
        Create a post from an uploaded image.

        Raises BadRequest before any storage when the title or file is missing,
        StorageError when the image cannot be stored and PersistenceError when
        the document cannot be written. In the last case the image is already
        stored and stays orphaned.
        """
        if not title or not title.strip():
            raise BadRequest("Title is required")
        if not data or not filename:
            raise BadRequest("No file uploaded")

        image_url = await self.asset_store.store(data, filename)

        try:
            post = await self.repository.create(
                {
                    "image": image_url,
                    "title": title,
                    "slug": slugify(title),
                    "description": description or "",
                    "content": content or "",
                }
            )
        except PersistenceError:
            logger.warning(f"Post '{title}' not saved; stored image is orphaned: {image_url}")
            raise

        logger.info(f"Created post {post.id} ({post.slug})")
        return post
