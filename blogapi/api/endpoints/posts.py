"""
Post API endpoints.

Creating a post stores the uploaded image and writes a document to the
``newposts`` collection. Listing and lookup read either collection as-is.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from blogapi.api.deps import get_post_service, get_repositories
from blogapi.core.errors import BadRequest, NotFound, PersistenceError, QueryError, StorageError
from blogapi.schemas.post import PostResponse
from blogapi.services.post_service import PostService
from blogapi.services.repository import DocumentRepository, Repositories

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create-post", response_model=PostResponse, status_code=201)
async def create_post(
    title: Optional[str] = Form(None),
    descr: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    service: PostService = Depends(get_post_service),
):
    """Upload an image and create a post from the form fields."""
    data = await file.read() if file is not None else None
    filename = file.filename if file is not None else None

    try:
        post = await service.create_post(title, descr, content, filename, data)
    except BadRequest as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (StorageError, PersistenceError):
        logger.exception("Error creating post")
        raise HTTPException(status_code=500, detail="Error creating post")

    return PostResponse.model_validate(post)


async def _list(repository: DocumentRepository) -> List[PostResponse]:
    try:
        posts = await repository.find_all()
    except QueryError:
        raise HTTPException(status_code=501, detail="Error fetching data")
    return [PostResponse.model_validate(p) for p in posts]


async def _get(repository: DocumentRepository, post_id: str) -> PostResponse:
    try:
        post = await repository.find_by_id(post_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Post not found")
    except QueryError:
        raise HTTPException(status_code=501, detail="Error fetching post")
    return PostResponse.model_validate(post)


@router.get("/getdata", response_model=List[PostResponse])
async def list_posts(repositories: Repositories = Depends(get_repositories)):
    """List all posts."""
    return await _list(repositories.posts)


@router.get("/getnewdata", response_model=List[PostResponse])
async def list_new_posts(repositories: Repositories = Depends(get_repositories)):
    """List all posts created through uploads."""
    return await _list(repositories.new_posts)


@router.get("/getSinglepost/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, repositories: Repositories = Depends(get_repositories)):
    """Get a post by ID."""
    return await _get(repositories.posts, post_id)


@router.get("/getSinglenewpost/{post_id}", response_model=PostResponse)
async def get_new_post(post_id: str, repositories: Repositories = Depends(get_repositories)):
    """Get an uploaded post by ID."""
    return await _get(repositories.new_posts, post_id)
