"""Comment API endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException

from blogapi.api.deps import get_repositories
from blogapi.core.errors import PersistenceError, QueryError
from blogapi.schemas.comment import CommentCreate, CommentResponse
from blogapi.services.repository import Repositories

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/sendcomment")
async def send_comment(
    comment_data: CommentCreate,
    repositories: Repositories = Depends(get_repositories),
):
    """Store a comment and acknowledge it."""
    if not comment_data.date or not comment_data.date.strip():
        raise HTTPException(status_code=400, detail="date is required")
    if not comment_data.desc or not comment_data.desc.strip():
        raise HTTPException(status_code=400, detail="desc is required")

    try:
        await repositories.comments.create(
            {"date": comment_data.date, "description": comment_data.desc}
        )
    except PersistenceError:
        raise HTTPException(status_code=501, detail="Error sending comment")

    return "Comment sent successfully!"


@router.get("/getcomments", response_model=List[CommentResponse])
async def list_comments(repositories: Repositories = Depends(get_repositories)):
    """List all comments."""
    try:
        comments = await repositories.comments.find_all()
    except QueryError:
        raise HTTPException(status_code=501, detail="Error fetching comments")
    return [CommentResponse.model_validate(c) for c in comments]
