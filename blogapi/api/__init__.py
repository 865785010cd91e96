"""API router."""
from fastapi import APIRouter
from .endpoints import (
    posts,
    comments,
)

router = APIRouter()

# Post routes
router.include_router(posts.router, tags=["posts"])

# Comment routes
router.include_router(comments.router, tags=["comments"])
