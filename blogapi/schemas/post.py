"""
Pydantic schemas for post API responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class PostResponse(BaseModel):
    """Schema for post response. Used for both posts and new posts."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    image: str
    title: str
    slug: str
    description: str
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
