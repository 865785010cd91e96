"""
Pydantic schemas for comment API requests/responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class CommentCreate(BaseModel):
    """Schema for sending a comment.

    Fields are optional here so a missing value is reported as 400 by the
    endpoint rather than 422 by request validation.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2024-01-01",
                "desc": "nice post",
            }
        }
    )

    date: Optional[str] = None
    desc: Optional[str] = None


class CommentResponse(BaseModel):
    """Schema for comment response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: str
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
