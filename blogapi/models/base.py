"""
Base model for MongoDB documents.
"""
from datetime import datetime
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class MongoDocument(BaseModel):
    """Stored document with server-assigned id and timestamps."""
    model_config = ConfigDict(populate_by_name=True)

    # _id in MongoDB, exposed as its hex string
    id: str = Field(..., alias="_id")

    # Set by the repository on create; documents written elsewhere may lack them
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, value):
        if isinstance(value, ObjectId):
            return str(value)
        return value
