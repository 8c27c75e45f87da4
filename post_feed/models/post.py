"""
Post Models

Remote-authored feed posts and the user-supplied draft used to create one.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class AuthorSummary(BaseModel):
    """Denormalized author profile embedded in every post."""
    username: str = Field(..., description="Author display name")
    avatar_url: Optional[str] = Field(None, description="Avatar image URL")

    model_config = ConfigDict(frozen=True, extra="ignore")


class FeedItem(BaseModel):
    """
    A post as materialized by the remote store.

    Identifier, timestamp, counters and author summary are assigned
    remotely. Instances are frozen: the cache only moves them around.
    """
    id: str = Field(..., description="Unique post ID assigned by the store")
    content: str = Field(..., description="Post body")
    image_url: Optional[str] = Field(None, description="Attached media URL")

    # Metrics
    odds: float = Field(default=0.0)
    confidence: float = Field(default=0.0)
    likes: int = Field(default=0)
    comments: int = Field(default=0)
    shares: int = Field(default=0)

    created_at: datetime = Field(..., description="Creation timestamp")
    user: AuthorSummary

    model_config = ConfigDict(frozen=True, extra="ignore")


class PostDraft(BaseModel):
    """User-supplied fields for a new post."""
    content: str = Field(..., description="Post body")
    image_url: Optional[str] = Field(None, description="Attached media URL")
    odds: float = Field(..., description="Quoted odds")
    confidence: float = Field(..., description="Author confidence")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value

    def to_record(self, author_id: str) -> dict:
        """Insert payload for the posts table."""
        return {**self.model_dump(), "user_id": author_id}
