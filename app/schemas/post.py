"""
Pydantic schemas for post data validation and serialization.
Decouples the hosted table rows from what the API returns.
"""

from datetime import datetime
from typing import Optional, List, Dict
from uuid import UUID

from pydantic import BaseModel, Field, field_validator
from app.schemas.enums import Category, InteractionType

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields."


def require_text(value):
    """Trim a submitted string and reject it when nothing is left."""
    if value is None:
        raise ValueError(REQUIRED_FIELDS_MESSAGE)
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError(REQUIRED_FIELDS_MESSAGE)
    return value


class PostCreate(BaseModel):
    """Schema for post creation requests"""
    title: str = Field(..., max_length=200)
    description: str = Field(..., max_length=1000)
    category: Category
    image_url: Optional[str] = Field(None, description="Public URL returned by /media/post-image")

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def validate_required(cls, v):
        return require_text(v)

    @field_validator("image_url", mode="before")
    @classmethod
    def blank_image_to_none(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v


class PostUpdate(BaseModel):
    """Schema for post edits; only title, description and category can change"""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    category: Optional[Category] = None

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def validate_submitted(cls, v):
        if v is None:
            return v
        return require_text(v)


class AnswerRead(BaseModel):
    id: UUID
    post_id: UUID
    content: str
    likes: int = 0
    dislikes: int = 0
    created_at: datetime
    author_name: Optional[str] = None
    author_avatar: Optional[str] = None

    class Config:
        from_attributes = True


class PostRead(BaseModel):
    """Post card as shown in feeds"""
    id: UUID
    title: str
    description: str
    category: str
    likes: int = 0
    dislikes: int = 0
    image_url: Optional[str] = None
    created_at: datetime
    author_name: Optional[str] = None
    author_avatar: Optional[str] = None
    answers: List[AnswerRead] = Field(default_factory=list)

    class Config:
        from_attributes = True


InteractionMap = Dict[str, Optional[InteractionType]]


class PostFeed(BaseModel):
    """A collection of posts plus what the current user did to them"""
    posts: List[PostRead] = Field(default_factory=list)
    interactions: InteractionMap = Field(default_factory=dict)
    answer_interactions: InteractionMap = Field(default_factory=dict)
    query: Optional[str] = None


class Notice(BaseModel):
    """Short user-facing notification attached to a mutation result"""
    title: str
    description: Optional[str] = None


class FeedUpdate(BaseModel):
    notice: Notice
    feed: PostFeed
