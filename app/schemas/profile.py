from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from app.schemas.answer import UserAnswerRead
from app.schemas.post import PostFeed


class ProfileRead(BaseModel):
    user_id: UUID
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    display_name: str = Field(..., max_length=100)

    @field_validator("display_name", mode="before")
    @classmethod
    def validate_display_name(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Display name cannot be empty.")
        return v.strip()


class ProfileStats(BaseModel):
    total_posts: int = 0
    total_answers: int = 0
    total_likes_received: int = 0


class ProfilePage(BaseModel):
    profile: Optional[ProfileRead] = None
    stats: ProfileStats
    feed: PostFeed
    answers: List[UserAnswerRead] = Field(default_factory=list)


class AvatarUploadResponse(BaseModel):
    avatar_url: str
    profile: ProfileRead
