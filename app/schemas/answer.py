from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class AnswerCreate(BaseModel):
    content: str = Field(..., max_length=1000)

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Please write an answer before posting.")
        return v.strip()


class AnsweredPost(BaseModel):
    id: Optional[UUID] = None
    title: str = "Unknown Post"


class UserAnswerRead(BaseModel):
    """An answer listed on its author's profile, with the post it belongs to"""
    id: UUID
    content: str
    likes: int = 0
    dislikes: int = 0
    created_at: datetime
    post: AnsweredPost
