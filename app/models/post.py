"""
Post model mirroring the hosted `posts` table.
"""

from typing import Optional, List, TYPE_CHECKING
import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime

if TYPE_CHECKING:
    from app.models.answer import Answer


class Post(SQLModel, table=True):
    __tablename__ = "posts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: Optional[uuid.UUID] = Field(default=None, index=True)
    title: str = Field(..., max_length=200)
    description: str = Field(..., max_length=1000)
    category: str = Field(..., index=True)
    likes: int = Field(default=0)
    dislikes: int = Field(default=0)
    image_url: Optional[str] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )

    answers: List["Answer"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "order_by": "Answer.created_at",
            "cascade": "all, delete-orphan",
        }
    )
